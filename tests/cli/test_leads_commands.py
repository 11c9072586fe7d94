from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from leadscope.cli import leads as leads_module
from leadscope.cli.constants import NOT_FOUND_EXIT_CODE, VALIDATION_EXIT_CODE
from leadscope.cli.main import create_app
from leadscope.core.client import LeadscopeClient
from leadscope.core.logging import logger
from leadscope.core.models.institution import SourceSystem
from leadscope.core.overrides import LocalOverrideStore

from support import build_client, failing, fdic_record, ncua_record

BANKS = [fdic_record("628", "Harbor Bank", 1_500_000, state="MD")]
CREDIT_UNIONS = [
    ncua_record("68413", "Navy Federal Credit Union", 165_000_000, no_of_members="13000000", roa="1.1"),
    ncua_record("60936", "Coastal Credit Union", 4_800_000, state="NC"),
]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger.remove()


@pytest.fixture
def install_client(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Route every command to a client backed by canned tiers and a temp override file."""

    store_path = tmp_path / "overrides.duckdb"

    def install(bank_tier=None):
        def factory(config_path=None) -> LeadscopeClient:
            return build_client(
                LocalOverrideStore(str(store_path)),
                banks=BANKS,
                credit_unions=CREDIT_UNIONS,
                bank_tier=bank_tier,
            )

        monkeypatch.setattr(leads_module, "get_client", factory)

    install()
    return install


def _jsonl(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def test_list_jsonl_output(runner: CliRunner, install_client, tmp_path: Path) -> None:
    out = tmp_path / "leads.jsonl"
    result = runner.invoke(create_app(), ["--format", "jsonl", "--output", str(out), "leads", "list"])

    assert result.exit_code == 0, result.output
    rows = _jsonl(out)
    assert [row["id"] for row in rows] == ["cu_68413", "cu_60936", "bank_628"]
    assert rows[0]["assets"] == 165_000_000_000
    assert rows[0]["products"][-1] == "Member Insights"


def test_list_table_output(runner: CliRunner, install_client) -> None:
    result = runner.invoke(create_app(), ["leads", "list", "--page-size", "2"])

    assert result.exit_code == 0, result.output
    assert "Page 1/2 (3 leads)" in result.output


def test_states_table_output(runner: CliRunner, install_client) -> None:
    result = runner.invoke(create_app(), ["--no-color", "leads", "states"])

    assert result.exit_code == 0, result.output
    assert "state" in result.output
    assert "NC" in result.output


def test_list_filters(runner: CliRunner, install_client, tmp_path: Path) -> None:
    out = tmp_path / "leads.jsonl"
    result = runner.invoke(
        create_app(),
        ["-f", "jsonl", "-o", str(out), "leads", "list", "--type", "credit-union", "--asset-size", "1b-5b"],
    )

    assert result.exit_code == 0, result.output
    assert [row["id"] for row in _jsonl(out)] == ["cu_60936"]


def test_list_reports_fallback(runner: CliRunner, install_client) -> None:
    install_client(bank_tier=failing("fdic", SourceSystem.FDIC))
    result = runner.invoke(create_app(), ["leads", "list", "--limit", "1"])

    assert result.exit_code == 0, result.output
    assert "served from fallback data" in result.output


def test_list_rejects_invalid_state(runner: CliRunner, install_client) -> None:
    result = runner.invoke(create_app(), ["leads", "list", "--state", "Virginia"])

    assert result.exit_code == VALIDATION_EXIT_CODE
    assert "VALIDATION_ERROR" in result.output


def test_list_rejects_unknown_asset_size(runner: CliRunner, install_client) -> None:
    result = runner.invoke(create_app(), ["leads", "list", "--asset-size", "enormous"])

    assert result.exit_code == VALIDATION_EXIT_CODE


def test_show_jsonl(runner: CliRunner, install_client, tmp_path: Path) -> None:
    out = tmp_path / "lead.jsonl"
    result = runner.invoke(create_app(), ["-f", "jsonl", "-o", str(out), "leads", "show", "bank_628"])

    assert result.exit_code == 0, result.output
    (payload,) = _jsonl(out)
    assert payload["name"] == "Harbor Bank"
    assert payload["assetsUsd"] == 1_500_000_000
    assert payload["lastContact"] == "Never"


def test_show_unknown_lead(runner: CliRunner, install_client) -> None:
    result = runner.invoke(create_app(), ["leads", "show", "cu_0"])

    assert result.exit_code == NOT_FOUND_EXIT_CODE
    assert "LEAD_NOT_FOUND" in result.output


def test_update_persists_for_later_commands(runner: CliRunner, install_client, tmp_path: Path) -> None:
    app = create_app()
    out = tmp_path / "update.jsonl"
    result = runner.invoke(
        app,
        ["-f", "jsonl", "-o", str(out), "leads", "update", "bank_628", "--status", "Qualified", "--notes", "intro call"],
    )
    assert result.exit_code == 0, result.output
    assert _jsonl(out) == [{"id": "bank_628", "status": "qualified", "notes": "intro call"}]

    listed = tmp_path / "qualified.jsonl"
    result = runner.invoke(app, ["-f", "jsonl", "-o", str(listed), "leads", "list", "--status", "qualified"])
    assert result.exit_code == 0, result.output
    rows = _jsonl(listed)
    assert [row["id"] for row in rows] == ["bank_628"]
    assert rows[0]["status"] == "qualified"


def test_update_without_fields(runner: CliRunner, install_client) -> None:
    result = runner.invoke(create_app(), ["leads", "update", "bank_628"])

    assert result.exit_code == VALIDATION_EXIT_CODE


def test_update_rejects_unknown_status(runner: CliRunner, install_client) -> None:
    result = runner.invoke(create_app(), ["leads", "update", "bank_628", "--status", "maybe"])

    assert result.exit_code != 0
    assert "Unsupported status" in result.output


def test_context_with_message(runner: CliRunner, install_client, tmp_path: Path) -> None:
    out = tmp_path / "context.json"
    result = runner.invoke(create_app(), ["-o", str(out), "leads", "context", "cu_60936", "-m", "What next?"])

    assert result.exit_code == 0, result.output
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["message"] == "What next?"
    assert payload["leadContext"]["name"] == "Coastal Credit Union"
    assert payload["leadContext"]["type"] == "Credit Union"


def test_states(runner: CliRunner, install_client, tmp_path: Path) -> None:
    out = tmp_path / "states.jsonl"
    result = runner.invoke(create_app(), ["-f", "jsonl", "-o", str(out), "leads", "states"])

    assert result.exit_code == 0, result.output
    assert _jsonl(out) == [
        {"state": "MD", "leads": 1},
        {"state": "NC", "leads": 1},
        {"state": "VA", "leads": 1},
    ]


def test_invalid_format(runner: CliRunner, install_client) -> None:
    result = runner.invoke(create_app(), ["--format", "xml", "leads", "states"])

    assert result.exit_code == 2


def test_serve_uses_configured_binding(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEADSCOPE_PORT", "9100")
    with patch("leadscope.web.main.run_server") as run_server:
        result = runner.invoke(create_app(), ["serve", "--host", "0.0.0.0"])

    assert result.exit_code == 0, result.output
    run_server.assert_called_once_with(host="0.0.0.0", port=9100, reload=False)
