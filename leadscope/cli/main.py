"""Main entry point for the leadscope command line interface."""

from __future__ import annotations

from pathlib import Path

import typer

from leadscope.core.config import ConfigManager
from leadscope.core.logging import configure_logging

from .formatters import create_formatter
from .leads import register as register_lead_commands


def create_app() -> typer.Typer:
    """Create a Typer application instance for leadscope."""

    app = typer.Typer(add_completion=False, help="leadscope command line interface")

    @app.callback()
    def main(
        ctx: typer.Context,
        format: str = typer.Option(
            "table",
            "--format",
            "-f",
            help="Output format (table or jsonl).",
            show_default=True,
        ),
        output: Path | None = typer.Option(
            None,
            "--output",
            "-o",
            help="Write output to a file instead of stdout.",
        ),
        config: Path | None = typer.Option(
            None,
            "--config",
            "-c",
            help="TOML configuration file.",
        ),
        log_level: str = typer.Option(
            "WARNING",
            "--log-level",
            help="Log level for the JSON logs written to stderr.",
            show_default=True,
        ),
        no_color: bool = typer.Option(
            False,
            "--no-color",
            help="Disable colorized output for table format.",
        ),
    ) -> None:
        ctx.ensure_object(dict)
        normalized_format = format.strip().lower()
        try:
            create_formatter(normalized_format, no_color=no_color)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

        ctx.obj.update(
            {
                "format": normalized_format,
                "output_path": output,
                "config_path": config,
                "no_color": no_color,
            }
        )
        configure_logging(level=log_level.upper())

    register_lead_commands(app)

    @app.command("serve")
    def serve_command(
        ctx: typer.Context,
        host: str | None = typer.Option(None, "--host", help="Bind address."),
        port: int | None = typer.Option(None, "--port", help="Bind port."),
        reload: bool | None = typer.Option(None, "--reload/--no-reload", help="Auto-reload on code changes."),
    ) -> None:
        """Run the leadscope web service."""

        from leadscope.web.main import run_server

        config_path = (ctx.obj or {}).get("config_path")
        web = ConfigManager(config_path).get_config().web
        run_server(
            host=host or web.host,
            port=port or web.port,
            reload=web.reload if reload is None else reload,
        )

    return app


app = create_app()
