"""Tests for the institution, criteria and lead models."""

import pytest
from pydantic import ValidationError

from leadscope.core.models import (
    Institution,
    InstitutionKind,
    Lead,
    LeadStatus,
    Override,
    ScoreResult,
    SearchCriteria,
    SourceSystem,
)


def institution(**overrides):
    fields = {
        "id": "cu_1",
        "name": "Example Credit Union",
        "kind": InstitutionKind.CREDIT_UNION,
        "state": "VA",
        "assets_usd": 2_000_000_000,
        "source_system": SourceSystem.NCUA,
    }
    fields.update(overrides)
    return Institution(**fields)


class TestSourceSystem:
    def test_prefix_and_kind(self):
        assert SourceSystem.FDIC.id_prefix == "bank"
        assert SourceSystem.NCUA.id_prefix == "cu"
        assert SourceSystem.FDIC.kind is InstitutionKind.COMMUNITY_BANK
        assert institution().is_credit_union


class TestSearchCriteria:
    def test_state_normalized(self):
        assert SearchCriteria(state=" va ").state == "VA"
        assert SearchCriteria(state="  ").state is None

    @pytest.mark.parametrize("state", ["Virginia", "V1", "X"])
    def test_invalid_state(self, state):
        with pytest.raises(ValidationError):
            SearchCriteria(state=state)

    def test_asset_range_must_be_ordered(self):
        with pytest.raises(ValidationError):
            SearchCriteria(min_assets=10, max_assets=5)

    @pytest.mark.parametrize("kwargs", [{"limit": 0}, {"offset": -1}, {"min_assets": -1}])
    def test_invalid_bounds(self, kwargs):
        with pytest.raises(ValidationError):
            SearchCriteria(**kwargs)

    def test_matches(self):
        target = institution()
        assert SearchCriteria().matches(target)
        assert SearchCriteria(state="va", min_assets=2_000_000_000, name="example").matches(target)
        assert not SearchCriteria(state="NC").matches(target)
        assert not SearchCriteria(max_assets=1_999_999_999).matches(target)
        assert not SearchCriteria(name="federal").matches(target)


class TestOverride:
    def test_accepts_camel_and_snake_keys(self):
        assert Override.model_validate({"lastContact": "Monday"}).last_contact == "Monday"
        assert Override(last_contact="Monday").to_payload() == {"lastContact": "Monday"}

    def test_unknown_fields_ignored(self):
        assert Override.model_validate({"notes": "x", "favouriteColour": "blue"}).changes() == {"notes": "x"}

    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            Override(score=101)

    def test_merged_prefers_newer_fields(self):
        merged = Override(contact="Ada", status=LeadStatus.NEW).merged(Override(status=LeadStatus.WON))
        assert merged.changes() == {"contact": "Ada", "status": LeadStatus.WON}

    def test_is_empty(self):
        assert Override().is_empty()
        assert not Override(notes="").is_empty()


class TestLead:
    @pytest.fixture
    def lead(self):
        return Lead.from_institution(institution(), ScoreResult(score=77, recommended_products=("Loan Analytics",)))

    def test_from_institution(self, lead):
        assert lead.score == 77
        assert lead.status is LeadStatus.NEW
        assert lead.last_contact == "Never"
        assert lead.contact == ""

    def test_apply_override_replaces_only_set_fields(self, lead):
        updated = lead.apply_override(Override(status=LeadStatus.QUALIFIED))

        assert updated.status is LeadStatus.QUALIFIED
        assert updated.model_dump(exclude={"status"}) == lead.model_dump(exclude={"status"})

    def test_apply_override_is_idempotent(self, lead):
        override = Override(score=90, notes="met at conference")
        once = lead.apply_override(override)
        assert once.apply_override(override) == once

    def test_empty_override_returns_same_lead(self, lead):
        assert lead.apply_override(Override()) is lead
        assert lead.apply_override(None) is lead

    def test_payload_uses_camel_case(self, lead):
        payload = lead.to_payload()
        assert payload["assetsUsd"] == 2_000_000_000
        assert payload["recommendedProducts"] == ["Loan Analytics"]
        assert payload["kind"] == "Credit Union"

    def test_score_result_caps_products(self):
        with pytest.raises(ValidationError):
            ScoreResult(score=60, recommended_products=("a", "b", "c", "d"))
