"""Tests for the tier fallback orchestrator."""

import pytest

from leadscope.core.data.fallback import FallbackOrchestrator, OrchestratorState, TierOutcome
from leadscope.core.data.providers import EmbeddedSampleAdapter
from leadscope.core.exceptions import MalformedPayloadError
from leadscope.core.models.institution import SourceSystem
from leadscope.core.models.query import SearchCriteria

from support import StaticAdapter, failing, ncua_record

CU = SourceSystem.NCUA


class TestFallbackOrchestrator:
    @pytest.mark.asyncio
    async def test_first_tier_with_records_wins(self):
        proxy = StaticAdapter("proxy", CU, [ncua_record("1", "Proxy CU", 10)])
        endpoint = StaticAdapter("endpoint", CU, [ncua_record("2", "Endpoint CU", 10)])
        orchestrator = FallbackOrchestrator(CU, [proxy, endpoint, EmbeddedSampleAdapter(CU)])

        result = await orchestrator.fetch(SearchCriteria())

        assert result.state is OrchestratorState.SUCCESS
        assert result.tier == "proxy"
        assert [record["cu_name"] for record in result.records] == ["Proxy CU"]
        assert endpoint.calls == []
        assert not result.degraded
        assert result.failure is None

    @pytest.mark.asyncio
    async def test_error_and_empty_tiers_advance(self):
        tiers = [
            failing("proxy", CU),
            StaticAdapter("endpoint-a", CU, []),
            StaticAdapter("endpoint-b", CU, error=MalformedPayloadError("bad", provider_name="endpoint-b")),
            StaticAdapter("endpoint-c", CU, [ncua_record("3", "Mirror CU", 10)]),
            EmbeddedSampleAdapter(CU),
        ]
        result = await FallbackOrchestrator(CU, tiers).fetch(SearchCriteria())

        assert result.state is OrchestratorState.SUCCESS
        assert result.tier == "endpoint-c"
        assert [attempt.outcome for attempt in result.attempts] == [
            TierOutcome.ERROR,
            TierOutcome.EMPTY,
            TierOutcome.ERROR,
            TierOutcome.OK,
        ]
        assert result.attempts[0].error_code == "NETWORK_ERROR"
        assert result.attempts[2].error_code == "MALFORMED_PAYLOAD"
        assert result.degraded

    @pytest.mark.asyncio
    async def test_every_tier_attempted_exactly_once(self):
        tiers = [failing("a", CU), failing("b", CU), EmbeddedSampleAdapter(CU)]
        await FallbackOrchestrator(CU, tiers).fetch(SearchCriteria())

        assert len(tiers[0].calls) == 1
        assert len(tiers[1].calls) == 1

    @pytest.mark.asyncio
    async def test_total_outage_serves_embedded_sample(self):
        tiers = [failing("a", CU), failing("b", CU), EmbeddedSampleAdapter(CU)]
        result = await FallbackOrchestrator(CU, tiers).fetch(SearchCriteria())

        assert result.state is OrchestratorState.SUCCESS
        assert result.tier == "embedded-sample"
        assert result.records
        assert result.degraded

    @pytest.mark.asyncio
    async def test_exhausted_when_terminal_tier_is_empty(self):
        tiers = [failing("a", CU), StaticAdapter("last", CU, [])]
        result = await FallbackOrchestrator(CU, tiers).fetch(SearchCriteria())

        assert result.state is OrchestratorState.EXHAUSTED
        assert result.records == ()
        assert result.failure is not None
        assert result.failure.error_code == "ALL_TIERS_FAILED"
        assert [tier["tier"] for tier in result.failure.details["failed_tiers"]] == ["a", "last"]

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self):
        tiers = [StaticAdapter("buggy", CU, error=KeyError("boom")), EmbeddedSampleAdapter(CU)]
        with pytest.raises(KeyError):
            await FallbackOrchestrator(CU, tiers).fetch(SearchCriteria())

    @pytest.mark.asyncio
    async def test_attempts_recorded_in_metrics(self, isolated_metrics):
        tiers = [failing("a", CU), EmbeddedSampleAdapter(CU)]
        await FallbackOrchestrator(CU, tiers).fetch(SearchCriteria())

        registry = isolated_metrics.registry
        assert registry.get_sample_value(
            "leadscope_tier_attempts_total", {"source": "NCUA", "tier": "a", "outcome": "error"}
        ) == 1.0
        assert registry.get_sample_value(
            "leadscope_tier_attempts_total", {"source": "NCUA", "tier": "embedded-sample", "outcome": "ok"}
        ) == 1.0

    def test_requires_tiers(self):
        with pytest.raises(ValueError):
            FallbackOrchestrator(CU, [])

    def test_rejects_tiers_for_another_source(self):
        with pytest.raises(ValueError, match="do not serve"):
            FallbackOrchestrator(CU, [EmbeddedSampleAdapter(SourceSystem.FDIC)])
