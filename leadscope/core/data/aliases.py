"""Ordered field alias tables per source.

Each upstream has published its data under several naming conventions over
time (``total_assets``, ``totalassets``, ``TOTAL_ASSETS`` ...). The tables
below list, per canonical attribute, the raw keys to probe in priority order,
most specific or modern alias first. They are data, not logic: the
normalizer is the only consumer.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from leadscope.core.models.institution import SourceSystem


@dataclass(frozen=True)
class AliasTable:
    """Raw key aliases for one source."""

    source_system: SourceSystem
    name: tuple[str, ...]
    regulatory_id: tuple[str, ...]
    city: tuple[str, ...]
    state: tuple[str, ...]
    assets: tuple[str, ...]
    deposits: tuple[str, ...]
    roa: tuple[str, ...]
    members: tuple[str, ...] = ()
    branches: tuple[str, ...] = ()
    website: tuple[str, ...] = ()


FDIC_ALIASES = AliasTable(
    source_system=SourceSystem.FDIC,
    name=("NAME", "name"),
    regulatory_id=("CERT", "cert"),
    city=("CITY", "city"),
    state=("STALP", "stalp", "state", "STATE"),
    assets=("ASSET", "asset"),
    deposits=("DEP", "dep"),
    roa=("ROA", "roa"),
    branches=("OFFNUM", "offnum"),
    website=("WEBADDR", "webaddr"),
)

NCUA_ALIASES = AliasTable(
    source_system=SourceSystem.NCUA,
    name=("cu_name", "cuname", "name", "CU_NAME"),
    regulatory_id=("cu_number", "cunumber", "charter_number", "CU_NUMBER"),
    city=("city", "physical_address_city", "CITY"),
    state=("state", "physical_address_state_code", "STATE"),
    assets=("total_assets", "totalassets", "assets", "TOTAL_ASSETS"),
    deposits=("total_shares", "shares", "TOTAL_SHARES"),
    roa=("roa", "return_on_assets", "ROA"),
    members=("no_of_members", "members", "number_of_members", "NO_OF_MEMBERS"),
)

ALIAS_TABLES: Mapping[SourceSystem, AliasTable] = MappingProxyType(
    {
        SourceSystem.FDIC: FDIC_ALIASES,
        SourceSystem.NCUA: NCUA_ALIASES,
    }
)


def get_alias_table(source_system: SourceSystem) -> AliasTable:
    return ALIAS_TABLES[source_system]


__all__ = ["AliasTable", "FDIC_ALIASES", "NCUA_ALIASES", "ALIAS_TABLES", "get_alias_table"]
