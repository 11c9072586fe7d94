"""Map raw records from any tier into canonical ``Institution`` objects.

Parsing and unit coercion live here and nowhere else. Numeric parsing is
best effort: an unparsable field becomes 0 instead of rejecting the record,
since upstream datasets are sparse. A record is rejected only when its name
is empty or its resolved assets are not positive.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from leadscope.core.data.aliases import AliasTable, get_alias_table
from leadscope.core.exceptions import MalformedRecordError
from leadscope.core.logging import get_logger
from leadscope.core.models.institution import Institution, RawRecord, SourceSystem

logger = get_logger(__name__)

THOUSANDS = Decimal(1000)
_ZERO = Decimal(0)
# Far above any reported figure; larger values are treated as unparsable.
MAX_INTEGER_DIGITS = 15


def probe(raw: RawRecord, aliases: Iterable[str]) -> Any:
    """Return the value of the first alias present with a non-blank value."""

    for key in aliases:
        value = raw.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def parse_decimal(value: Any) -> Decimal:
    """Parse a numeric field, falling back to 0.

    Non-finite values and values with more than ``MAX_INTEGER_DIGITS`` integer
    digits also become 0, so later scaling cannot overflow.
    """

    if value is None or isinstance(value, bool):
        return _ZERO
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        number = Decimal(str(value))
    else:
        text = str(value).strip().replace(",", "").replace("$", "")
        try:
            number = Decimal(text)
        except InvalidOperation:
            return _ZERO
    if not number.is_finite() or number.adjusted() >= MAX_INTEGER_DIGITS:
        return _ZERO
    return number


def thousands_to_dollars(value: Any) -> int:
    """Scale an amount reported in thousands to whole dollars."""

    return int((parse_decimal(value) * THOUSANDS).to_integral_value(rounding=ROUND_HALF_UP))


def parse_count(value: Any, default: int = 0) -> int:
    if value is None:
        return default
    return max(int(parse_decimal(value).to_integral_value(rounding=ROUND_HALF_UP)), 0)


def parse_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def synthetic_id_suffix(name: str, city: str, state: str) -> str:
    """Stable id suffix for records that carry no charter or cert number."""

    fingerprint = "|".join(part.strip().lower() for part in (name, city, state))
    return "anon-" + hashlib.sha1(fingerprint.encode("utf-8")).hexdigest()[:10]


def _unwrap(raw: Any) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise MalformedRecordError(
            f"Expected a mapping, got {type(raw).__name__}",
            source_system="unknown",
            reason="not_a_mapping",
        )
    inner = raw.get("data")
    if isinstance(inner, Mapping):
        return inner
    return raw


def normalize_record(raw: RawRecord, source_system: SourceSystem) -> Institution:
    """Normalize one raw record or raise ``MalformedRecordError``."""

    table: AliasTable = get_alias_table(source_system)
    try:
        record = _unwrap(raw)
    except MalformedRecordError as e:
        raise MalformedRecordError(e.message, source_system.value, e.reason) from e

    name = parse_text(probe(record, table.name))
    if not name:
        raise MalformedRecordError("Record has no name", source_system.value, "missing_name")

    assets_usd = thousands_to_dollars(probe(record, table.assets))
    if assets_usd <= 0:
        raise MalformedRecordError(
            f"Record '{name}' has non-positive assets",
            source_system.value,
            "non_positive_assets",
            details={"name": name},
        )

    city = parse_text(probe(record, table.city))
    state = parse_text(probe(record, table.state)).upper()
    regulatory_id = parse_text(probe(record, table.regulatory_id))
    suffix = regulatory_id or synthetic_id_suffix(name, city, state)

    if source_system is SourceSystem.FDIC:
        # OFFNUM counts offices including the main office
        branch_count = parse_count(probe(record, table.branches), default=1)
    else:
        branch_count = parse_count(probe(record, table.branches))

    return Institution(
        id=f"{source_system.id_prefix}_{suffix}",
        name=name,
        kind=source_system.kind,
        city=city,
        state=state,
        assets_usd=assets_usd,
        member_count=parse_count(probe(record, table.members)) if table.members else 0,
        deposits_usd=thousands_to_dollars(probe(record, table.deposits)),
        roa_pct=float(parse_decimal(probe(record, table.roa))),
        branch_count=branch_count,
        regulatory_id=regulatory_id,
        source_system=source_system,
        website=parse_text(probe(record, table.website)),
    )


def normalize(raw: RawRecord, source_system: SourceSystem) -> Institution | None:
    """Normalize one raw record, returning None when it is invalid."""

    try:
        return normalize_record(raw, source_system)
    except MalformedRecordError as e:
        logger.bind(provider=source_system.value, error_code=e.error_code).debug(
            f"Dropping record: {e.message}"
        )
        return None


@dataclass
class NormalizationReport:
    """Outcome of normalizing one batch."""

    source_system: SourceSystem
    institutions: list[Institution] = field(default_factory=list)
    dropped: int = 0


def normalize_batch(records: Iterable[RawRecord], source_system: SourceSystem) -> NormalizationReport:
    """Normalize a batch in source order, counting dropped records."""

    report = NormalizationReport(source_system=source_system)
    for raw in records:
        institution = normalize(raw, source_system)
        if institution is None:
            report.dropped += 1
        else:
            report.institutions.append(institution)
    return report


__all__ = [
    "NormalizationReport",
    "normalize",
    "normalize_batch",
    "normalize_record",
    "parse_count",
    "parse_decimal",
    "probe",
    "synthetic_id_suffix",
    "thousands_to_dollars",
]
