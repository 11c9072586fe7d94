"""Opportunity scoring.

Every table below is evaluated from the largest threshold down and the
first match wins. The minimum achievable score is 55 (base plus the
smallest asset tier), so only the upper bound needs clamping.
"""

from __future__ import annotations

from leadscope.core.models.institution import Institution, InstitutionKind
from leadscope.core.models.lead import MAX_RECOMMENDED_PRODUCTS, ScoreResult

BASE_SCORE = 50
MAX_SCORE = 100

ASSET_ADJUSTMENTS: tuple[tuple[int, int], ...] = (
    (10_000_000_000, 30),
    (5_000_000_000, 25),
    (1_000_000_000, 20),
    (500_000_000, 15),
    (100_000_000, 10),
)
ASSET_FLOOR_ADJUSTMENT = 5

MEMBER_ADJUSTMENTS: tuple[tuple[int, int], ...] = (
    (500_000, 10),
    (100_000, 7),
    (50_000, 5),
)
MEMBER_FLOOR_ADJUSTMENT = 2

ROA_ADJUSTMENTS: tuple[tuple[float, int], ...] = (
    (1.5, 10),
    (1.0, 7),
    (0.5, 4),
)

MEMBER_INSIGHTS = "Member Insights"
PRODUCT_TIERS: tuple[tuple[int, tuple[str, ...]], ...] = (
    (5_000_000_000, ("Performance Management", "Regulatory Analytics")),
    (1_000_000_000, ("Loan Analytics", "Marketing Solutions")),
)
DEFAULT_PRODUCTS: tuple[str, ...] = ("Essential Analytics",)


def _first_match(value: float, table: tuple[tuple[float, int], ...], default: int) -> int:
    for threshold, points in table:
        if value >= threshold:
            return points
    return default


def asset_adjustment(assets_usd: int) -> int:
    return _first_match(assets_usd, ASSET_ADJUSTMENTS, ASSET_FLOOR_ADJUSTMENT)


def member_adjustment(member_count: int) -> int:
    # Banks report no members and get no adjustment at all.
    if member_count <= 0:
        return 0
    return _first_match(member_count, MEMBER_ADJUSTMENTS, MEMBER_FLOOR_ADJUSTMENT)


def roa_adjustment(roa_pct: float) -> int:
    return _first_match(roa_pct, ROA_ADJUSTMENTS, 0)


def recommend_products(assets_usd: int, *, is_credit_union: bool) -> tuple[str, ...]:
    """Asset-tier products first, then member insights for credit unions."""

    products = DEFAULT_PRODUCTS
    for threshold, tier_products in PRODUCT_TIERS:
        if assets_usd >= threshold:
            products = tier_products
            break
    if is_credit_union:
        products = (*products, MEMBER_INSIGHTS)
    return tuple(dict.fromkeys(products))[:MAX_RECOMMENDED_PRODUCTS]


def score(
    assets_usd: int,
    member_count: int,
    roa_pct: float,
    *,
    kind: InstitutionKind | None = None,
) -> ScoreResult:
    """Score one institution.

    Args:
        assets_usd: Total assets in whole dollars
        member_count: Members for credit unions, 0 for banks
        roa_pct: Return on assets in percent
        kind: Institution type; credit unions get member insights

    Returns:
        ScoreResult with a score in [55, 100]
    """

    total = BASE_SCORE + asset_adjustment(assets_usd) + member_adjustment(member_count) + roa_adjustment(roa_pct)
    return ScoreResult(
        score=min(total, MAX_SCORE),
        recommended_products=recommend_products(
            assets_usd, is_credit_union=kind is InstitutionKind.CREDIT_UNION
        ),
    )


def score_institution(institution: Institution) -> ScoreResult:
    return score(
        institution.assets_usd,
        institution.member_count,
        institution.roa_pct,
        kind=institution.kind,
    )


__all__ = [
    "BASE_SCORE",
    "MAX_SCORE",
    "MEMBER_INSIGHTS",
    "asset_adjustment",
    "member_adjustment",
    "recommend_products",
    "roa_adjustment",
    "score",
    "score_institution",
]
