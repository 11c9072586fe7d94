"""Embedded snapshot used when every live tier of a source is unavailable.

Rows are kept in each upstream's raw shape (amounts in thousands) so they go
through the same normalizer as live data. Figures are approximate.
"""

from __future__ import annotations

# cu_number, cu_name, city, state, total_assets, no_of_members, total_shares, roa
_CREDIT_UNIONS = [
    ("68413", "Navy Federal Credit Union", "Vienna", "VA", 165000000, 13000000, 140000000, 1.1),
    ("60936", "State Employees Credit Union", "Raleigh", "NC", 54000000, 2700000, 46000000, 0.9),
    ("68771", "Pentagon Federal Credit Union", "McLean", "VA", 36000000, 2900000, 30000000, 0.8),
    ("67757", "Boeing Employees Credit Union", "Tukwila", "WA", 28000000, 1400000, 24000000, 0.95),
    ("61577", "SchoolsFirst Federal Credit Union", "Santa Ana", "CA", 28000000, 1200000, 24000000, 0.85),
    ("68547", "Golden 1 Credit Union", "Sacramento", "CA", 21000000, 1100000, 18000000, 0.75),
    ("67905", "Alliant Credit Union", "Chicago", "IL", 19000000, 800000, 16000000, 0.88),
    ("68302", "America First Credit Union", "Ogden", "UT", 18000000, 1300000, 15000000, 0.86),
    ("67776", "First Tech Federal Credit Union", "San Jose", "CA", 17000000, 700000, 14000000, 0.92),
    ("68149", "Suncoast Credit Union", "Tampa", "FL", 17000000, 1000000, 14000000, 0.82),
    ("60987", "Randolph-Brooks Federal Credit Union", "Live Oak", "TX", 16500000, 1100000, 14000000, 0.84),
    ("68234", "Mountain America Credit Union", "Sandy", "UT", 16000000, 1150000, 13500000, 0.88),
    ("67911", "VyStar Credit Union", "Jacksonville", "FL", 13500000, 890000, 11000000, 0.78),
    ("68422", "Digital Federal Credit Union", "Marlborough", "MA", 13000000, 1000000, 11000000, 0.77),
    ("67890", "Lake Michigan Credit Union", "Grand Rapids", "MI", 12500000, 550000, 10500000, 0.79),
    ("60945", "Bethpage Federal Credit Union", "Bethpage", "NY", 12000000, 450000, 10000000, 0.72),
    ("67543", "Redstone Federal Credit Union", "Huntsville", "AL", 9500000, 750000, 8000000, 0.76),
    ("68901", "Patelco Credit Union", "Dublin", "CA", 9000000, 450000, 7600000, 0.75),
    ("67584", "Space Coast Credit Union", "Melbourne", "FL", 8200000, 520000, 7000000, 0.81),
    ("68789", "Veridian Credit Union", "Waterloo", "IA", 7200000, 285000, 6100000, 0.74),
    ("68123", "Coastal Credit Union", "Raleigh", "NC", 4800000, 320000, 4000000, 0.71),
    ("67321", "Affinity Federal Credit Union", "Basking Ridge", "NJ", 4500000, 260000, 3800000, 0.73),
    ("61234", "Canvas Credit Union", "Lone Tree", "CO", 4200000, 280000, 3500000, 0.69),
    ("60543", "University Credit Union", "Los Angeles", "CA", 3500000, 120000, 2950000, 0.67),
    ("67654", "Arizona Federal Credit Union", "Phoenix", "AZ", 3200000, 180000, 2700000, 0.68),
    ("67123", "Premier America Credit Union", "Chatsworth", "CA", 3100000, 115000, 2600000, 0.66),
    ("61456", "Firefighters First Credit Union", "Los Angeles", "CA", 2800000, 145000, 2350000, 0.71),
    ("60876", "Tropical Financial Credit Union", "Miramar", "FL", 1100000, 68000, 950000, 0.65),
    ("68567", "Jax Federal Credit Union", "Jacksonville", "FL", 950000, 55000, 800000, 0.62),
]

# CERT, NAME, CITY, STALP, ASSET, DEP, ROA, OFFNUM
_BANKS = [
    ("90001", "Heartland Community Bank", "Des Moines", "IA", 2400000, 2050000, 1.12, 18),
    ("90002", "Blue Ridge Savings Bank", "Roanoke", "VA", 1350000, 1150000, 0.98, 12),
    ("90003", "Prairie State Bank & Trust", "Springfield", "IL", 890000, 760000, 1.31, 9),
    ("90004", "Gulf Coast Community Bank", "Mobile", "AL", 620000, 540000, 0.87, 7),
    ("90005", "Cascade Valley Bank", "Wenatchee", "WA", 455000, 400000, 1.54, 5),
    ("90006", "Lakeshore Federal Savings", "Muskegon", "MI", 310000, 270000, 0.64, 4),
    ("90007", "Red River Bank of Commerce", "Shreveport", "LA", 5400000, 4600000, 1.21, 31),
    ("90008", "Piedmont Farmers Bank", "Salisbury", "NC", 180000, 158000, 0.45, 3),
    ("90009", "High Plains National Bank", "Amarillo", "TX", 95000, 83000, 0.38, 2),
    ("90010", "Green Mountain Bank", "Rutland", "VT", 1050000, 910000, 1.02, 10),
]


def credit_union_records() -> list[dict[str, object]]:
    """Return the credit union snapshot as NCUA-shaped raw records."""

    return [
        {
            "cu_number": number,
            "cu_name": name,
            "city": city,
            "state": state,
            "total_assets": str(assets),
            "no_of_members": str(members),
            "total_shares": str(shares),
            "roa": str(roa),
        }
        for number, name, city, state, assets, members, shares, roa in _CREDIT_UNIONS
    ]


def bank_records() -> list[dict[str, object]]:
    """Return the bank snapshot as FDIC-shaped raw records."""

    return [
        {
            "CERT": cert,
            "NAME": name,
            "CITY": city,
            "STALP": state,
            "ASSET": assets,
            "DEP": deposits,
            "ROA": roa,
            "OFFNUM": offices,
            "ACTIVE": 1,
        }
        for cert, name, city, state, assets, deposits, roa, offices in _BANKS
    ]


__all__ = ["credit_union_records", "bank_records"]
