# 📦 engine/facets.py
# ─────────────────────────────
# Dropdown options and dashboard counters over a house collection

from collections import Counter

from schemas.schemas import DAWAT_KEYS, HouseSummary


def streets(houses):
    """Sorted unique street names."""
    return sorted({h.street for h in houses if h.street})


def occupations(houses):
    """Sorted unique member occupations."""
    return sorted({m.occupation for h in houses for m in h.members if m.occupation})


def summarize(houses):
    """Houses, members, and how many members have been out per dawat duration."""
    dawat = Counter({key.value: 0 for key in DAWAT_KEYS})
    total_members = 0
    for house in houses:
        for member in house.members:
            total_members += 1
            for key in DAWAT_KEYS:
                if member.dawat_counts.get(key) > 0:
                    dawat[key.value] += 1

    return HouseSummary(
        total_houses=len(houses),
        total_members=total_members,
        dawat=dict(dawat),
        active_dawat=sum(dawat.values()),
    )
