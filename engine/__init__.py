# engine/__init__.py
# ─────────────────────────────
# Init file for the directory filter engine package
# Exposes core components

from .filters import matches_all
from .matcher import (
    apply_combined_filters,
    apply_house_filters,
    apply_member_filters,
    coerce_houses,
    is_house_level_hit,
)
from .facets import occupations, streets, summarize

__all__ = [
    "matches_all",
    "apply_combined_filters",
    "apply_house_filters",
    "apply_member_filters",
    "coerce_houses",
    "is_house_level_hit",
    "occupations",
    "streets",
    "summarize",
]
