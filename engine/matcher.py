# 📦 engine/matcher.py
# ─────────────────────────────
# House / member filtering passes for the community directory

from collections.abc import Mapping

import structlog
from pydantic import ValidationError

from engine import filters
from schemas.schemas import FilterCriteria, House
from utils.normalize import is_set, norm

log = structlog.get_logger()


def apply_member_filters(houses, criteria):
    """Filter members inside every house by all active criteria.

    Houses left without members are dropped, unless no criterion is set at
    all, in which case every house comes back (empty ones included).
    """
    safe_houses = coerce_houses(houses)
    criteria = _coerce_criteria(criteria)
    has_active_filters = criteria.is_active()

    result = []
    for house in safe_houses:
        members = [m for m in house.members if filters.matches_all(m, criteria, house)]
        if members or not has_active_filters:
            result.append(house.model_copy(update={"members": members}))

    log.debug("Member filters applied", houses_in=len(safe_houses), houses_out=len(result))
    return result


def is_house_level_hit(house, term):
    """True when the term names this house by number prefix or street."""
    if not is_set(term):
        return False
    term = str(term).strip()
    if house.number and house.number.startswith(term):
        return True
    return bool(house.street) and norm(term) in norm(house.street)


def apply_house_filters(houses, criteria):
    """Keep only houses the search term identifies; members untouched."""
    safe_houses = coerce_houses(houses)
    term = _coerce_criteria(criteria).q

    if not is_set(term):
        return [h.model_copy(update={"members": list(h.members)}) for h in safe_houses]

    return [
        h.model_copy(update={"members": list(h.members)})
        for h in safe_houses
        if is_house_level_hit(h, term)
    ]


def apply_combined_filters(houses, criteria):
    """Search box + field filters in one pass.

    For each house the search term either identifies the house itself
    (all its members pass the search stage) or is matched against member
    name/father name/phone/occupation. The remaining criteria are then
    applied to whatever survived, and empty houses are dropped.
    """
    safe_houses = coerce_houses(houses)
    criteria = _coerce_criteria(criteria)
    term = criteria.q

    if not is_set(term):
        return apply_member_filters(safe_houses, criteria)

    other_filters = criteria.without_search()
    result = []
    house_hits = 0

    for house in safe_houses:
        if is_house_level_hit(house, term):
            house_hits += 1
            members = list(house.members)
        else:
            members = [m for m in house.members if filters.matches_search(m, term)]
            if not members:
                continue

        members = [m for m in members if filters.matches_all(m, other_filters, house)]
        if members:
            result.append(house.model_copy(update={"members": members}))

    log.debug(
        "Combined filters applied",
        houses_in=len(safe_houses),
        house_hits=house_hits,
        houses_out=len(result),
    )
    return result


# ─────────────────────────────
# Input coercion

def coerce_houses(houses):
    """Anything that isn't a list of houses is treated as empty."""
    if not isinstance(houses, (list, tuple)):
        return []
    safe = []
    for house in houses:
        if isinstance(house, House):
            safe.append(house)
        elif isinstance(house, Mapping):
            try:
                safe.append(House.model_validate(house))
            except ValidationError as e:
                log.warning("Skipping malformed house", error=str(e))
    return safe


def _coerce_criteria(criteria):
    if isinstance(criteria, FilterCriteria):
        return criteria
    return FilterCriteria.model_validate(criteria)
