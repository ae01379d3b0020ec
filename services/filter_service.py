# 📦 /services/filter_service.py

import asyncio

import structlog
from prometheus_client import Counter

from engine import (
    apply_combined_filters,
    apply_house_filters,
    apply_member_filters,
    coerce_houses,
    occupations,
    streets,
    summarize,
)
from schemas.schemas import FilterCriteria

log = structlog.get_logger()

REQUEST_COUNTER = Counter("directory_filter_requests", "Total filter requests made")
HOUSES_RETURNED_COUNTER = Counter("directory_houses_returned", "Number of houses returned per request")
MEMBERS_RETURNED_COUNTER = Counter("directory_members_returned", "Number of members returned per request")
MODE_USAGE_COUNTER = Counter("directory_filter_mode_usage", "Filter pass used (combined/members/houses)", ["mode"])

FILTER_MODES = {
    "combined": apply_combined_filters,
    "members": apply_member_filters,
    "houses": apply_house_filters,
}


def run_filters(houses, criteria, mode="combined"):
    if mode not in FILTER_MODES:
        raise ValueError(f"Unknown filter mode: {mode}")

    REQUEST_COUNTER.inc()
    result = FILTER_MODES[mode](houses, criteria)
    members = sum(len(h.members) for h in result)

    MODE_USAGE_COUNTER.labels(mode).inc()
    HOUSES_RETURNED_COUNTER.inc(len(result))
    MEMBERS_RETURNED_COUNTER.inc(members)
    log.info("Filters applied", mode=mode, houses=len(result), members=members)
    return result


class FilterSession:
    """Filter state for one dashboard view.

    Keeps the current criteria, memoizes the filtered collection on
    (houses version, criteria) and, for background recomputation, only
    commits a result if nothing changed while it was being computed.
    """

    def __init__(self, houses=None):
        self._houses = coerce_houses(houses)
        self._houses_version = 0
        self._version = 0
        self.filters = FilterCriteria()
        self.result = []
        self._memo_key = None
        self._memo = []

    @property
    def houses(self):
        return self._houses

    @property
    def version(self):
        return self._version

    def set_houses(self, houses):
        self._houses = coerce_houses(houses)
        self._houses_version += 1
        self._version += 1

    def set_filters(self, new_filters):
        """Replace the criteria; accepts criteria, a mapping or prev -> new."""
        if callable(new_filters):
            new_filters = new_filters(self.filters)
        if isinstance(new_filters, FilterCriteria):
            new_filters = new_filters.model_dump()
        self.filters = FilterCriteria.model_validate(dict(new_filters or {}))
        self._version += 1
        return self.filters

    def reset_filters(self):
        return self.set_filters(FilterCriteria())

    def filtered_houses(self):
        key = (self._houses_version, self.filters)
        if key != self._memo_key:
            self._memo = apply_combined_filters(self._houses, self.filters)
            self._memo_key = key
        return self._memo

    async def refresh(self):
        """Recompute off the event loop; stale results are discarded."""
        version = self._version
        key = (self._houses_version, self.filters)
        result = await asyncio.to_thread(apply_combined_filters, self._houses, self.filters)

        if version != self._version:
            log.info("Discarding superseded filter result", version=version, latest=self._version)
            return self.result

        self.result = result
        self._memo, self._memo_key = result, key
        return result

    @property
    def streets(self):
        return streets(self._houses)

    @property
    def occupations(self):
        return occupations(self._houses)

    @property
    def summary(self):
        return summarize(self.filtered_houses())
