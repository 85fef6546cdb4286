# src/doseengine/helpers.py
from collections import defaultdict
from typing import Iterable

from .types import IngestionEvent, RouteKind, RouteProfile, Substance


def routes_by_kind(substance: Substance) -> dict[RouteKind, RouteProfile]:
    """
    Index a substance's route profiles by kind. Duplicates resolve to the last
    profile listed, same as Substance.route().
    """
    return {profile.route: profile for profile in substance.routes}


def group_by_substance(ingestions: Iterable[IngestionEvent]) -> dict[str, list[IngestionEvent]]:
    """
    Group ingestion events by substance name, each group sorted by timestamp.
    """
    buckets: dict[str, list[IngestionEvent]] = defaultdict(list)
    for ing in ingestions:
        buckets[ing.substance.name].append(ing)
    return {
        name: sorted(events, key=lambda e: e.timestamp)
        for name, events in buckets.items()
    }
