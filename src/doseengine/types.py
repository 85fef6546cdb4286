# src/doseengine/types.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum, IntEnum
from typing import Optional, Sequence

from .phases import PhaseSet
from .units import MassUnit, convert_mass


@dataclass(frozen=True)
class DoseRange:
    """
    A dosage band, half-open: start <= amount < end.
    """
    start: float
    end: float

    def __contains__(self, amount: float) -> bool:
        return self.start <= amount < self.end


class RouteKind(Enum):
    """Route of administration."""
    ORAL = "oral"
    SUBLINGUAL = "sublingual"
    BUCCAL = "buccal"
    INSUFFLATION = "insufflation"
    INHALATION = "inhalation"
    SMOKED = "smoked"
    VAPORISED = "vaporised"
    INTRAVENOUS = "intravenous"
    INTRAMUSCULAR = "intramuscular"
    SUBCUTANEOUS = "subcutaneous"
    RECTAL = "rectal"
    TRANSDERMAL = "transdermal"
    INVALID = "invalid"

    @classmethod
    def parse(cls, text: Optional[str]) -> "RouteKind":
        if text is None:
            return cls.INVALID
        return _ROUTE_NAMES.get(text.lower(), cls.INVALID)


_ROUTE_NAMES = {kind.value: kind for kind in RouteKind if kind is not RouteKind.INVALID}
# The upstream wiki has spelled this one both ways.
_ROUTE_NAMES["insuffilation"] = RouteKind.INSUFFLATION


class DosageTier(IntEnum):
    """
    Classification bucket for a dose. Members are ordered by classification
    priority, not by severity.
    """
    THRESHOLD = 0
    HEAVY = 1
    COMMON = 2
    LIGHT = 3
    STRONG = 4
    BELOW_THRESHOLD = 5


@dataclass(frozen=True)
class DoseMetadata:
    """
    Documented dose thresholds and bands for a route. All numbers are in `unit`.
    """
    unit: MassUnit = MassUnit.INVALID
    threshold: Optional[float] = None
    heavy: Optional[float] = None
    light: Optional[DoseRange] = None
    common: Optional[DoseRange] = None
    strong: Optional[DoseRange] = None


@dataclass(frozen=True)
class RouteProfile:
    """Dose metadata and phase timings for one route of administration."""
    route: RouteKind
    dose: DoseMetadata = field(default_factory=DoseMetadata)
    phases: PhaseSet = field(default_factory=PhaseSet)


@dataclass(frozen=True)
class Substance:
    """
    A substance as documented by the data service. Read-only once built; every
    IngestionEvent created from it shares this instance.

    routes may hold more than one profile per RouteKind; lookups take the last one.
    """
    name: str
    cross_tolerances: Sequence[str] = ()
    routes: Sequence[RouteProfile] = ()
    uncertain_interactions: Sequence[str] = ()
    unsafe_interactions: Sequence[str] = ()
    dangerous_interactions: Sequence[str] = ()

    def new_ingestion(self, amount: float, unit: MassUnit, timestamp: datetime,
                      route: RouteKind) -> "IngestionEvent":
        return IngestionEvent(amount=float(amount), unit=unit, timestamp=timestamp,
                              route=route, substance=self)

    def route(self, kind: RouteKind) -> Optional[RouteProfile]:
        """Profile for `kind`, or None when this substance doesn't document that route."""
        found = None
        for profile in self.routes:
            if profile.route == kind:
                found = profile
        return found

    def dosage_tier(self, ingestion: "IngestionEvent") -> Optional[DosageTier]:
        from .classify import classify

        profile = self.route(ingestion.route)
        return None if profile is None else classify(profile, ingestion)

    def effect(self, ingestion: "IngestionEvent", elapsed_hours: float) -> Optional[float]:
        from .effect import effect

        profile = self.route(ingestion.route)
        return None if profile is None else effect(profile, ingestion, elapsed_hours)


@dataclass
class IngestionEvent:
    """
    A single dose of a substance taken by a given route.

    amount    : dose size, in `unit`
    unit      : mass unit of `amount`; changed only through normalisation
    timestamp : when the dose was taken (informational, the engine uses elapsed time)
    route     : route the dose was taken by
    substance : the substance this event was created from (shared, not copied)
    """
    amount: float
    unit: MassUnit
    timestamp: datetime
    route: RouteKind
    substance: Substance = field(repr=False, compare=False)

    def set_amount(self, amount: float) -> None:
        self.amount = float(amount)

    def set_unit(self, unit: MassUnit) -> None:
        self.unit = unit

    def normalise_to(self, unit: MassUnit) -> None:
        """Express this event's amount in `unit`, in place."""
        self.set_amount(convert_mass(self.amount, self.unit, unit))
        self.set_unit(unit)

    def normalised(self, unit: MassUnit) -> "IngestionEvent":
        """Copy of this event with its amount expressed in `unit`."""
        return replace(self, amount=convert_mass(self.amount, self.unit, unit), unit=unit)

    def route_profile(self) -> Optional[RouteProfile]:
        return self.substance.route(self.route)

    def dosage_tier(self) -> Optional[DosageTier]:
        return self.substance.dosage_tier(self)

    def effect(self, elapsed_hours: float) -> Optional[float]:
        return self.substance.effect(self, elapsed_hours)
