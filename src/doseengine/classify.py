# src/doseengine/classify.py
from __future__ import annotations

import structlog

from .types import DosageTier, IngestionEvent, RouteProfile

logger = structlog.get_logger()


def classify(route_profile: RouteProfile, ingestion: IngestionEvent) -> DosageTier:
    """
    Put an ingestion into a dosage tier for the given route.

    The amount is first expressed in the route's dose unit (the ingestion
    itself is left untouched). Checks run in a fixed order and the first hit
    wins:
      heavy     : amount >= heavy
      threshold : amount == threshold (exact float equality)
      light, common, strong : amount inside the half-open band
    Anything else is BELOW_THRESHOLD.

    Raises UnsupportedUnitConversion when the ingestion unit can't be
    expressed in the route's unit (ml, or an unparsed unit on either side).
    """
    dose = route_profile.dose
    amount = ingestion.normalised(dose.unit).amount
    if ingestion.unit is not dose.unit:
        logger.debug("Normalised ingestion amount", amount=ingestion.amount,
                     unit=str(ingestion.unit), normalised=amount, dose_unit=str(dose.unit))

    if dose.heavy is not None and amount >= dose.heavy:
        return DosageTier.HEAVY

    # Exact float equality, no tolerance.
    if dose.threshold is not None and amount == dose.threshold:
        return DosageTier.THRESHOLD

    if dose.light is not None and amount in dose.light:
        return DosageTier.LIGHT

    if dose.common is not None and amount in dose.common:
        return DosageTier.COMMON

    if dose.strong is not None and amount in dose.strong:
        return DosageTier.STRONG

    return DosageTier.BELOW_THRESHOLD
