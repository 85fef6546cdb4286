# src/doseengine/query.py
"""
Substance lookup against the PsychonautWiki GraphQL API.

The response is validated with pydantic models that mirror the wire schema,
then turned into the engine's own read-only types. Unit strings are parsed
leniently: unknown units become INVALID and only fail when used.
"""
from __future__ import annotations

from typing import List, Optional

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from . import config
from .errors import DataError
from .phases import PhaseRange, PhaseSet
from .types import DoseMetadata, DoseRange, RouteKind, RouteProfile, Substance
from .units import MassUnit, TimeUnit

logger = structlog.get_logger()

SUBSTANCE_QUERY = """
query SubstanceQuery($substance: String) {
  substances(query: $substance) {
    name
    crossTolerances
    roas {
      name
      dose {
        units
        threshold
        heavy
        common { min max }
        light { min max }
        strong { min max }
      }
      duration {
        afterglow { min max units }
        comeup { min max units }
        duration { min max units }
        offset { min max units }
        onset { min max units }
        peak { min max units }
        total { min max units }
      }
    }
    uncertainInteractions { name }
    unsafeInteractions { name }
    dangerousInteractions { name }
  }
}
"""


# --------------------------
# Wire schema
# --------------------------
class _Wire(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RangeRecord(_Wire):
    min: Optional[float] = None
    max: Optional[float] = None


class TimeRangeRecord(RangeRecord):
    units: Optional[str] = None


class DoseRecord(_Wire):
    units: Optional[str] = None
    threshold: Optional[float] = None
    heavy: Optional[float] = None
    common: Optional[RangeRecord] = None
    light: Optional[RangeRecord] = None
    strong: Optional[RangeRecord] = None


class DurationRecord(_Wire):
    afterglow: Optional[TimeRangeRecord] = None
    comeup: Optional[TimeRangeRecord] = None
    duration: Optional[TimeRangeRecord] = None
    offset: Optional[TimeRangeRecord] = None
    onset: Optional[TimeRangeRecord] = None
    peak: Optional[TimeRangeRecord] = None
    total: Optional[TimeRangeRecord] = None


class RoaRecord(_Wire):
    name: Optional[str] = None
    dose: Optional[DoseRecord] = None
    duration: Optional[DurationRecord] = None


class InteractionRecord(_Wire):
    name: Optional[str] = None


class SubstanceRecord(_Wire):
    name: Optional[str] = None
    cross_tolerances: Optional[List[Optional[str]]] = Field(None, alias="crossTolerances")
    roas: Optional[List[Optional[RoaRecord]]] = None
    uncertain_interactions: Optional[List[Optional[InteractionRecord]]] = Field(None, alias="uncertainInteractions")
    unsafe_interactions: Optional[List[Optional[InteractionRecord]]] = Field(None, alias="unsafeInteractions")
    dangerous_interactions: Optional[List[Optional[InteractionRecord]]] = Field(None, alias="dangerousInteractions")


class GraphQLErrorRecord(_Wire):
    message: str = ""


class ResponseData(_Wire):
    substances: Optional[List[Optional[SubstanceRecord]]] = None


class GraphQLResponse(_Wire):
    data: Optional[ResponseData] = None
    errors: Optional[List[GraphQLErrorRecord]] = None


# --------------------------
# Wire -> engine types
# --------------------------
def _present(items):
    return [i for i in (items or []) if i is not None]


def _dose_range(r: Optional[RangeRecord]) -> Optional[DoseRange]:
    if r is None:
        return None
    return DoseRange(start=r.min or 0.0, end=r.max or 0.0)


def _phase(r: Optional[TimeRangeRecord]) -> Optional[PhaseRange]:
    if r is None:
        return None
    return PhaseRange.from_bounds(r.min, r.max, TimeUnit.parse(r.units))


def to_dose_metadata(rec: Optional[DoseRecord]) -> DoseMetadata:
    if rec is None:
        return DoseMetadata()
    return DoseMetadata(
        unit=MassUnit.parse(rec.units),
        threshold=rec.threshold,
        heavy=rec.heavy,
        light=_dose_range(rec.light),
        common=_dose_range(rec.common),
        strong=_dose_range(rec.strong),
    )


def to_phase_set(rec: Optional[DurationRecord]) -> PhaseSet:
    if rec is None:
        return PhaseSet()
    return PhaseSet(
        onset=_phase(rec.onset),
        comeup=_phase(rec.comeup),
        peak=_phase(rec.peak),
        offset=_phase(rec.offset),
        afterglow=_phase(rec.afterglow),
        duration=_phase(rec.duration),
        total=_phase(rec.total),
    )


def to_route_profile(rec: RoaRecord) -> RouteProfile:
    return RouteProfile(
        route=RouteKind.parse(rec.name),
        dose=to_dose_metadata(rec.dose),
        phases=to_phase_set(rec.duration),
    )


def to_substance(rec: SubstanceRecord) -> Substance:
    return Substance(
        name=rec.name or "",
        cross_tolerances=tuple(_present(rec.cross_tolerances)),
        routes=tuple(to_route_profile(r) for r in _present(rec.roas)),
        uncertain_interactions=tuple(i.name or "" for i in _present(rec.uncertain_interactions)),
        unsafe_interactions=tuple(i.name or "" for i in _present(rec.unsafe_interactions)),
        dangerous_interactions=tuple(i.name or "" for i in _present(rec.dangerous_interactions)),
    )


def parse_response(payload: dict) -> List[Substance]:
    """
    Turn a decoded GraphQL response body into substances.

    Raises DataError for server-reported errors, a missing `substances`
    field, or a payload that doesn't match the schema.
    """
    try:
        resp = GraphQLResponse.model_validate(payload)
    except ValidationError as e:
        raise DataError([f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()]) from e

    if resp.errors:
        raise DataError([err.message for err in resp.errors])
    if resp.data is None or resp.data.substances is None:
        raise DataError(["Missing substance data."])

    return [to_substance(s) for s in _present(resp.data.substances)]


async def fetch_substances(query: str, *, client: Optional[httpx.AsyncClient] = None,
                           url: Optional[str] = None, timeout: Optional[float] = None) -> List[Substance]:
    """
    Look up substances matching `query`.

    client  : reuse an existing AsyncClient (it is not closed); a new one is made otherwise
    url     : GraphQL endpoint, default from DOSEENGINE_API_URL
    timeout : request timeout in seconds, default from DOSEENGINE_HTTP_TIMEOUT

    Raises DataError on any transport, HTTP-status or server-reported failure.
    Nothing is retried.
    """
    url = url or config.API_URL
    timeout = config.HTTP_TIMEOUT_SEC if timeout is None else timeout
    body = {"query": SUBSTANCE_QUERY, "variables": {"substance": query}}
    log = logger.bind(substance_query=query, url=url)

    log.info("Fetching substance data")
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                res = await own_client.post(url, json=body)
        else:
            res = await client.post(url, json=body, timeout=timeout)
        res.raise_for_status()
        payload = res.json()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        log.error("Substance request failed", error=str(e))
        raise DataError([str(e)]) from e
    except ValueError as e:
        log.error("Substance response was not JSON", error=str(e))
        raise DataError([f"Invalid JSON response: {e}"]) from e

    try:
        substances = parse_response(payload)
    except DataError as e:
        log.error("Substance data rejected", errors=e.messages)
        raise

    log.info("Fetched substance data", count=len(substances))
    return substances
