from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from ..common.geo import GeoPoint
from ..core.constants import DEFAULT_ENRICHMENT_WORKERS
from ..core.enums import PunchKind
from ..core.exceptions import GeocodeUnavailable
from ..core.logging_config import get_logger
from ..geocoding.resolver import GeocodeResolver
from .repository import AttendanceRepository

logger = get_logger("attendance.enrichment")


class AddressEnricher:
    """Best-effort, fire-and-forget address lookup for punches.

    Jobs run on a bounded thread pool so the punch request never waits on the
    geocoder. A failed lookup leaves the address empty and is only logged.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        resolver: GeocodeResolver,
        *,
        max_workers: int = DEFAULT_ENRICHMENT_WORKERS,
    ):
        self._attendance = attendance
        self._resolver = resolver
        self._executor = ThreadPoolExecutor(max_workers=int(max_workers), thread_name_prefix="address-enricher")

    def submit(self, *, attendance_id: int, kind: PunchKind, location: GeoPoint) -> Optional[Future]:
        try:
            future = self._executor.submit(self._enrich, attendance_id, kind, location)
        except RuntimeError:
            # Executor already shut down (app is stopping).
            logger.warning("enrichment skipped, executor closed", extra={"attendance_id": attendance_id})
            return None
        future.add_done_callback(self._log_unexpected)
        return future

    def _enrich(self, attendance_id: int, kind: PunchKind, location: GeoPoint) -> Optional[str]:
        try:
            address = self._resolver.reverse(location.latitude, location.longitude)
        except GeocodeUnavailable as e:
            logger.warning(
                "geocoding failed for %s",
                kind.value,
                extra={"attendance_id": attendance_id, "reason": str(e)},
            )
            return None

        self._attendance.set_address(attendance_id=attendance_id, kind=kind, address=address)
        return address

    @staticmethod
    def _log_unexpected(future: Future) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("address enrichment crashed", exc_info=(type(exc), exc, exc.__traceback__))

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
