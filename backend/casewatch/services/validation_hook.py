from __future__ import annotations

from typing import Optional, Union

from loguru import logger

from casewatch.domain.models import REPORT_STATUS_VALIDATED, RecomputeResult

from .recompute import HotspotRecomputer
from .recompute_queue import RecomputeQueue


def is_validation_transition(previous_status: Optional[str], new_status: Optional[str]) -> bool:
    return new_status == REPORT_STATUS_VALIDATED and previous_status != REPORT_STATUS_VALIDATED


class ValidationHook:
    """Entry point for the report-validation workflow.

    With a ``HotspotRecomputer`` the recompute runs inline and its result is
    returned; with a ``RecomputeQueue`` it is queued and ``None`` is returned.
    Either way the hook never raises into the caller's validation flow.
    """

    def __init__(self, target: Union[HotspotRecomputer, RecomputeQueue]):
        if target is None:
            raise ValueError("target is required")
        self.target = target

    def on_report_validated(
        self,
        report_id: str,
        previous_status: Optional[str],
        new_status: Optional[str] = REPORT_STATUS_VALIDATED,
    ) -> Optional[RecomputeResult]:
        if not is_validation_transition(previous_status, new_status):
            return None
        logger.info("Report {} validated, triggering hotspot recompute", report_id)
        try:
            if isinstance(self.target, RecomputeQueue):
                self.target.submit(f"report {report_id} validated")
                return None
            result = self.target.recompute()
        except Exception as exc:
            logger.error("Hotspot recompute trigger failed for report {}: {!r}", report_id, exc)
            return RecomputeResult(
                success=False,
                hotspot_count=0,
                message="failed to trigger hotspot recompute",
                error=exc,
            )
        if not result.success:
            logger.error("Hotspot recompute after validating {} failed: {}", report_id, result.message)
        return result
