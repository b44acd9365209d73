"""Progress against a user's active weekly reduction target."""

import logging
from dataclasses import asdict, dataclass
from datetime import datetime

from carbon_tracker.models.reduction_target import TargetPeriod, TargetType
from carbon_tracker.services.store import AnalysisStore
from carbon_tracker.services.week_window import WEEK

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReductionProgress:
    """Snapshot of target progress stored on a weekly summary."""

    target_value: float
    target_type: str
    previous_week_emissions: float | None
    reduction_achieved: float | None
    progress_percentage: float | None
    target_met: bool

    def to_dict(self) -> dict:
        return asdict(self)


class ReductionProgressCalculator:
    """Compares a window's emissions with the previous week's stored summary."""

    def __init__(self, store: AnalysisStore):
        self.store = store

    async def calculate(
        self, user_id: int, current_emissions: float, window_start: datetime
    ) -> ReductionProgress | None:
        """Compute progress, or None if there is no active target.

        Any failure is logged and reported as None; progress is best-effort
        and never aborts the analysis run.
        """
        try:
            return await self._calculate(user_id, current_emissions, window_start)
        except Exception as e:
            logger.warning(f"Could not compute reduction progress for user {user_id}: {e}")
            return None

    async def _calculate(
        self, user_id: int, current_emissions: float, window_start: datetime
    ) -> ReductionProgress | None:
        target = await self.store.get_active_target(user_id, TargetPeriod.WEEKLY.value)
        if target is None:
            return None

        previous = await self.store.get_summary(user_id, window_start - WEEK)
        if previous is None:
            # First week with a target: nothing to compare against yet
            return ReductionProgress(
                target_value=target.target_value,
                target_type=target.target_type,
                previous_week_emissions=None,
                reduction_achieved=None,
                progress_percentage=None,
                target_met=False,
            )

        previous_emissions = float(previous["total_value"])
        if target.target_type == TargetType.PERCENTAGE.value:
            reduction = (previous_emissions - current_emissions) / previous_emissions * 100
        elif target.target_type == TargetType.ABSOLUTE.value:
            reduction = previous_emissions - current_emissions
        else:
            raise ValueError(f"Unknown target type: {target.target_type}")

        progress = reduction / target.target_value * 100
        reduction_achieved = round(reduction, 2)

        return ReductionProgress(
            target_value=target.target_value,
            target_type=target.target_type,
            previous_week_emissions=previous_emissions,
            reduction_achieved=reduction_achieved,
            progress_percentage=round(max(progress, 0.0), 1),
            target_met=reduction_achieved >= target.target_value,
        )
