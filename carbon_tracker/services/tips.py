"""Personalized tip selection.

Weekly summaries get a tip built around the user's highest emitting
category. When the user has a reduction target, the tip speaks to their
progress; otherwise it comes from the static tip content for the single
largest activity in that category.
"""

import logging
import random
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Protocol

from carbon_tracker.data.tips import lookup_static_tip
from carbon_tracker.models.reduction_target import TargetType
from carbon_tracker.services.reduction_progress import ReductionProgress
from carbon_tracker.services.store import AnalysisStore
from carbon_tracker.services.week_window import WeekWindow

logger = logging.getLogger(__name__)


class TipType(str, Enum):
    """Tone of a tip."""

    POSITIVE = "positive"
    IMPROVEMENT = "improvement"


class RandomSource(Protocol):
    def choice(self, seq: Any) -> Any: ...


@dataclass(frozen=True)
class PersonalizedTip:
    category: str
    message: str
    tip_type: str

    def to_dict(self) -> dict:
        return asdict(self)


def _describe_target(progress: ReductionProgress) -> str:
    if progress.target_type == TargetType.PERCENTAGE.value:
        return f"{progress.target_value:g}%"
    return f"{progress.target_value:g} kg CO2e"


class TipSelector:
    """Chooses the personalized tip for a user's week."""

    def __init__(self, store: AnalysisStore, rng: RandomSource | None = None):
        self.store = store
        self.rng = rng

    def _rng_for(self, user_id: int, window: WeekWindow) -> RandomSource:
        """Random source for one summary, seeded by its key unless one was injected."""
        if self.rng is not None:
            return self.rng
        return random.Random(f"{user_id}:{window.start.isoformat()}")

    async def select(
        self,
        user_id: int,
        highest_category: str,
        window: WeekWindow,
        progress: ReductionProgress | None = None,
    ) -> PersonalizedTip | None:
        top = await self.store.find_top_activity(user_id, highest_category, window)
        if top is None:
            return None

        if progress is not None:
            tip = self._target_tip(highest_category, top.activity, progress)
            if tip is not None:
                return tip

        return self._static_tip(highest_category, top.activity, self._rng_for(user_id, window))

    def _target_tip(
        self, category: str, activity: str, progress: ReductionProgress
    ) -> PersonalizedTip | None:
        if progress.target_met:
            return PersonalizedTip(
                category=category,
                message=(
                    f"You met your {_describe_target(progress)} reduction target! "
                    f"Keep your {category} emissions down to stay on track."
                ),
                tip_type=TipType.POSITIVE.value,
            )

        if progress.progress_percentage is not None and progress.progress_percentage > 50:
            remaining = round(100 - progress.progress_percentage, 1)
            return PersonalizedTip(
                category=category,
                message=(
                    f"You're {progress.progress_percentage}% of the way to your target. "
                    f'Cutting back on "{activity}" could close the remaining {remaining}%.'
                ),
                tip_type=TipType.IMPROVEMENT.value,
            )

        if progress.reduction_achieved is not None and progress.reduction_achieved < 0:
            return PersonalizedTip(
                category=category,
                message=(
                    f"Your emissions are up compared to last week. "
                    f'"{activity}" was your largest {category} source; try replacing it this week.'
                ),
                tip_type=TipType.IMPROVEMENT.value,
            )

        return None

    def _static_tip(self, category: str, activity: str, rng: RandomSource) -> PersonalizedTip:
        content = lookup_static_tip(category, activity)
        if content is None:
            return PersonalizedTip(
                category=category,
                message=f"{category} was your highest emitting category. Look for ways to reduce it.",
                tip_type=TipType.IMPROVEMENT.value,
            )
        if isinstance(content, str):
            return PersonalizedTip(category=category, message=content, tip_type=TipType.POSITIVE.value)
        return PersonalizedTip(
            category=category,
            message=rng.choice(content),
            tip_type=TipType.IMPROVEMENT.value,
        )


def format_tip_response(
    category: str, activity: str, user_id: int, rng: RandomSource | None = None
) -> dict[str, Any] | None:
    """Build the tip pushed to a user right after logging an activity.

    Returns None when there is no tip content for the activity.
    """
    content = lookup_static_tip(category, activity)
    if content is None:
        return None

    is_low_emission = isinstance(content, str)
    rng = rng or random.Random()
    return {
        "user_id": user_id,
        "category": category,
        "activity": activity,
        "emission_level": "low" if is_low_emission else "high",
        "tip_type": TipType.POSITIVE.value if is_low_emission else TipType.IMPROVEMENT.value,
        "message": content if is_low_emission else rng.choice(content),
        "all_tips": [content] if is_low_emission else list(content),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
