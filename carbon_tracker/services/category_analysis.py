"""Ranking of per-category emission totals."""

from collections.abc import Mapping
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class CategoryStat:
    category: str
    emissions: float
    activity_count: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class CategoryAnalysis:
    highest: CategoryStat | None
    lowest: CategoryStat | None


def analyze_categories(
    totals: Mapping[str, float], counts: Mapping[str, int]
) -> CategoryAnalysis:
    """Find the highest and lowest emitting categories.

    Categories are sorted by total emissions, descending; the first is the
    highest and the last the lowest, so a single category is both. Equal
    totals keep their mapping order.
    """
    if not totals:
        return CategoryAnalysis(highest=None, lowest=None)

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)

    def _stat(category: str, total: float) -> CategoryStat:
        return CategoryStat(
            category=category,
            emissions=round(total, 2),
            activity_count=int(counts.get(category, 0)),
        )

    return CategoryAnalysis(highest=_stat(*ranked[0]), lowest=_stat(*ranked[-1]))
