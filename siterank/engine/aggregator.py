"""Composite scoring and ranking of analysis results.

The composite score is the rounded mean of the performance, security and SEO
sub-scores. It is the only ranking key.
"""

from __future__ import annotations

import math
from typing import Any

from .models import AnalysisResult, RankedResult

# Sub-scores that make up the composite, in display order
SCORE_COMPONENTS = ("performance", "security", "seo")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def _as_number(value: Any) -> float:
    """Coerce a sub-score for averaging; unusable values count as 0."""
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def composite_score(result: AnalysisResult) -> int:
    """Compute the composite score for one result.

    Ranges are not validated: out-of-range sub-scores are averaged as-is.

    Args:
        result: Analysis result to score

    Returns:
        round_half_up((performance + security + seo) / 3)
    """
    total = sum(_as_number(getattr(result, name)) for name in SCORE_COMPONENTS)
    return round_half_up(total / len(SCORE_COMPONENTS))


class Aggregator:
    """Scores analysis results and orders them best first."""

    def aggregate(self, results: list[AnalysisResult]) -> list[RankedResult]:
        """Score every result and sort by composite score.

        The sort is stable: equal scores keep their order from ``results``.
        Totals are always recomputed from the sub-scores.

        Args:
            results: Results in the order the service returned them

        Returns:
            Ranked results, highest total first
        """
        ranked = [RankedResult(result=r, total=composite_score(r)) for r in results]
        ranked.sort(key=lambda r: r.total, reverse=True)
        return ranked

    def get_score(self, result: AnalysisResult) -> int:
        """Get the composite score for a single result."""
        return composite_score(result)

    def get_score_breakdown(self, result: AnalysisResult) -> dict[str, Any]:
        """Get the sub-scores and composite score for a result.

        Args:
            result: Analysis result to break down

        Returns:
            Dictionary with each component as received plus the total
        """
        breakdown: dict[str, Any] = {
            name: getattr(result, name) for name in SCORE_COMPONENTS
        }
        breakdown["total"] = composite_score(result)
        return breakdown


def aggregate(results: list[AnalysisResult]) -> list[RankedResult]:
    """Convenience function to rank results with a default Aggregator.

    Args:
        results: Results in service order

    Returns:
        Ranked results, highest total first
    """
    return Aggregator().aggregate(results)
