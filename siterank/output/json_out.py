"""JSON output formatter for ranked results.

Generates structured JSON for programmatic use.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any

from .. import __version__
from ..engine.aggregator import Aggregator
from ..engine.models import RankedResult


class JSONOutput:
    """JSON output formatter."""

    def __init__(self, aggregator: Aggregator | None = None):
        self.aggregator = aggregator or Aggregator()

    def generate(
        self,
        ranked: list[RankedResult],
        service_url: str | None = None,
        include_details: bool = True
    ) -> dict:
        """Generate JSON-serializable dictionary.

        Args:
            ranked: Ranked results, best first
            service_url: Optional analysis service the results came from
            include_details: Whether to include the per-category details

        Returns:
            Dictionary ready for JSON serialization
        """
        metadata: dict[str, Any] = {
            "generated_at": datetime.now().isoformat(),
            "tool": "SiteRank",
            "version": __version__,
            "total_sites": len(ranked),
        }
        if service_url:
            metadata["service_url"] = service_url

        return {
            "metadata": metadata,
            "results": [
                self._result_to_dict(item, rank, include_details)
                for rank, item in enumerate(ranked, 1)
            ],
        }

    def to_json(
        self,
        ranked: list[RankedResult],
        indent: int = 2,
        **kwargs
    ) -> str:
        """Generate JSON string.

        Args:
            ranked: Ranked results
            indent: JSON indentation level
            **kwargs: Additional arguments passed to generate()

        Returns:
            JSON formatted string
        """
        data = self.generate(ranked, **kwargs)
        return json.dumps(data, indent=indent, default=str, ensure_ascii=False)

    def save(
        self,
        ranked: list[RankedResult],
        output_path: str | Path,
        **kwargs
    ) -> None:
        """Save JSON report to file."""
        content = self.to_json(ranked, **kwargs)
        Path(output_path).write_text(content, encoding='utf-8')

    def _result_to_dict(
        self,
        item: RankedResult,
        rank: int,
        include_details: bool = True
    ) -> dict:
        """Convert a RankedResult to dictionary."""
        result = item.result
        data: dict[str, Any] = {
            "rank": rank,
            "url": result.url,
            "scores": self.aggregator.get_score_breakdown(result),
            "backend": result.backend,
            "protocols": result.protocols,
            "response_time": result.response_time,
        }

        if include_details:
            data["performance_details"] = asdict(result.performance_details)
            data["security_details"] = asdict(result.security_details)
            data["seo_details"] = asdict(result.seo_details)

        return data
