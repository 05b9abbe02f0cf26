"""Markdown output formatter for ranked results.

Generates a comparison report: the ranking table followed by every site's
detail breakdown.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path

from .viewmodel import SUMMARY_COLUMNS, DetailPanel, DetailSection, ViewModel

_MD_SPECIAL = re.compile(r'([\\`*_\{\}\[\]()#+\-.!|])')


def _escape_md(text: str) -> str:
    """Escape markdown special characters in service-provided text."""
    return _MD_SPECIAL.sub(r'\\\1', text)


class MarkdownOutput:
    """Markdown output formatter."""

    def generate(
        self,
        view_model: ViewModel,
        service_url: str | None = None,
        include_details: bool = True
    ) -> str:
        """Generate full markdown report.

        Args:
            view_model: Rendered results
            service_url: Optional analysis service the results came from
            include_details: Whether to include per-site detail sections

        Returns:
            Markdown formatted string
        """
        sections = [self._generate_header(service_url, len(view_model))]
        sections.append(self._generate_ranking(view_model))

        if include_details:
            for row in view_model.rows:
                sections.append(
                    self._generate_site(row.rank, row.url, view_model.panel(row.row_id))
                )

        return "\n\n".join(sections)

    def save(
        self,
        view_model: ViewModel,
        output_path: str | Path,
        **kwargs
    ) -> None:
        """Save markdown report to file."""
        content = self.generate(view_model, **kwargs)
        Path(output_path).write_text(content, encoding='utf-8')

    def _generate_header(self, service_url: str | None, count: int) -> str:
        lines = [
            "# Website Analysis Comparison",
            "",
            f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            f"**Sites analyzed:** {count}",
        ]
        if service_url:
            lines.append(f"**Service:** {_escape_md(service_url)}")
        return "\n".join(lines)

    def _generate_ranking(self, view_model: ViewModel) -> str:
        """Ranking table without the interactive Details column."""
        columns = SUMMARY_COLUMNS[:-1]
        lines = [
            "## Ranking",
            "",
            "| " + " | ".join(columns) + " |",
            "|" + "|".join("---" for _ in columns) + "|",
        ]
        for row in view_model.rows:
            lines.append(
                f"| {row.rank} | {_escape_md(row.url)} | {_escape_md(row.performance)} | "
                f"{_escape_md(row.security)} | {_escape_md(row.seo)} | **{row.total}** |"
            )
        if not view_model.rows:
            lines.append("")
            lines.append("*The service returned no results.*")
        return "\n".join(lines)

    def _generate_site(self, rank: int, url: str, panel: DetailPanel) -> str:
        lines = [f"## {rank}. {_escape_md(url)}"]
        for section in (panel.overview, *panel.sections):
            lines.append("")
            lines.extend(self._generate_section(section))
        return "\n".join(lines)

    def _generate_section(self, section: DetailSection) -> list[str]:
        lines = [f"### {section.title}", ""]
        for field in section.fields:
            lines.append(f"- **{field.label}:** {_escape_md(field.value)}")
        return lines
