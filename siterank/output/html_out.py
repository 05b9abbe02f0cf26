"""HTML output formatter for the results table.

Produces a ``rank-table`` fragment: one summary row per site followed by a
hidden ``details-N`` row, plus a standalone page wrapper with a small toggle
script for the Show/Hide buttons.
"""

from __future__ import annotations

import json
from html import escape
from pathlib import Path

from .toggle import DetailToggleController
from .viewmodel import (
    HIDE_LABEL,
    SHOW_LABEL,
    SUMMARY_COLUMNS,
    DetailPanel,
    DetailSection,
    SummaryRow,
    ViewModel,
)

_TOGGLE_SCRIPT = """\
document.querySelectorAll(".toggle-btn").forEach(btn => {
  btn.addEventListener("click", () => {
    const row = document.getElementById(btn.dataset.target);
    const hidden = row.style.display === "none";
    row.style.display = hidden ? "table-row" : "none";
    btn.textContent = hidden ? %s : %s;
  });
});""" % (json.dumps(HIDE_LABEL), json.dumps(SHOW_LABEL))


def _section_html(section: DetailSection, as_list: bool = True) -> str:
    """Render one detail section as a heading plus a list of fields."""
    lines = [f"<h4>{escape(section.title)}</h4>"]
    if as_list:
        lines.append("<ul>")
    for field in section.fields:
        tag = "li" if as_list else "p"
        lines.append(
            f"<{tag}><strong>{escape(field.label)}:</strong> {escape(field.value)}</{tag}>"
        )
    if as_list:
        lines.append("</ul>")
    return "\n".join(lines)


class HTMLOutput:
    """HTML output formatter."""

    def generate(
        self,
        view_model: ViewModel,
        controller: DetailToggleController | None = None,
    ) -> str:
        """Generate the results table fragment.

        Args:
            view_model: Rendered results
            controller: Optional row state; expanded rows are emitted visible

        Returns:
            HTML string for the results container
        """
        if not view_model.rows:
            return "<p>The service returned no results.</p>"

        header = "".join(f"<th>{escape(name)}</th>" for name in SUMMARY_COLUMNS)
        parts = [
            '<table class="rank-table">',
            f"<thead><tr>{header}</tr></thead>",
            "<tbody>",
        ]

        for row in view_model.rows:
            expanded = controller.is_expanded(row.row_id) if controller else False
            parts.append(self._summary_row(row, expanded))
            parts.append(self._detail_row(view_model.panel(row.row_id), expanded))

        parts.append("</tbody></table>")
        return "\n".join(parts)

    def document(
        self,
        view_model: ViewModel,
        controller: DetailToggleController | None = None,
        title: str = "SiteRank Results",
    ) -> str:
        """Wrap the table fragment in a standalone HTML page."""
        return "\n".join([
            "<!DOCTYPE html>",
            '<html lang="en">',
            f'<head><meta charset="utf-8"><title>{escape(title)}</title></head>',
            "<body>",
            f"<h1>{escape(title)}</h1>",
            '<div id="results">',
            self.generate(view_model, controller),
            "</div>",
            f"<script>\n{_TOGGLE_SCRIPT}\n</script>",
            "</body>",
            "</html>",
        ])

    def save(
        self,
        view_model: ViewModel,
        output_path: str | Path,
        **kwargs
    ) -> None:
        """Save a standalone HTML page to file."""
        Path(output_path).write_text(self.document(view_model, **kwargs), encoding='utf-8')

    def _summary_row(self, row: SummaryRow, expanded: bool) -> str:
        label = HIDE_LABEL if expanded else row.toggle_label
        cells = [
            f"<td>{row.rank}</td>",
            f"<td>{escape(row.url)}</td>",
            f"<td>{escape(row.performance)}</td>",
            f"<td>{escape(row.security)}</td>",
            f"<td>{escape(row.seo)}</td>",
            f"<td><strong>{row.total}</strong></td>",
            f'<td><button class="toggle-btn" data-target="{row.row_id}">{label}</button></td>',
        ]
        return "<tr>" + "".join(cells) + "</tr>"

    def _detail_row(self, panel: DetailPanel, expanded: bool) -> str:
        display = "table-row" if expanded else "none"
        body = [_section_html(panel.overview, as_list=False)]
        body.extend(_section_html(section) for section in panel.sections)
        return (
            f'<tr id="{panel.row_id}" class="details-row" style="display:{display};">'
            f'<td colspan="{len(SUMMARY_COLUMNS)}"><div class="details">\n'
            + "\n".join(body)
            + "\n</div></td></tr>"
        )
