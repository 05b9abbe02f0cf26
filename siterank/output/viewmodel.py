"""View model for the ranked results table.

``render`` turns ranked results into plain, immutable view data: one summary
row per site plus a hidden detail panel. Each detail category has its own
builder taking the typed detail struct, so every field is listed exactly once.
Formatters (terminal, HTML, JSON, Markdown) only consume the view model.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from ..engine.aggregator import round_half_up
from ..engine.models import PerformanceDetails, RankedResult, SecurityDetails, SEODetails

CHECK = "✓"
CROSS = "✗"
NOT_SET = "Not set"
MISSING = "N/A"

SHOW_LABEL = "Show"
HIDE_LABEL = "Hide"

SUMMARY_COLUMNS = (
    "Rank", "Website", "Performance", "Security", "SEO", "Overall", "Details",
)


@dataclass(frozen=True)
class DetailField:
    """One labelled value inside a detail section.

    ``flag`` carries the boolean for check/cross fields so formatters can
    colour them; it is None for other fields.
    """
    label: str
    value: str
    flag: bool | None = None


@dataclass(frozen=True)
class DetailSection:
    """A titled group of detail fields."""
    title: str
    fields: tuple[DetailField, ...]


@dataclass(frozen=True)
class DetailPanel:
    """Expanded view of one site, hidden until toggled."""
    row_id: str
    overview: DetailSection
    sections: tuple[DetailSection, ...]
    hidden: bool = True


@dataclass(frozen=True)
class SummaryRow:
    """One ranked line of the comparison table."""
    rank: int
    row_id: str
    url: str
    performance: str
    security: str
    seo: str
    total: int
    toggle_label: str = SHOW_LABEL


@dataclass(frozen=True)
class ViewModel:
    """Everything needed to draw the results table."""
    rows: tuple[SummaryRow, ...]
    panels: tuple[DetailPanel, ...]
    _by_id: dict[str, DetailPanel] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_id", {p.row_id: p for p in self.panels})

    def __len__(self) -> int:
        return len(self.rows)

    def panel(self, row_id: str) -> DetailPanel:
        """Return the detail panel for a row id."""
        return self._by_id[row_id]

    def row_id_for_rank(self, rank: int) -> str:
        """Map a 1-based rank to its row id."""
        if not 1 <= rank <= len(self.rows):
            raise KeyError(rank)
        return self.rows[rank - 1].row_id


# ── Value formatting ──────────────────────────────────────────────────────


def row_id_for(index: int) -> str:
    """Stable row identifier for the 0-based position in the ranking."""
    return f"details-{index}"


def format_value(value: Any) -> str:
    """Render a score or plain value as given, N/A when missing."""
    if value is None or value == "":
        return MISSING
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _flag(label: str, value: Any) -> DetailField:
    present = bool(value)
    return DetailField(label, CHECK if present else CROSS, flag=present)


def _plain(label: str, value: str) -> DetailField:
    return DetailField(label, value)


def _latency(details: PerformanceDetails) -> str:
    latency = details.latency_ms
    if isinstance(latency, (int, float)) and math.isfinite(latency):
        latency_text = f"{round_half_up(latency)} ms"
    else:
        latency_text = MISSING
    return f"{latency_text} (Score: {format_value(details.latency_score)})"


def _with_unit(value: Any, unit: str) -> str:
    text = format_value(value)
    return text if text == MISSING else f"{text}{unit}"


# ── Section builders ──────────────────────────────────────────────────────


def build_overview_section(ranked: RankedResult) -> DetailSection:
    """Backend, protocol and response time, passed through verbatim."""
    result = ranked.result
    return DetailSection("Backend & Protocol", (
        _plain("Backend", format_value(result.backend)),
        _plain("Protocols", format_value(result.protocols)),
        _plain("Response Time", format_value(result.response_time)),
    ))


def build_performance_section(details: PerformanceDetails) -> DetailSection:
    return DetailSection("Performance Details", (
        _plain("Latency", _latency(details)),
        _plain("Compression", format_value(details.compression)),
        _plain(
            "Cache-Control",
            str(details.cache_control) if details.cache_control else NOT_SET,
        ),
        _plain("Content Size", _with_unit(details.content_length_kb, " KB")),
        _plain(
            "Broken Links",
            f"{format_value(details.broken_links)} / {format_value(details.total_links)}",
        ),
        _plain("Overall Score", format_value(details.overall_score)),
    ))


def build_security_section(details: SecurityDetails) -> DetailSection:
    return DetailSection("Security Headers", (
        _flag("HTTPS", details.https),
        _flag("HSTS", details.hsts),
        _flag("CSP", details.csp),
        _flag("X-Content-Type-Options", details.x_content_type_options),
        _flag("X-Frame-Options", details.x_frame_options),
        _flag("Referrer-Policy", details.referrer_policy),
        _plain("Overall Score", format_value(details.overall_score)),
    ))


def build_seo_section(details: SEODetails) -> DetailSection:
    return DetailSection("SEO Details", (
        _flag("Page Title", details.has_page_title),
        _flag("Meta Description", details.has_meta_description),
        _flag("Meta Tags", details.has_meta_tags),
        _flag("Heading Structure", details.has_heading_structure),
        _flag("Mobile-Friendly", details.mobile_friendly),
        _flag("Canonical Tag", details.has_canonical_tag),
        _flag("Robots.txt", details.has_robots_txt),
        _flag("Sitemap.xml", details.has_sitemap_xml),
        _plain("Image Alt Text", _with_unit(details.image_alt_text_percentage, "%")),
        _plain("Overall Score", format_value(details.overall_score)),
    ))


# ── Renderer ──────────────────────────────────────────────────────────────


def render(ranked: list[RankedResult]) -> ViewModel:
    """Build the view model for an already ranked sequence.

    Rows are emitted in the given order; this function never re-sorts.

    Args:
        ranked: Output of the aggregator, best first

    Returns:
        ViewModel with one summary row and one hidden panel per result
    """
    rows = []
    panels = []

    for i, item in enumerate(ranked):
        row_id = row_id_for(i)
        result = item.result

        rows.append(SummaryRow(
            rank=i + 1,
            row_id=row_id,
            url=format_value(result.url),
            performance=format_value(result.performance),
            security=format_value(result.security),
            seo=format_value(result.seo),
            total=item.total,
        ))
        panels.append(DetailPanel(
            row_id=row_id,
            overview=build_overview_section(item),
            sections=(
                build_performance_section(result.performance_details),
                build_security_section(result.security_details),
                build_seo_section(result.seo_details),
            ),
        ))

    return ViewModel(rows=tuple(rows), panels=tuple(panels))
