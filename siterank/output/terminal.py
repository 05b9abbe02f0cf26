"""Rich terminal output for ranked analysis results.

Provides formatted, color-coded terminal output using the Rich library.
Theme: Catppuccin Mocha (https://catppuccin.com/palette/)

The results panel is a rounded table with one row per site; expanded rows
get a bordered detail panel below the table with the three score breakdowns
side by side.
"""

from __future__ import annotations

from rich.align import Align
from rich.box import ROUNDED
from rich.columns import Columns
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from .. import __version__
from .toggle import DetailToggleController
from .viewmodel import SUMMARY_COLUMNS, DetailPanel, DetailSection, ViewModel

# Catppuccin Mocha palette
MOCHA = {
    "red": "#f38ba8",
    "maroon": "#eba0ac",
    "peach": "#fab387",
    "yellow": "#f9e2af",
    "green": "#a6e3a1",
    "teal": "#94e2d5",
    "sapphire": "#74c7ec",
    "blue": "#89b4fa",
    "lavender": "#b4befe",
    "mauve": "#cba6f7",
    "text": "#cdd6f4",
    "subtext1": "#bac2de",
    "subtext0": "#a6adc8",
    "overlay1": "#7f849c",
    "overlay0": "#6c7086",
    "surface2": "#585b70",
    "surface1": "#45475a",
    "surface0": "#313244",
    "crust": "#11111b",
}

# Rich theme for markup tags
MOCHA_THEME = Theme({
    "info": MOCHA["sapphire"],
    "warning": MOCHA["peach"],
    "danger": MOCHA["red"],
    "success": MOCHA["green"],
})

# Border colour per detail section title
SECTION_COLORS = {
    "Backend & Protocol": MOCHA["lavender"],
    "Performance Details": MOCHA["sapphire"],
    "Security Headers": MOCHA["mauve"],
    "SEO Details": MOCHA["teal"],
}


# ── Badge / display helpers ──────────────────────────────────────────────


def _score_color(score: float) -> str:
    if score >= 80:
        return MOCHA["green"]
    elif score >= 60:
        return MOCHA["yellow"]
    elif score >= 40:
        return MOCHA["peach"]
    return MOCHA["red"]


def _score_badge(value: str | int) -> Text:
    """Render a score as a compact colored pill: e.g. `` 95 ``.

    Non-numeric values (e.g. ``N/A``) are shown muted.
    """
    badge = Text()
    try:
        score = float(value)
    except (TypeError, ValueError):
        badge.append(f" {value} ", style=MOCHA["overlay1"])
        return badge

    badge.append(f" {value} ", style=f"bold {MOCHA['crust']} on {_score_color(score)}")
    return badge


def _section_table(section: DetailSection) -> Panel:
    """Render one detail section as a two-column key/value table."""
    table = Table(show_header=False, box=None, padding=(0, 1), show_edge=False)
    table.add_column("Field", style=MOCHA["subtext0"])
    table.add_column("Value", style=MOCHA["text"])

    for detail in section.fields:
        if detail.flag is None:
            value = Text(detail.value)
        else:
            value = Text(detail.value, style=f"bold {MOCHA['green' if detail.flag else 'red']}")
        table.add_row(f"{detail.label}:", value)

    color = SECTION_COLORS.get(section.title, MOCHA["surface2"])
    return Panel(
        table,
        title=f"[bold {color}]{section.title}[/bold {color}]",
        title_align="left",
        box=ROUNDED,
        border_style=color,
        padding=(0, 1),
    )


# ── Main output class ────────────────────────────────────────────────────


class TerminalOutput:
    """Rich terminal formatter for the results panel."""

    def __init__(
        self,
        console: Console | None = None,
        no_color: bool = False,
    ):
        """Initialize terminal output.

        Args:
            console: Optional Rich console instance
            no_color: If True, disable colored output
        """
        if console:
            self.console = console
        elif no_color:
            self.console = Console(no_color=True, highlight=False)
        else:
            self.console = Console(theme=MOCHA_THEME)

    # ── Public API ────────────────────────────────────────────────────

    def print_header(self, service_url: str) -> None:
        """Print the banner with the analysis service location."""
        self.console.print()
        self.console.print(
            Panel(
                Align.center(
                    Text("SITERANK - Website Analysis Comparison", style=f"bold {MOCHA['mauve']}")
                ),
                box=ROUNDED,
                border_style=MOCHA["mauve"],
                padding=(0, 1),
            )
        )
        subtitle = Text()
        subtitle.append("Service: ", style=MOCHA["subtext0"])
        subtitle.append(service_url, style=f"bold {MOCHA['lavender']}")
        self.console.print(subtitle)
        self.console.print()

    def print_status(self, message: str) -> None:
        """Print an in-progress line such as ``Analyzing...``."""
        self.console.print(Text(message, style=f"italic {MOCHA['sapphire']}"))

    def print_prompt(self, message: str) -> None:
        """Print a prompt asking the user for input."""
        self.console.print(Text(message, style=f"bold {MOCHA['yellow']}"))

    def print_error(self, message: str) -> None:
        """Print an analysis failure inside a red panel."""
        self.console.print(
            Panel(
                Text(message, style=MOCHA["text"]),
                title=f"[bold {MOCHA['red']}]ERROR[/bold {MOCHA['red']}]",
                title_align="left",
                box=ROUNDED,
                border_style=MOCHA["red"],
                padding=(0, 1),
            )
        )

    def print_results(
        self,
        view_model: ViewModel,
        controller: DetailToggleController | None = None,
    ) -> None:
        """Print the ranking table followed by every expanded detail panel.

        Args:
            view_model: Rendered results
            controller: Row expansion state; all rows collapsed when omitted
        """
        if not view_model.rows:
            self.console.print(
                f"[{MOCHA['yellow']}]The service returned no results[/{MOCHA['yellow']}]"
            )
            return

        self.console.print(self.build_table(view_model, controller))

        expanded = controller.expanded_rows() if controller else []
        for row in view_model.rows:
            if row.row_id in expanded:
                self.console.print(self.build_detail_panel(view_model.panel(row.row_id), row.url))

    def print_footer(self, site_count: int) -> None:
        self.console.print()
        self.console.print(Rule(style=MOCHA["surface2"]))
        footer = f"siterank v{__version__} | {site_count} sites"
        self.console.print(Align.center(Text(footer, style=MOCHA["overlay1"])))
        self.console.print()

    # ── Renderable builders ───────────────────────────────────────────

    def build_table(
        self,
        view_model: ViewModel,
        controller: DetailToggleController | None = None,
    ) -> Table:
        """Build the ranked summary table."""
        table = Table(
            box=ROUNDED,
            border_style=MOCHA["surface1"],
            header_style=f"bold {MOCHA['blue']}",
            title=f"[bold {MOCHA['blue']}]RANKING ({len(view_model)})[/bold {MOCHA['blue']}]",
            title_justify="left",
        )
        for name in SUMMARY_COLUMNS:
            justify = "left" if name == "Website" else "center"
            table.add_column(name, justify=justify)

        for row in view_model.rows:
            label = controller.label(row.row_id) if controller else row.toggle_label
            table.add_row(
                Text(str(row.rank), style=f"bold {MOCHA['text']}"),
                Text(row.url, style=MOCHA["text"]),
                _score_badge(row.performance),
                _score_badge(row.security),
                _score_badge(row.seo),
                _score_badge(row.total),
                Text(f"[{row.rank}] {label}", style=MOCHA["overlay1"]),
            )
        return table

    def build_detail_panel(self, panel: DetailPanel, url: str) -> Panel:
        """Build the expanded view for one site."""
        parts: list[RenderableType] = [_section_table(panel.overview)]
        parts.append(
            Columns([_section_table(s) for s in panel.sections], padding=(0, 1), expand=True)
        )
        return Panel(
            Group(*parts),
            title=Text(url, style=f"bold {MOCHA['text']}"),
            title_align="left",
            box=ROUNDED,
            border_style=MOCHA["surface2"],
            padding=(0, 1),
        )
