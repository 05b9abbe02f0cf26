"""Analysis run orchestration.

A ViewerSession owns the results panel: the one piece of state every run
replaces. A run collects identifiers, issues the single analysis request,
then ranks and renders the results in one step so no partially built table
is ever observable.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from .client import AnalysisClient
from .config import ViewerConfig
from .engine.aggregator import Aggregator
from .engine.collector import collect
from .engine.models import RankedResult
from .errors import AnalysisError, EmptyInputError
from .output.toggle import DetailToggleController
from .output.viewmodel import ViewModel, render

logger = logging.getLogger(__name__)

IN_PROGRESS_MESSAGE = "Analyzing..."


class PanelStatus(Enum):
    """What the results panel is currently showing."""
    IDLE = "idle"
    PROMPT = "prompt"            # Empty input, asking for identifiers
    IN_PROGRESS = "in_progress"
    RESULTS = "results"
    ERROR = "error"


@dataclass
class ResultsPanel:
    """Content of the results container for one run."""
    status: PanelStatus = PanelStatus.IDLE
    message: str = ""
    identifiers: list[str] = field(default_factory=list)
    ranked: list[RankedResult] = field(default_factory=list)
    view_model: ViewModel | None = None


def format_error_message(error: Exception, service_url: str) -> str:
    """User-facing text for a failed analysis run."""
    return (
        f"Error: {error}. Is the analysis service running at {service_url}? "
        "Check the URL list and try again."
    )


class ViewerSession:
    """Drives analysis runs and owns the results panel and row state."""

    def __init__(
        self,
        config: ViewerConfig | None = None,
        client: AnalysisClient | None = None,
        aggregator: Aggregator | None = None,
        on_change: Callable[[ResultsPanel], None] | None = None,
    ):
        """Initialize the session.

        Args:
            config: Viewer configuration
            client: Analysis client (built from config when omitted)
            aggregator: Score aggregator
            on_change: Called every time the results panel is replaced
        """
        self.config = config or ViewerConfig()
        self.client = client or AnalysisClient(self.config)
        self.aggregator = aggregator or Aggregator()
        self.controller = DetailToggleController()
        self.panel = ResultsPanel()
        self._on_change = on_change
        self._busy = False

    @property
    def busy(self) -> bool:
        """True while an analysis request is outstanding."""
        return self._busy

    async def submit(self, raw_text: str) -> ResultsPanel | None:
        """Run one analysis for the newline-separated identifiers in raw_text.

        A submit issued while another run is outstanding is ignored.

        Args:
            raw_text: Text from the identifier input

        Returns:
            The new results panel, or None when the submit was ignored
        """
        if self._busy:
            logger.warning("Ignoring analyze request: a run is already in progress")
            return None

        identifiers = collect(raw_text)
        if not identifiers:
            return self._replace(ResultsPanel(
                status=PanelStatus.PROMPT,
                message=str(EmptyInputError()),
            ))

        self._busy = True
        try:
            self._replace(ResultsPanel(
                status=PanelStatus.IN_PROGRESS,
                message=IN_PROGRESS_MESSAGE,
                identifiers=identifiers,
            ))
            outcome = await self.client.analyze_outcome(identifiers)
        finally:
            self._busy = False

        if not outcome.ok:
            return self._show_error(outcome.error, identifiers)

        ranked = self.aggregator.aggregate(outcome.results)
        view_model = render(ranked)
        self.controller.attach(view_model)
        return self._replace(
            ResultsPanel(
                status=PanelStatus.RESULTS,
                identifiers=identifiers,
                ranked=ranked,
                view_model=view_model,
            ),
            keep_rows=True,
        )

    def toggle(self, row_id: str) -> bool:
        """Toggle one row's detail panel in the current results."""
        return self.controller.toggle(row_id)

    def toggle_rank(self, rank: int) -> bool:
        """Toggle the row shown at a 1-based rank."""
        return self.controller.toggle_rank(rank)

    def _show_error(self, error: AnalysisError, identifiers: list[str]) -> ResultsPanel:
        logger.warning("Analysis failed (%s): %s", type(error).__name__, error)
        return self._replace(ResultsPanel(
            status=PanelStatus.ERROR,
            message=format_error_message(error, self.config.service_url),
            identifiers=identifiers,
        ))

    def _replace(self, panel: ResultsPanel, keep_rows: bool = False) -> ResultsPanel:
        """Swap in a new results panel; row state goes with the old one."""
        if not keep_rows:
            self.controller.detach()
        self.panel = panel
        if self._on_change is not None:
            self._on_change(panel)
        return panel
