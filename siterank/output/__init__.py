"""View model, row state and output formatters for ranked results."""

from .html_out import HTMLOutput
from .json_out import JSONOutput
from .markdown import MarkdownOutput
from .terminal import TerminalOutput
from .toggle import DetailToggleController, RowState
from .viewmodel import ViewModel, render

__all__ = [
    "HTMLOutput",
    "JSONOutput",
    "MarkdownOutput",
    "TerminalOutput",
    "DetailToggleController",
    "RowState",
    "ViewModel",
    "render",
]
