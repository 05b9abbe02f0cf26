"""Input collection, data model and ranking engine."""

from .aggregator import Aggregator, aggregate
from .collector import collect
from .models import AnalysisResult, RankedResult

__all__ = ["Aggregator", "aggregate", "collect", "AnalysisResult", "RankedResult"]
