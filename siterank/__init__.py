"""SiteRank - ranked comparison viewer for website analysis results."""

__version__ = "1.0.0"
