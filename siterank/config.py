"""Runtime configuration.

Values come from the environment (optionally a ``.env`` file in the working
directory) and are overridden by command-line flags.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from dotenv import find_dotenv, load_dotenv

DEFAULT_SERVICE_URL = "http://localhost:8080"

OUTPUT_FORMATS = ("terminal", "html", "json", "markdown")

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ViewerConfig:
    """Settings for one viewer process."""
    service_url: str = DEFAULT_SERVICE_URL
    timeout: float | None = None     # None waits for the service indefinitely
    no_color: bool = False
    output_format: str = "terminal"

    @property
    def analyze_endpoint(self) -> str:
        return f"{self.service_url.rstrip('/')}/analyze"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> ViewerConfig:
        """Build a config from SITERANK_* environment variables.

        Args:
            dotenv: Load a ``.env`` file first (existing variables win)

        Raises:
            ValueError: If SITERANK_TIMEOUT is not a positive number
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        service_url = os.getenv("SITERANK_SERVICE_URL", "").strip() or DEFAULT_SERVICE_URL

        timeout = None
        raw_timeout = os.getenv("SITERANK_TIMEOUT", "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(
                    f"SITERANK_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
                ) from None
            if timeout <= 0:
                raise ValueError(f"SITERANK_TIMEOUT must be positive, got {raw_timeout!r}")

        no_color = os.getenv("SITERANK_NO_COLOR", "").strip().lower() in _TRUTHY

        return cls(service_url=service_url, timeout=timeout, no_color=no_color)

    def merged(self, **overrides) -> ViewerConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
