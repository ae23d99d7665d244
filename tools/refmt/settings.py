"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

DEFAULT_THEME = "monokai"


@dataclass(frozen=True)
class Settings:
    """
    Output settings.

    Attributes:
        theme: Pygments style name used for highlighting
        color: Force colour on/off; None means "when writing to a terminal"
        log_level: Log level name
    """

    theme: str = DEFAULT_THEME
    color: Optional[bool] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from ``REFMT_THEME``, ``REFMT_LOG_LEVEL`` and ``NO_COLOR``.
        """
        env = os.environ if environ is None else environ
        return cls(
            theme=env.get("REFMT_THEME") or DEFAULT_THEME,
            color=False if env.get("NO_COLOR") else None,
            log_level=(env.get("REFMT_LOG_LEVEL") or "INFO").upper(),
        )

    def override(
        self,
        theme: Optional[str] = None,
        color: Optional[bool] = None,
        verbose: bool = False,
    ) -> "Settings":
        """Apply command line flags on top of these settings."""
        changes = {}
        if theme:
            changes["theme"] = theme
        if color is not None:
            changes["color"] = color
        if verbose:
            changes["log_level"] = "DEBUG"
        return replace(self, **changes)
