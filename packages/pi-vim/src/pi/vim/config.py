"""Engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

TAB_SIZE = 4
MAX_COUNT = 9999


@dataclass
class EngineConfig:
    """Tunables shared by the buffer and the command interpreter."""

    tab_size: int = TAB_SIZE
    max_count: int = MAX_COUNT

    def __post_init__(self) -> None:
        # A tab run needs room for both its left and right cell.
        if self.tab_size < 2:
            raise ValueError(f"tab_size must be at least 2, got {self.tab_size}")
        if self.max_count < 1:
            raise ValueError(f"max_count must be positive, got {self.max_count}")

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Build a config, honouring ``PI_VIM_TAB_SIZE`` and ``PI_VIM_MAX_COUNT``."""
        return cls(
            tab_size=int(os.environ.get("PI_VIM_TAB_SIZE", TAB_SIZE)),
            max_count=int(os.environ.get("PI_VIM_MAX_COUNT", MAX_COUNT)),
        )
