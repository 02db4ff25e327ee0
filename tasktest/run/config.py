"""Run options and the run configuration file.

``RunOptions`` is what the orchestrator hands to the runner.  ``RunConfig``
reads the optional ``.tasktest_config`` JSON file holding defaults for
those options, so a project can pin a seed or fuzz count without
repeating command-line flags.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

DEFAULT_RUNS = 100

DEFAULT_CONFIG_PATH = Path(".tasktest_config")

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "runs": DEFAULT_RUNS,
    "seed": None,
    "report": None,
    "strict": False,
}


@dataclass(frozen=True)
class RunOptions:
    """Immutable configuration for one run.

    Attributes:
        seed: Seed for the fuzz random generator.
        runs: Number of generated inputs per fuzz test.
        strict: Raise on internal consistency violations instead of
            reporting them as failing tests.
    """

    seed: int
    runs: int = DEFAULT_RUNS
    strict: bool = False

    def __post_init__(self) -> None:
        if self.runs < 1:
            raise ValueError(f"runs must be at least 1, got {self.runs}")

    @classmethod
    def from_time(
        cls, millis: int, runs: int = DEFAULT_RUNS, strict: bool = False
    ) -> RunOptions:
        """Options seeded from a wall-clock reading in milliseconds."""
        return cls(seed=millis, runs=runs, strict=strict)


class RunConfig:
    """Reads the optional .tasktest_config JSON file.

    Keys missing from the file, or set to null, fall back to
    ``DEFAULT_CONFIG``.  An unreadable or malformed file is ignored.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self._data: dict[str, Any] = dict(DEFAULT_CONFIG)
        if path is not None and path.exists():
            self._data.update(self._read(path))

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError):
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if v is not None}

    @property
    def config(self) -> dict[str, Any]:
        """Get the full configuration dict."""
        return dict(self._data)

    @property
    def runs(self) -> int:
        val = self._data.get("runs")
        return int(val) if val is not None else DEFAULT_RUNS

    @property
    def seed(self) -> int | None:
        """Get the pinned seed (None = derive from the wall clock)."""
        val = self._data.get("seed")
        return int(val) if val is not None else None

    @property
    def report(self) -> Path | None:
        """Get the YAML report path (None = no report file)."""
        val = self._data.get("report")
        return Path(val) if val else None

    @property
    def strict(self) -> bool:
        return bool(self._data.get("strict", False))

    def set_config(
        self,
        runs: int | None = None,
        seed: int | None = None,
        report: Path | None = None,
        strict: bool | None = None,
    ) -> None:
        """Update configuration values; ``None`` leaves a value unchanged."""
        if runs is not None:
            self._data["runs"] = runs
        if seed is not None:
            self._data["seed"] = seed
        if report is not None:
            self._data["report"] = str(report)
        if strict is not None:
            self._data["strict"] = strict

    def options(self, clock: Callable[[], int]) -> RunOptions:
        """Build run options.

        ``clock`` returns wall-clock milliseconds and is only read when no
        seed is pinned.
        """
        seed = self.seed if self.seed is not None else clock()
        return RunOptions(seed=seed, runs=self.runs, strict=self.strict)
