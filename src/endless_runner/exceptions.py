"""Exception hierarchy for configuration and asset errors."""

from typing import Dict


class RunnerError(Exception):
    """Base class for errors raised by the runner."""


class ConfigError(RunnerError, ValueError):
    """Raised when a configuration value violates a precondition."""


class AssetError(RunnerError):
    """Base class for asset acquisition problems."""


class AssetLoadError(AssetError):
    """Raised when one or more assets in a batch failed to load.

    `failures` maps every failed asset name to a short reason.
    """

    def __init__(self, failures: Dict[str, str]):
        self.failures = dict(failures)
        names = ", ".join(sorted(self.failures))
        super().__init__(f"Failed to load {len(self.failures)} asset(s): {names}")


class AssetNotLoadedError(AssetError, KeyError):
    """Raised by `get()` for a name that has not been loaded."""

    def __str__(self) -> str:
        return f"Asset not loaded: {self.args[0]!r}" if self.args else "Asset not loaded"
