"""Exception types raised by ClassPrune."""


class ClassPruneError(Exception):
    """Base class for ClassPrune errors."""


class EngineInvocationError(ClassPruneError, RuntimeError):
    """The reachability engine rejected its configuration or failed to run."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr


class ConfigError(ClassPruneError, ValueError):
    """The ClassPrune configuration is missing or invalid."""
