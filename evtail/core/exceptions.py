"""Custom exceptions for evtail core functionality."""


class EvtailError(Exception):
    """Base exception for all evtail errors."""


class ConfigurationError(EvtailError):
    """Raised when the run cannot start because of bad settings."""


class InvalidPatternError(ConfigurationError):
    """Raised when a message filter pattern fails to compile."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid message pattern '{pattern}': {reason}")


class InvalidTimeWindowError(ConfigurationError):
    """Raised when the begin/end window cannot be built."""


class SourceError(EvtailError):
    """Base exception for Event Source errors."""


class SourceConnectionError(SourceError):
    """Raised when the Event Source cannot be reached or opened."""


class FetchError(SourceError):
    """Raised when reading a page from a collector fails."""


class TransientFetchError(FetchError):
    """A fetch failure the source reports as worth retrying."""


class RenderError(EvtailError):
    """Base exception for rendering errors."""


class UnknownModeError(RenderError):
    """Raised when a mode is unknown or does not apply to the target."""

    def __init__(self, mode: str):
        self.mode = mode
        super().__init__(f"unknown mode: {mode}")


class UnknownFormatError(RenderError):
    """Raised when a format is not implemented for a mode."""

    def __init__(self, mode: str, fmt: str):
        self.mode = mode
        self.format = fmt
        super().__init__(f"unknown format '{fmt}' for mode '{mode}'")
