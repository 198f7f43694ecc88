"""
Radar Replay Errors

Error types for recording ingestion, geometry and configuration.
Every ingestion error is fatal: no partial recording is ever accepted.
"""

from typing import Optional


class ReplayError(Exception):
    """Base error for all replay operations."""

    pass


class RecordingIOError(ReplayError):
    """Recording file could not be opened or read."""

    def __init__(self, path, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot read recording '{path}': {detail}")


class RecordingParseError(ReplayError):
    """A recording line is not valid JSON or does not match the step layout."""

    def __init__(self, line_number: int, detail: str):
        self.line_number = line_number
        self.detail = detail
        super().__init__(f"Malformed recording line {line_number}: {detail}")


class FormatAssumptionViolated(ReplayError, ValueError):
    """The recording breaks a structural assumption the pivot relies on."""

    def __init__(self, detail: str, step_index: Optional[int] = None):
        self.detail = detail
        self.step_index = step_index
        where = f" (step {step_index})" if step_index is not None else ""
        super().__init__(f"Recording format assumption violated{where}: {detail}")


class DegenerateVectorError(ReplayError, ValueError):
    """Zero-length vector has no defined azimuth or elevation."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message or "Cannot convert a zero-range vector to spherical coordinates."
        )


class ConfigurationError(ReplayError):
    """Configuration file or values are invalid."""

    pass


def format_exception_message(exc: BaseException) -> str:
    """Short one-line description used by the CLI."""
    return f"{type(exc).__name__}: {exc}"
