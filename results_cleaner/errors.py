"""Exceptions raised while cleaning a results document."""

from __future__ import annotations


class ResultsCleanerError(Exception):
    """Base class for every failure of a cleaning run."""


class DocumentReadError(ResultsCleanerError, OSError):
    """The input file is missing, unreadable or over the size limit."""


class DocumentParseError(ResultsCleanerError, ValueError):
    """The input file does not hold valid JSON."""


class DocumentShapeError(ResultsCleanerError, ValueError):
    """The parsed document is not shaped like ``{"results": [{...}, ...]}``."""

    def __init__(self, path: str, expected: str, found: str) -> None:
        super().__init__(f"{path}: expected {expected}, found {found}")
        self.path = path
        self.expected = expected
        self.found = found


class DocumentDepthError(ResultsCleanerError, ValueError):
    """The parsed document nests deeper than the configured limit."""

    def __init__(self, path: str, limit: int) -> None:
        super().__init__(f"{path}: nesting exceeds the depth limit of {limit}")
        self.path = path
        self.limit = limit


class OutputEncodeError(ResultsCleanerError, ValueError):
    """The projected records cannot be encoded as JSON."""


class OutputWriteError(ResultsCleanerError, OSError):
    """The output file cannot be written."""
