"""Exception hierarchy for pyps."""


class PypsError(Exception):
    """Base class for all pyps errors."""


class ParseError(PypsError):
    """A status record could not be turned into a ProcessEntry."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        if path:
            message = f"{message}: {path}"
        super().__init__(message)


class SourceUnavailableError(ParseError):
    """A record file or the base directory could not be opened or listed."""


class MalformedRecordError(ParseError):
    """A record's fields do not match the stat field layout."""


class EmptyReportError(PypsError):
    """A report was requested for an empty or absent collection."""


class UsageError(PypsError):
    """The command line could not be parsed."""
