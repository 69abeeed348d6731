"""
Errors raised while rendering a template.

Both error kinds are built at the point of failure. Whether they reach the
caller or are only reported to the log is decided by the engine's `throws`
option.
"""


class SubstError(Exception):
    """Base class for template errors."""


class ParseError(SubstError):
    """Malformed template.

    Attributes:
        fragment: The piece of template source where parsing failed
    """

    def __init__(self, message: str, fragment: str = "") -> None:
        self.fragment: str = fragment
        if fragment:
            message = f"{message}: {fragment!r}"
        super().__init__(message)


class EvaluationError(SubstError):
    """Unknown filter, or a filter (or property getter) that failed.

    Attributes:
        filter_name: Name of the filter involved, if any
    """

    def __init__(self, message: str, filter_name: str | None = None) -> None:
        self.filter_name: str | None = filter_name
        super().__init__(message)
