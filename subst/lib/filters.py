"""
Built-in filters.

These are merged under the caller's filter registry (caller entries win) so
that common text clean-up is available without being supplied every time:

    render("[  padded  |trim]")  -> "padded"

Each filter stringifies its input first, so it can be applied to variables
holding non-string values as well as to group text.
"""

from typing import Any, Callable, Final, Mapping


def stringify(value: Any) -> str:
    """Convert a rendered value to output text.

    Booleans use the same spelling as boolean filter parameters and None
    renders as nothing.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def trim(value: Any) -> str:
    return stringify(value).strip()


def upper(value: Any) -> str:
    return stringify(value).upper()


def lower(value: Any) -> str:
    return stringify(value).lower()


def capitalize(value: Any) -> str:
    """Upper-case the first character only, leaving the rest untouched."""
    text: str = stringify(value)
    return text[:1].upper() + text[1:]


def title(value: Any) -> str:
    return stringify(value).title()


BUILTIN_FILTERS: Final[Mapping[str, Callable[..., Any]]] = {
    "trim": trim,
    "upper": upper,
    "lower": lower,
    "capitalize": capitalize,
    "title": title,
}


def filters_merge(
    filters: Mapping[str, Callable[..., Any]], builtins: bool = True
) -> dict[str, Callable[..., Any]]:
    """Combine caller filters with the built-ins.

    Args:
        filters: Caller-supplied registry
        builtins: Whether to include the built-in filters at all

    Returns:
        A new registry; neither input is modified
    """
    if not builtins:
        return dict(filters)
    return {**BUILTIN_FILTERS, **filters}
