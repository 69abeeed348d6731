"""
Filter parameter parsing.

The text after a PARAM symbol is classified into one of:
- a double-quoted string: `"🤓"`
- a boolean: `true` / `false`
- a number: `3`, `-2`, `0.5`, `1e3`
- a bare identifier, kept as a `ContextRef` and looked up in the context when
  the template is rendered

Surrounding whitespace is ignored. Quoted strings are taken verbatim between
the quotes; there is no escape syntax.
"""

import re
from typing import Final
from subst.models.dataModel import ContextRef, Param, ParamLiteral

NUMBER: Final[re.Pattern] = re.compile(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
BOOLEANS: Final[dict[str, bool]] = {"true": True, "false": False}


def number_parse(text: str) -> int | float | None:
    """Return the numeric value of text, or None if it is not a number."""
    if not NUMBER.fullmatch(text):
        return None
    if re.fullmatch(r"-?\d+", text):
        return int(text)
    return float(text)


def param_parse(text: str) -> Param:
    """Classify raw parameter text.

    Args:
        text: Literal text following the PARAM symbol

    Returns:
        ParamLiteral for quoted, boolean and numeric values, otherwise
        ContextRef

    Raises:
        ValueError: If the value is empty or an unterminated quoted string
    """
    value: str = text.strip()
    if not value:
        raise ValueError("Missing filter parameter value")

    if value.startswith('"'):
        if len(value) < 2 or not value.endswith('"'):
            raise ValueError(f"Unterminated string parameter {value}")
        return ParamLiteral(value[1:-1])

    if value in BOOLEANS:
        return ParamLiteral(BOOLEANS[value])

    number: int | float | None = number_parse(value)
    if number is not None:
        return ParamLiteral(number)

    return ContextRef(value)
