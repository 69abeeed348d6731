"""
dataModel.py

Data models used throughout SUBST.

Features:
- Token types and tokens produced by the tokenizer.
- The symbol table binding the six structural roles to grapheme clusters.
- AST nodes (literals, variables, groups) and filter calls with parameters.
- Render options (Pydantic, validated) and render results.

Tokens and AST nodes are frozen dataclasses: they are created fresh for every
render call and never mutated afterwards. Options and results are Pydantic
models, validated at the boundary of the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from subst.lib.segment import segmentize

DEFAULT_TOKENS: Final[str] = "{}[]|="


class TokenType(Enum):
    """
    Enum for token type.
    """

    LITERAL = "LITERAL"
    VAR_START = "VAR_START"
    VAR_END = "VAR_END"
    GROUP_START = "GROUP_START"
    GROUP_END = "GROUP_END"
    FILTER = "FILTER"
    PARAM = "PARAM"


@dataclass(frozen=True)
class Token:
    """A single token of a template.

    Attributes:
        type: Token type
        value: Literal text, or the matched symbol for structural tokens
        position: Grapheme offset of the token in the template
    """

    type: TokenType
    value: str
    position: int = 0


@dataclass(frozen=True)
class SymbolTable:
    """The six structural symbols of the template syntax.

    Each symbol is a single grapheme cluster. The fixed order used by
    `from_string` is VAR_START, VAR_END, GROUP_START, GROUP_END, FILTER, PARAM.

    Example:
        SymbolTable.from_string("«»‹›|=").var_start == "«"
    """

    var_start: str = "{"
    var_end: str = "}"
    group_start: str = "["
    group_end: str = "]"
    filter: str = "|"
    param: str = "="

    @classmethod
    def from_string(cls, tokens: str) -> SymbolTable:
        """Build a table from a string of exactly six grapheme clusters.

        Raises:
            ValueError: If the string does not hold six distinct clusters
        """
        clusters: list[str] = segmentize(tokens)
        if len(clusters) != 6:
            raise ValueError(
                f"Expected 6 token symbols, got {len(clusters)}: {tokens!r}"
            )
        if len(set(clusters)) != 6:
            raise ValueError(f"Token symbols must be distinct: {tokens!r}")
        if any(cluster.isspace() for cluster in clusters):
            raise ValueError(f"Token symbols cannot be whitespace: {tokens!r}")
        return cls(*clusters)

    def types(self) -> dict[str, TokenType]:
        """Map each symbol to the token type it produces."""
        return {
            self.var_start: TokenType.VAR_START,
            self.var_end: TokenType.VAR_END,
            self.group_start: TokenType.GROUP_START,
            self.group_end: TokenType.GROUP_END,
            self.filter: TokenType.FILTER,
            self.param: TokenType.PARAM,
        }

    def __str__(self) -> str:
        return (
            f"{self.var_start}{self.var_end}{self.group_start}"
            f"{self.group_end}{self.filter}{self.param}"
        )


DEFAULT_SYMBOLS: Final[SymbolTable] = SymbolTable()


@dataclass(frozen=True)
class ParamLiteral:
    """A filter parameter with a fixed value: quoted string, boolean or number."""

    value: str | int | float | bool


@dataclass(frozen=True)
class ContextRef:
    """A bare identifier parameter.

    Looked up in the top-level context at render time; when the key is absent
    the identifier text itself is passed.
    """

    key: str


Param = Union[ParamLiteral, ContextRef]


@dataclass(frozen=True)
class FilterCall:
    """
    A named filter applied to a variable or group, with an optional parameter.
    """

    name: str
    param: Param | None = None


@dataclass(frozen=True)
class Literal:
    """Verbatim output text."""

    text: str


@dataclass(frozen=True)
class Variable:
    """A reference to a value in the context.

    Attributes:
        path: Dot-separated identifier segments, never empty
        filters: Filters applied left to right to the resolved value
        source: Text rendered when the path cannot be resolved
    """

    path: tuple[str, ...]
    filters: tuple[FilterCall, ...] = ()
    source: str = ""


@dataclass(frozen=True)
class Group:
    """A bracketed span rendered as a unit, then filtered as a whole."""

    children: tuple[Node, ...] = ()
    filters: tuple[FilterCall, ...] = ()


Node = Union[Literal, Variable, Group]


class RenderOptions(BaseModel):
    """Options bound to an engine by `configure`.

    Attributes:
        tokens: Six grapheme clusters: VAR_START, VAR_END, GROUP_START,
            GROUP_END, FILTER and PARAM, in that order
        throws: Raise parse and evaluation errors instead of logging them and
            returning an empty string
        builtins: Make the built-in filters available under caller filters
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tokens: str = Field(default=DEFAULT_TOKENS, description="Structural symbols.")
    throws: bool = Field(default=False, description="Propagate template errors.")
    builtins: bool = Field(default=True, description="Include built-in filters.")

    @field_validator("tokens")
    @classmethod
    def tokens_validate(cls, value: str) -> str:
        SymbolTable.from_string(value)
        return value

    @property
    def symbols(self) -> SymbolTable:
        """The symbol table described by `tokens`."""
        return SymbolTable.from_string(self.tokens)


class RenderResult(BaseModel):
    """Result of a render operation.

    Attributes:
        text: The rendered text, empty on failure
        error: Optional error message if rendering failed
        success: Whether rendering succeeded
    """

    text: str
    error: str | None = None
    success: bool = True
