"""
Configuration facade for SUBST.

An `Engine` binds a `RenderOptions` (symbol table, error mode, built-in
filters) and exposes the render pipeline:

    text -> graphemes -> tokens -> AST -> rendered string

Every call builds its own tokens and AST; the engine keeps nothing but its
immutable options, so one engine may be shared freely, including across
threads.

Example:
    from subst import configure

    strict = configure(throws=True)
    strict("{name|upper}", {"name": "ada"})      -> "ADA"

    angled = configure(tokens="«»‹›|=")
    angled("‹«foo»|upper›", {"foo": "bar"})      -> "BAR"
"""

from collections.abc import Mapping
from typing import Any, Callable, Self
from subst.lib.errors import SubstError
from subst.lib.evaluator import evaluate
from subst.lib.filters import filters_merge
from subst.lib.log import COMPLAIN, LOG
from subst.lib.parser import parse
from subst.lib.tokenizer import tokenize
from subst.models.dataModel import (
    Node,
    RenderOptions,
    RenderResult,
    SymbolTable,
    Token,
)

Filters = Mapping[str, Callable[..., Any]]


def arguments_check(template: Any, filters: Any) -> None:
    """Validate the arguments of a render call.

    Raises:
        TypeError: If template is not a string, or filters is not a mapping
            of callables
    """
    if not isinstance(template, str):
        raise TypeError(
            f"Template must be a string, not {type(template).__name__}"
        )
    if not isinstance(filters, Mapping):
        raise TypeError(f"Filters must be a mapping, not {type(filters).__name__}")
    for name, function in filters.items():
        if not callable(function):
            raise TypeError(f"Filter '{name}' is not callable")


class Engine:
    """A render function bound to a set of options.

    Attributes:
        options: The bound, validated options
        symbols: Symbol table derived from `options.tokens`
    """

    def __init__(self: Self, options: RenderOptions | None = None) -> None:
        self.options: RenderOptions = options or RenderOptions()
        self.symbols: SymbolTable = self.options.symbols

    def __repr__(self: Self) -> str:
        return (
            f"Engine(tokens={self.options.tokens!r}, "
            f"throws={self.options.throws}, builtins={self.options.builtins})"
        )

    def __call__(
        self: Self,
        template: str,
        context: Any = None,
        filters: Filters | None = None,
    ) -> str:
        return self.render(template, context, filters)

    def compile(self: Self, template: str) -> list[Node]:
        """Tokenize and parse a template without rendering it.

        Raises:
            ParseError: If the template is malformed
        """
        tokens: list[Token] = tokenize(template, self.symbols)
        return parse(tokens, self.symbols)

    def render_strict(
        self: Self,
        template: str,
        context: Any = None,
        filters: Filters | None = None,
    ) -> str:
        """Render, always raising template errors.

        Raises:
            TypeError: On invalid arguments
            ParseError: If the template is malformed
            EvaluationError: On an unknown or failing filter
        """
        context = {} if context is None else context
        filters = {} if filters is None else filters
        arguments_check(template, filters)

        nodes: list[Node] = self.compile(template)
        registry: dict[str, Callable[..., Any]] = filters_merge(
            filters, self.options.builtins
        )
        return evaluate(nodes, context, registry)

    def render_result(
        self: Self,
        template: str,
        context: Any = None,
        filters: Filters | None = None,
    ) -> RenderResult:
        """Render without raising template errors.

        Returns:
            RenderResult with the text on success, or the error message and
            empty text on failure

        Raises:
            TypeError: On invalid arguments
        """
        try:
            text: str = self.render_strict(template, context, filters)
            return RenderResult(text=text, error=None, success=True)
        except SubstError as e:
            LOG(f"Render failed with {type(e).__name__}: {e}")
            return RenderResult(text="", error=str(e), success=False)

    def render(
        self: Self,
        template: str,
        context: Any = None,
        filters: Filters | None = None,
    ) -> str:
        """Render template according to the bound `throws` option.

        With `throws` set, template errors propagate. Otherwise they are
        reported via COMPLAIN and the empty string is returned.
        """
        if self.options.throws:
            return self.render_strict(template, context, filters)

        result: RenderResult = self.render_result(template, context, filters)
        if not result.success:
            COMPLAIN(f"Template could not be rendered: {result.error}")
        return result.text


def configure(
    options: RenderOptions | Mapping[str, Any] | None = None, **overrides: Any
) -> Engine:
    """Create an engine bound to the given options.

    Args:
        options: RenderOptions, or a mapping of option names to values
        overrides: Individual options; these win over `options`

    Returns:
        A callable Engine

    Raises:
        pydantic.ValidationError: If an option is unknown or invalid
    """
    if isinstance(options, RenderOptions):
        settings: dict[str, Any] = options.model_dump()
    else:
        settings = dict(options or {})
    settings.update(overrides)
    return Engine(RenderOptions(**settings))


# The default engine, bound to default options
render: Engine = configure()
