"""
Template evaluator.

Walks the AST against a context and a filter registry:

- literals render as-is;
- variables resolve their dotted path in the context and fall back to their
  own source text when the path cannot be resolved;
- groups render their children, then filter the concatenated text.

Path segments read mapping keys, integer indexes of sequences, or attributes.
Attribute reads go through `getattr`, so properties run with the owning object
as receiver:

    class Person:
        first, last = "Bob", "Johnson"

        @property
        def name(self):
            return f"{self.first} {self.last}"

    render("{person.name}", {"person": Person()})  -> "Bob Johnson"
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Final, Self
from subst.lib.errors import EvaluationError
from subst.lib.filters import stringify
from subst.models.dataModel import (
    ContextRef,
    FilterCall,
    Group,
    Literal,
    Node,
    Param,
    ParamLiteral,
    Variable,
)

# Sentinel for an unresolvable segment; None in the context also counts as missing
MISSING: Final[object] = object()

INDEX: Final[re.Pattern[str]] = re.compile(r"-?[0-9]+", re.ASCII)


def index_parse(key: str) -> int | None:
    """Integer value of a sequence index segment such as `0` or `-1`, else None."""
    if INDEX.fullmatch(key) is None:
        return None
    return int(key)


def attribute_get(owner: Any, key: str) -> Any:
    """Read one path segment from owner.

    Args:
        owner: Mapping, sequence or arbitrary object
        key: Path segment

    Returns:
        The value, or MISSING if owner has no such key, index or public
        attribute

    Raises:
        EvaluationError: If a property getter raises anything but
            AttributeError
    """
    if owner is None:
        return MISSING
    if isinstance(owner, Mapping):
        return owner[key] if key in owner else MISSING
    if isinstance(owner, Sequence) and not isinstance(owner, (str, bytes)):
        index: int | None = index_parse(key)
        if index is not None:
            return owner[index] if -len(owner) <= index < len(owner) else MISSING
    # private and dunder attributes are never exposed to templates
    if key.startswith("_"):
        return MISSING
    try:
        return getattr(owner, key, MISSING)
    except Exception as e:
        raise EvaluationError(f"Reading '{key}' failed: {e}") from e


def path_resolve(context: Any, path: tuple[str, ...]) -> Any:
    """Walk a dotted path through context.

    Returns:
        The resolved value, or MISSING if any step is missing or None
    """
    value: Any = context
    for segment in path:
        value = attribute_get(value, segment)
        if value is MISSING or value is None:
            return MISSING
    return value


class Evaluator:
    """Renders AST nodes against one context and filter registry.

    The evaluator only reads `context` and `filters`; neither is modified.

    Attributes:
        context: Object supplying values for variable paths
        filters: Mapping of filter name to callable
    """

    def __init__(
        self: Self, context: Any, filters: Mapping[str, Callable[..., Any]]
    ) -> None:
        self.context: Any = context
        self.filters: Mapping[str, Callable[..., Any]] = filters

    def render(self: Self, nodes: Sequence[Node]) -> str:
        """Render and concatenate a sequence of nodes.

        Raises:
            EvaluationError: On an unknown or failing filter
        """
        return "".join(self.node_render(node) for node in nodes)

    def node_render(self: Self, node: Node) -> str:
        if isinstance(node, Literal):
            return node.text
        if isinstance(node, Variable):
            return self._variable_render(node)
        if isinstance(node, Group):
            return self._group_render(node)
        raise TypeError(f"Unknown node type: {type(node).__name__}")

    def _variable_render(self: Self, node: Variable) -> str:
        value: Any = path_resolve(self.context, node.path)
        if value is MISSING:
            return node.source
        return stringify(self.filters_apply(value, node.filters))

    def _group_render(self: Self, node: Group) -> str:
        text: str = self.render(node.children)
        return stringify(self.filters_apply(text, node.filters))

    def param_resolve(self: Self, param: Param) -> Any:
        """Value passed to a filter for its parameter.

        A context reference yields the top-level context value when the key
        is present, else the reference text itself.
        """
        if isinstance(param, ParamLiteral):
            return param.value
        if isinstance(param, ContextRef):
            value: Any = attribute_get(self.context, param.key)
            return param.key if value is MISSING else value
        raise TypeError(f"Unknown parameter type: {type(param).__name__}")

    def filters_apply(self: Self, value: Any, calls: Sequence[FilterCall]) -> Any:
        """Run value through each filter call, left to right.

        Raises:
            EvaluationError: If a filter is not registered or raises
        """
        for call in calls:
            function: Callable[..., Any] | None = self.filters.get(call.name)
            if function is None:
                raise EvaluationError(f"Unknown filter: {call.name}", call.name)
            try:
                if call.param is None:
                    value = function(value)
                else:
                    value = function(value, self.param_resolve(call.param))
            except Exception as e:
                raise EvaluationError(
                    f"Filter '{call.name}' failed: {e}", call.name
                ) from e
        return value


def evaluate(
    nodes: Sequence[Node],
    context: Any,
    filters: Mapping[str, Callable[..., Any]],
) -> str:
    """Render nodes against context using filters."""
    return Evaluator(context, filters).render(nodes)
