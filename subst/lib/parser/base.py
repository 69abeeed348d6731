"""
Recursive descent parser for template token streams.

Turns the tokenizer's output into a tree of `Literal`, `Variable` and `Group`
nodes. The parser holds a single cursor into the token list and never
backtracks.

Grammar (informal):

    template  := node*
    node      := LITERAL | variable | group
    variable  := VAR_START LITERAL filter* VAR_END
    group     := GROUP_START node* filter* GROUP_END
    filter    := FILTER LITERAL (PARAM LITERAL)?

Because the tokenizer puts a LITERAL before every structural token, the
identifier slots above are always present as tokens; an empty one is reported
as a missing name or value.

Example:
    parse(tokenize("[Hello {name}!|upper]"))
    -> [Group(children=(Literal("Hello "), Variable(("name",)), Literal("!")),
              filters=(FilterCall("upper"),))]
"""

from typing import Self
from subst.lib.errors import ParseError
from subst.lib.parser.params import param_parse
from subst.models.dataModel import (
    DEFAULT_SYMBOLS,
    FilterCall,
    Group,
    Literal,
    Node,
    SymbolTable,
    Token,
    TokenType,
    Variable,
)


class TemplateParser:
    """Parser over one token stream.

    Attributes:
        tokens: Token stream produced by `tokenize`
        symbols: Symbol table the stream was produced with, used to rebuild
            fallback source text for variables
        index: Cursor into `tokens`
    """

    def __init__(
        self: Self, tokens: list[Token], symbols: SymbolTable = DEFAULT_SYMBOLS
    ) -> None:
        self.tokens: list[Token] = tokens
        self.symbols: SymbolTable = symbols
        self.index: int = 0

    def parse(self: Self) -> list[Node]:
        """Parse the whole stream into top-level nodes.

        Raises:
            ParseError: On any malformed construct
        """
        self.index = 0
        nodes: list[Node] = self._nodes_parse(in_group=False)
        if not self._at_end():
            # only a stray closing or filter symbol can stop the top level
            token: Token = self._peek()
            raise ParseError(
                f"Unexpected {token.type.value} at position {token.position}",
                self._fragment(self.index - 1, self.index + 2),
            )
        return nodes or [Literal("")]

    def _at_end(self: Self) -> bool:
        return self.index >= len(self.tokens)

    def _peek(self: Self) -> Token:
        return self.tokens[self.index]

    def _advance(self: Self) -> Token:
        token: Token = self.tokens[self.index]
        self.index += 1
        return token

    def _fragment(self: Self, start: int, end: int | None = None) -> str:
        """Source text of tokens[start:end]."""
        start = max(start, 0)
        return "".join(token.value for token in self.tokens[start:end])

    def _literal_expect(self: Self) -> Token:
        # the tokenizer guarantees a LITERAL before every structural token
        token: Token = self._advance()
        if token.type is not TokenType.LITERAL:
            raise ParseError(
                f"Unexpected {token.type.value} at position {token.position}",
                token.value,
            )
        return token

    def _nodes_parse(self: Self, in_group: bool) -> list[Node]:
        """Parse nodes until the end of input or a symbol the caller handles.

        Inside a group, a FILTER or GROUP_END stops the scan. At the top level
        any symbol that cannot start a node stops it.
        """
        nodes: list[Node] = []
        while not self._at_end():
            token: Token = self._peek()
            if token.type is TokenType.LITERAL:
                self._advance()
                if token.value:
                    nodes.append(Literal(token.value))
            elif token.type is TokenType.VAR_START:
                nodes.append(self._variable_parse())
            elif token.type is TokenType.GROUP_START:
                nodes.append(self._group_parse())
            elif in_group and token.type in (TokenType.FILTER, TokenType.GROUP_END):
                break
            elif in_group:
                raise ParseError(
                    f"Unexpected {token.type.value} in group at position "
                    f"{token.position}",
                    self._fragment(self.index - 1, self.index + 2),
                )
            else:
                break
        return nodes

    def _variable_parse(self: Self) -> Variable:
        opening: int = self.index
        self._advance()
        path_token: Token = self._literal_expect()
        path: tuple[str, ...] = tuple(
            segment.strip() for segment in path_token.value.split(".")
        )
        if not all(path):
            message: str = (
                "Empty variable path segment"
                if path_token.value.strip()
                else "Empty variable path"
            )
            raise ParseError(message, self._fragment(opening, self.index + 1))

        filters: tuple[FilterCall, ...] = self._filters_parse(
            opening, TokenType.VAR_END, "Unmatched variable start"
        )
        self._advance()
        source: str = (
            f"{self.symbols.var_start}{path_token.value}{self.symbols.var_end}"
        )
        return Variable(path=path, filters=filters, source=source)

    def _group_parse(self: Self) -> Group:
        opening: int = self.index
        self._advance()
        children: list[Node] = self._nodes_parse(in_group=True)
        filters: tuple[FilterCall, ...] = self._filters_parse(
            opening, TokenType.GROUP_END, "Unmatched group start"
        )
        self._advance()
        return Group(children=tuple(children) or (Literal(""),), filters=filters)

    def _filters_parse(
        self: Self, opening: int, closing: TokenType, unmatched: str
    ) -> tuple[FilterCall, ...]:
        """Parse zero or more filter calls, stopping before `closing`.

        Args:
            opening: Index of the token that opened the construct
            closing: Token type expected after the filters
            unmatched: Message used when the input ends before `closing`
        """
        calls: list[FilterCall] = []
        while not self._at_end() and self._peek().type is TokenType.FILTER:
            self._advance()
            name: str = self._literal_expect().value.strip()
            if not name:
                raise ParseError(
                    "Missing filter name", self._fragment(opening, self.index + 1)
                )
            call: FilterCall = FilterCall(name)
            if not self._at_end() and self._peek().type is TokenType.PARAM:
                self._advance()
                value: str = self._literal_expect().value
                if not value.strip():
                    raise ParseError(
                        "Missing filter parameter value",
                        self._fragment(opening, self.index + 1),
                    )
                try:
                    call = FilterCall(name, param_parse(value))
                except ValueError as e:
                    raise ParseError(str(e), self._fragment(opening, self.index)) from e
            calls.append(call)

        if self._at_end():
            raise ParseError(unmatched, self._fragment(opening))
        token: Token = self._peek()
        if token.type is not closing:
            raise ParseError(
                f"Unexpected {token.type.value} at position {token.position}",
                self._fragment(opening, self.index + 1),
            )
        return tuple(calls)


def parse(tokens: list[Token], symbols: SymbolTable = DEFAULT_SYMBOLS) -> list[Node]:
    """Parse a token stream into AST nodes.

    Args:
        tokens: Output of `tokenize`
        symbols: Symbol table used to produce `tokens`

    Returns:
        Top-level nodes, never empty

    Raises:
        ParseError: If the template is malformed
    """
    return TemplateParser(tokens, symbols).parse()
