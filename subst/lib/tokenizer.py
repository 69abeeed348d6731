"""
Template tokenizer.

Splits a template into LITERAL runs and structural tokens using a configurable
symbol table. Scanning is done over grapheme clusters, so a symbol only matches
a whole user-perceived character and an emoji sequence that merely contains a
symbol codepoint is left intact.

Every structural token is preceded by a (possibly empty) LITERAL token, and the
stream always ends with a LITERAL token. The parser relies on both.

Example:
    tokenize("Hi {name}!")
    -> LITERAL "Hi ", VAR_START "{", LITERAL "name", VAR_END "}", LITERAL "!"
"""

from subst.lib.segment import segmentize
from subst.models.dataModel import DEFAULT_SYMBOLS, SymbolTable, Token, TokenType


def tokenize(text: str, symbols: SymbolTable = DEFAULT_SYMBOLS) -> list[Token]:
    """Tokenize a template in a single forward pass.

    Args:
        text: Template source
        symbols: Structural symbols to recognize

    Returns:
        Token stream ending with a LITERAL token
    """
    types: dict[str, TokenType] = symbols.types()
    tokens: list[Token] = []
    buffer: list[str] = []
    start: int = 0

    for position, cluster in enumerate(segmentize(text)):
        token_type: TokenType | None = types.get(cluster)
        if token_type is None:
            buffer.append(cluster)
            continue
        tokens.append(Token(TokenType.LITERAL, "".join(buffer), start))
        tokens.append(Token(token_type, cluster, position))
        buffer = []
        start = position + 1

    # flush trailing text
    tokens.append(Token(TokenType.LITERAL, "".join(buffer), start))
    return tokens
