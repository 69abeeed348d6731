"""
Grapheme cluster segmentation.

Templates are scanned one user-perceived character at a time so that
multi-codepoint symbols and identifiers (emoji ZWJ sequences, skin-tone
modifiers, flags, combining marks) are never split. Segmentation follows the
Unicode extended grapheme cluster rules (UAX #29) as implemented by the
`regex` module's `\\X` pattern.
"""

from typing import Final
import regex

GRAPHEME: Final[regex.Pattern] = regex.compile(r"\X")


def segmentize(text: str) -> list[str]:
    """Split text into extended grapheme clusters.

    Args:
        text: Any string

    Returns:
        Ordered list of clusters whose concatenation equals `text`
    """
    return GRAPHEME.findall(text)
