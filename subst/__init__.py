"""
SUBST: grapheme-aware string interpolation with filters and groups.

    from subst import render

    render("I am so {mood}.", {"mood": "sad"})          -> "I am so sad."
    render("[Hello {name}!|upper]", {"name": "World"})  -> "HELLO WORLD!"
"""

from subst.lib.engine import Engine, configure, render
from subst.lib.errors import EvaluationError, ParseError, SubstError
from subst.models.dataModel import RenderOptions, RenderResult

__all__ = [
    "Engine",
    "configure",
    "render",
    "RenderOptions",
    "RenderResult",
    "SubstError",
    "ParseError",
    "EvaluationError",
]
