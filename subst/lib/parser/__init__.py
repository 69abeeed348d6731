"""
Parser package for SUBST templates.

Provides the recursive descent parser that turns a token stream into AST
nodes, and the classification of filter parameters.
"""

from .base import TemplateParser, parse
from .params import param_parse

__all__ = ["TemplateParser", "parse", "param_parse"]
