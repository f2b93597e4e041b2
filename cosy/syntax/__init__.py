"""
COSY syntax: lexer, parser, serializer and environment interpolation.
"""

from .interpolate import interpolate
from .lexer import Lexer, Token, TokenType, tokenize
from .parser import Parser, parse, parse_string
from .serializer import SerializeOptions, Serializer, to_string

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "Parser",
    "parse",
    "parse_string",
    "interpolate",
    "SerializeOptions",
    "Serializer",
    "to_string",
]
