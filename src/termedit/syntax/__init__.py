"""Line tokenizer for syntax coloring."""

from .tokenizer import KEYWORDS, TYPE_NAMES, Token, TokenClass, clip_tokens, tokenize

__all__ = [
    "KEYWORDS",
    "TYPE_NAMES",
    "Token",
    "TokenClass",
    "clip_tokens",
    "tokenize",
]
