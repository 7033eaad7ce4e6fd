"""Tokenizer, type model and scopes for compiling a subset of Python to C."""

__version__ = "0.1.0"

__all__ = ["errors", "lexer", "scope", "tokens", "vartypes"]