"""Token-level parsing utilities for PHP and Blade sources."""

from parse.arguments import argument_commas, count_arguments
from parse.call_targets import (
    CallForm,
    CallSite,
    CallTarget,
    classify_call,
    find_call_site,
)
from parse.grouping import find_next_effective, find_previous_effective, matching_closer
from parse.php_tokens import tokenize_file, tokenize_php
from parse.tokens import Token, TokenKind

__all__ = [
    "CallForm",
    "CallSite",
    "CallTarget",
    "Token",
    "TokenKind",
    "argument_commas",
    "classify_call",
    "count_arguments",
    "find_call_site",
    "find_next_effective",
    "find_previous_effective",
    "matching_closer",
    "tokenize_file",
    "tokenize_php",
]
