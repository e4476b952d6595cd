"""Replace all matches of a literal or regex pattern, collapsing repeated replacements."""

from .patterns import (
    CompiledRegex,
    Literal,
    Pattern,
    PatternArg,
    as_pattern,
    compile_pattern,
    convert_backreferences,
    replacement_expander,
    validate_pattern,
)
from .replacer import Replacer, replace, replace_all

__all__ = [
    'CompiledRegex',
    'Literal',
    'Pattern',
    'PatternArg',
    'Replacer',
    'as_pattern',
    'compile_pattern',
    'convert_backreferences',
    'replace',
    'replace_all',
    'replacement_expander',
    'validate_pattern',
]
