"""
Pattern types for string replacement.
A pattern is either a literal substring or a compiled regular expression.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple, Union

import regex  # More powerful regex library with better Unicode support

logger = logging.getLogger(__name__)

# $$, ${name} and $1 style references in regex replacements
_DOLLAR_REFERENCE = re.compile(r'\$(?:\$|\{(\w+)\}|(\d+))')


def _expand_dollar_reference(match: re.Match) -> str:
    if match.group(0) == '$$':
        return '$'
    name = match.group(1) or match.group(2)
    return rf'\g<{name}>'


def convert_backreferences(replacement: str) -> str:
    """
    Convert dollar-style backreferences to the Python engine syntax.

    ``$1`` and ``${name}`` become ``\\g<1>`` and ``\\g<name>``; ``$$`` becomes
    a literal ``$``. Backslash references are left for the engine.
    """
    return _DOLLAR_REFERENCE.sub(_expand_dollar_reference, replacement)


# $$, ${name}, $1, \g<name> and \1 references; any other backslash is literal
_GROUP_REFERENCE = re.compile(r'\$\$|\$\{(\w+)\}|\$(\d+)|\\g<(\w+)>|\\(\d+)')


def _group_or_empty(match: Any, key: Union[int, str]) -> str:
    try:
        value = match.group(key)
    except (IndexError, OverflowError):
        # No such group in the pattern
        return ''
    return value or ''


def replacement_expander(replacement: str) -> Callable[[Any], str]:
    """
    Build a function that expands replacement for one regex match.

    Group references resolve through match.group(); a group that does not
    exist or did not participate in the match expands to an empty string.
    ``$$`` is a literal ``$`` and every other backslash is kept as-is, so
    the expansion never raises for a valid compiled pattern.

    Args:
        replacement: Replacement string with optional group references

    Returns:
        Callable suitable as the repl argument of Pattern.sub()
    """
    pieces: List[Tuple[str, Optional[Union[int, str]]]] = []
    last_end = 0

    for ref in _GROUP_REFERENCE.finditer(replacement):
        literal = replacement[last_end:ref.start()]
        if ref.group(0) == '$$':
            pieces.append((literal + '$', None))
        else:
            name = next(group for group in ref.groups() if group is not None)
            pieces.append((literal, int(name) if name.isdigit() else name))
        last_end = ref.end()

    tail = replacement[last_end:]

    def expand(match: Any) -> str:
        parts = []
        for literal, key in pieces:
            parts.append(literal)
            if key is not None:
                parts.append(_group_or_empty(match, key))
        parts.append(tail)
        return ''.join(parts)

    return expand


@dataclass(frozen=True)
class Literal:
    """An exact substring, matched without metacharacter interpretation."""
    text: str

    def replace_all(self, text: str, replacement: str) -> str:
        return text.replace(self.text, replacement)


@dataclass(frozen=True)
class CompiledRegex:
    """A compiled pattern from the 'regex' library or the 're' module."""
    regex: Any

    def replace_all(self, text: str, replacement: str) -> str:
        """
        Replace every non-overlapping match, leftmost first.

        Args:
            text: Text to process
            replacement: Replacement string (supports backreferences like \\1, \\g<name>, $1 or ${name})

        Returns:
            New text with all matches replaced
        """
        return self.regex.sub(replacement_expander(replacement), text)

    @property
    def pattern(self) -> str:
        return self.regex.pattern


Pattern = Union[Literal, CompiledRegex]

PatternArg = Union[str, Pattern, re.Pattern, regex.Pattern]


def as_pattern(value: PatternArg) -> Pattern:
    """
    Turn a caller-supplied pattern argument into a Pattern.

    Args:
        value: A literal string, a Pattern, or a compiled 're'/'regex' pattern

    Returns:
        Literal or CompiledRegex

    Raises:
        TypeError: If the value is none of the above
    """
    if isinstance(value, (Literal, CompiledRegex)):
        return value
    if isinstance(value, str):
        return Literal(value)
    if isinstance(value, (re.Pattern, regex.Pattern)):
        return CompiledRegex(value)
    raise TypeError(
        f"pattern must be a str or a compiled regular expression, not {type(value).__name__}")


def compile_pattern(pattern: str,
                    case_sensitive: bool = True,
                    use_advanced_regex: bool = True) -> CompiledRegex:
    """
    Compile a regex pattern.

    Args:
        pattern: Regex pattern
        case_sensitive: If False, compile with IGNORECASE
        use_advanced_regex: Use 'regex' library instead of 're' for better Unicode support

    Returns:
        CompiledRegex wrapping the compiled pattern

    Raises:
        regex.error or re.error: If the pattern is malformed
    """
    regex_module = regex if use_advanced_regex else re
    flags = 0 if case_sensitive else regex_module.IGNORECASE
    logger.debug("Compiling %r with %s (flags=%d)", pattern, regex_module.__name__, flags)
    return CompiledRegex(regex_module.compile(pattern, flags))


def validate_pattern(pattern: str, use_advanced_regex: bool = True) -> Tuple[bool, str]:
    """
    Validate regex pattern.

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        compile_pattern(pattern, use_advanced_regex=use_advanced_regex)
        return True, ""
    except (regex.error, re.error) as e:
        return False, str(e)
