"""
String replacement with literal or regex patterns.
Consecutive copies of the replacement left behind by a substitution are collapsed into one.
"""

import logging
import re
from typing import Tuple

import regex  # More powerful regex library with better Unicode support

from .patterns import (
    CompiledRegex,
    Literal,
    PatternArg,
    as_pattern,
    compile_pattern,
    validate_pattern,
)

logger = logging.getLogger(__name__)


class Replacer:
    """
    Replaces all matches of a literal or regex pattern in a string.
    Holds no state besides the engine choice, so one instance can be shared between threads.
    """

    def __init__(self, use_advanced_regex: bool = True):
        """
        Initialize replacer.

        Args:
            use_advanced_regex: Use 'regex' library instead of 're' for compiling
                                and for the collapse step
        """
        self.use_advanced_regex = use_advanced_regex
        self.regex_module = regex if use_advanced_regex else re

    def replace(self, text: str, pattern: PatternArg, replacement: str) -> str:
        """
        Replace all matches of pattern in text, then collapse runs of the replacement.

        A literal pattern that is empty or equal to the replacement returns the
        text unchanged. When the replacement is non-empty, every run of two or
        more back-to-back copies of it in the result is merged into one copy,
        including runs that were already present in the input.

        Args:
            text: Text to process
            pattern: Literal string, Literal/CompiledRegex, or a compiled 're'/'regex' pattern
            replacement: Replacement string

        Returns:
            New text with all matches replaced
        """
        pattern = as_pattern(pattern)

        if not text:
            return text

        if isinstance(pattern, Literal) and (not pattern.text or pattern.text == replacement):
            logger.debug("Literal %r is empty or equals the replacement, skipping", pattern.text)
            return text

        result = pattern.replace_all(text, replacement)

        if replacement:
            result = self._collapse(result, replacement)

        return result

    def replace_all(self, text: str, pattern: PatternArg, replacement: str) -> str:
        """
        Replace all matches of pattern in text without the collapse step.

        An empty literal pattern matches between every character, as with str.replace.
        """
        pattern = as_pattern(pattern)
        logger.debug("Replacing all matches of %r", pattern)
        return pattern.replace_all(text, replacement)

    def _collapse(self, text: str, replacement: str) -> str:
        """Merge consecutive copies of replacement into a single copy."""
        run = self.regex_module.compile(f"(?:{self.regex_module.escape(replacement)})+")
        return run.sub(lambda _: replacement, text)

    def compile(self, pattern: str, case_sensitive: bool = True) -> CompiledRegex:
        """Compile a regex pattern with this replacer's engine."""
        return compile_pattern(pattern, case_sensitive=case_sensitive,
                               use_advanced_regex=self.use_advanced_regex)

    def validate_pattern(self, pattern: str) -> Tuple[bool, str]:
        """
        Validate regex pattern.

        Returns:
            Tuple of (is_valid, error_message)
        """
        return validate_pattern(pattern, use_advanced_regex=self.use_advanced_regex)


_default_replacer = Replacer()


def replace(text: str, pattern: PatternArg, replacement: str) -> str:
    """Replace all matches of pattern in text and collapse runs of the replacement."""
    return _default_replacer.replace(text, pattern, replacement)


def replace_all(text: str, pattern: PatternArg, replacement: str) -> str:
    """Replace all matches of pattern in text."""
    return _default_replacer.replace_all(text, pattern, replacement)
