"""
Preset match patterns as a closed tagged variant.

Three pattern kinds exist and every matcher is keyed on PatternKind, so adding
a kind without a matcher fails at import time instead of silently never
matching.

    LITERAL    normalized pattern is a substring of the normalized field name
    REGEX      expression searched in the raw field name
    PREDICATE  callable(field_name, descriptor) -> bool; exceptions mean no match
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from .exceptions import InvalidLayoutValueError, LayoutError

logger = logging.getLogger(__name__)

_STRIP_RE = re.compile(r"[\[\].\s-]+")


def normalize_name(name: Any) -> str:
    """Lowercase, trim and strip brackets, dots, whitespace and hyphens.

    Field names and preset keys share this, so ``address[line1]`` and
    ``addressline1`` collide.
    """
    if name is None:
        return ""
    return _STRIP_RE.sub("", str(name).strip().lower())


class PatternKind(Enum):
    LITERAL = "literal"
    REGEX = "regex"
    PREDICATE = "predicate"


@dataclass(frozen=True)
class MatchPattern:
    """One preset match pattern. Build with the literal/regex/predicate helpers."""
    kind: PatternKind
    value: Union[str, re.Pattern, Callable[[str, Any], bool]]

    def matches(self, field_name: str, descriptor: Any = None) -> bool:
        return _MATCHERS[self.kind](self.value, field_name, descriptor)


def literal(text: str) -> MatchPattern:
    return MatchPattern(PatternKind.LITERAL, normalize_name(text))


def regex(expr: Union[str, re.Pattern]) -> MatchPattern:
    """Regex pattern. String expressions are compiled case-sensitively.

    Raises:
        InvalidLayoutValueError: If the expression does not compile.
    """
    if isinstance(expr, str):
        try:
            expr = re.compile(expr)
        except re.error as e:
            raise InvalidLayoutValueError(f"Invalid regex {expr!r}: {e}") from e
    return MatchPattern(PatternKind.REGEX, expr)


def predicate(fn: Callable[[str, Any], bool]) -> MatchPattern:
    return MatchPattern(PatternKind.PREDICATE, fn)


def coerce_pattern(value: Any) -> MatchPattern:
    """
    Turn a configured match entry into a MatchPattern.

    Strings become literals, compiled regexes become regex patterns and
    callables become predicates.

    Raises:
        InvalidLayoutValueError: For any other value.
    """
    if isinstance(value, MatchPattern):
        return value
    if isinstance(value, re.Pattern):
        return regex(value)
    if isinstance(value, str):
        return literal(value)
    if callable(value):
        return predicate(value)
    raise InvalidLayoutValueError(f"Unsupported match pattern: {value!r}")


def _match_literal(needle: str, field_name: str, descriptor: Any) -> bool:
    if not needle:
        return False
    return needle in normalize_name(field_name)


def _match_regex(expr: re.Pattern, field_name: str, descriptor: Any) -> bool:
    return expr.search(field_name or "") is not None


def _match_predicate(fn: Callable[[str, Any], bool], field_name: str, descriptor: Any) -> bool:
    try:
        return bool(fn(field_name, descriptor))
    except Exception as e:
        logger.debug(f"Predicate {getattr(fn, '__name__', fn)!r} failed for '{field_name}': {e}")
        return False


_MATCHERS: Dict[PatternKind, Callable[[Any, str, Optional[Any]], bool]] = {
    PatternKind.LITERAL: _match_literal,
    PatternKind.REGEX: _match_regex,
    PatternKind.PREDICATE: _match_predicate,
}

if set(_MATCHERS) != set(PatternKind):
    raise LayoutError(f"No matcher for pattern kind(s): {set(PatternKind) - set(_MATCHERS)}")
