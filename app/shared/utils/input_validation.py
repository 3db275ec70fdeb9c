# app/shared/utils/input_validation.py

"""
Building blocks for field validation.

A rule is a plain function that receives an already-normalized value and
returns a tuple (valid, error_message). Rules are composed into ordered
lists by the validators in app.application.validators.
"""

import re
from typing import Any, Callable, Collection, Iterable, List, Optional, Pattern, Tuple

RuleResult = Tuple[bool, Optional[str]]
Rule = Callable[[Any], RuleResult]

# General limit for free-text inputs
MAX_STRING_INPUT_LENGTH = 255

WHITESPACE = re.compile(r'\s+')


def is_blank(value: Any) -> bool:
    """None, empty strings and whitespace-only strings count as absent."""
    return value is None or (isinstance(value, str) and not value.strip())


def sanitize_string(value: Any) -> Any:
    """Trim a string and collapse internal whitespace runs. Non-strings pass through."""
    if not isinstance(value, str):
        return value
    return WHITESPACE.sub(' ', value.strip())


def is_string(label: str) -> Rule:
    def rule(value: Any) -> RuleResult:
        if isinstance(value, str):
            return True, None
        return False, f"{label} must be a string"
    return rule


def max_length(label: str, limit: int) -> Rule:
    def rule(value: str) -> RuleResult:
        if len(value) > limit:
            return False, f"{label} must not exceed {limit} characters"
        return True, None
    return rule


def exact_length(label: str, size: int, message: Optional[str] = None) -> Rule:
    def rule(value: str) -> RuleResult:
        if len(value) != size:
            return False, message or f"{label} must be exactly {size} characters"
        return True, None
    return rule


def matches(pattern: Pattern, message: str) -> Rule:
    def rule(value: str) -> RuleResult:
        if not pattern.match(value):
            return False, message
        return True, None
    return rule


def one_of(choices: Collection[str], message: str) -> Rule:
    def rule(value: str) -> RuleResult:
        if value not in choices:
            return False, message
        return True, None
    return rule


def satisfies(check: Callable[[Any], bool], message: str) -> Rule:
    def rule(value: Any) -> RuleResult:
        if not check(value):
            return False, message
        return True, None
    return rule


def from_tuple_check(check: Callable[[Any], Tuple[bool, str]]) -> Rule:
    """Adapt an existing (valid, message) checker, such as validate_email."""
    def rule(value: Any) -> RuleResult:
        valid, message = check(value)
        return (True, None) if valid else (False, message)
    return rule


def run_rules(value: Any, rules: Iterable[Rule]) -> List[str]:
    """
    Apply every rule and collect the messages of the failing ones.

    Args:
        value: Normalized value
        rules: Ordered rules

    Returns:
        Error messages (empty when the value is valid)
    """
    messages: List[str] = []
    for rule in rules:
        valid, message = rule(value)
        if not valid and message:
            messages.append(message)
    return messages
