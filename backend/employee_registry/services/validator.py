"""Declarative per-field rules for the employee draft form.

Each field maps to a tuple of :class:`Rule` objects. A rule only inspects a
single value and reports a pass/fail; ``validate`` collects the names of the
failing rules per field so every violation can be shown at once.

Apart from ``required``, rules pass on empty values, so an empty phone
reports ``required`` and not ``pattern`` as well.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

PHONE_PATTERN = r"^[0-9]{10,15}$"

# Same address shape browsers accept for <input type="email">.
EMAIL_PATTERN = (
    r"^(?=.{1,254}$)(?=.{1,64}@)"
    r"[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


@dataclass(frozen=True)
class Rule:
    name: str
    check: Callable[[Any], bool]


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple)):
        return len(value) == 0
    return False


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def required() -> Rule:
    return Rule("required", lambda value: not _is_empty(value))


def max_length(limit: int) -> Rule:
    def check(value: Any) -> bool:
        if _is_empty(value) or not isinstance(value, str):
            return True
        return len(value) <= limit

    return Rule("maxlength", check)


def pattern(regex: str) -> Rule:
    compiled = re.compile(regex)

    def check(value: Any) -> bool:
        if _is_empty(value):
            return True
        return compiled.fullmatch(str(value)) is not None

    return Rule("pattern", check)


def email() -> Rule:
    compiled = re.compile(EMAIL_PATTERN)

    def check(value: Any) -> bool:
        if _is_empty(value):
            return True
        return isinstance(value, str) and compiled.fullmatch(value) is not None

    return Rule("email", check)


def number() -> Rule:
    return Rule("number", lambda value: _is_empty(value) or _to_number(value) is not None)


def minimum(bound: float) -> Rule:
    def check(value: Any) -> bool:
        number_value = _to_number(value)
        if _is_empty(value) or number_value is None:
            return True
        return number_value >= bound

    return Rule("min", check)


FIELD_RULES: dict[str, tuple[Rule, ...]] = {
    "name": (required(), max_length(100)),
    "phone": (required(), pattern(PHONE_PATTERN)),
    "email": (email(),),
    "national_id": (required(), max_length(30)),
    "date_of_birth": (required(),),
    "address": (required(), max_length(250)),
    "qualification": (required(), max_length(120)),
    "religion": (),
    "experience": (number(), minimum(0)),
    "last_work_place": (),
    "salary": (number(), minimum(0)),
}


def validate(
    values: Mapping[str, Any],
    rules: Mapping[str, tuple[Rule, ...]] = FIELD_RULES,
) -> dict[str, set[str]]:
    """Return ``{field: {rule names}}`` for every failing field; empty when valid."""
    errors: dict[str, set[str]] = {}
    for field, field_rules in rules.items():
        value = values.get(field)
        failed = {rule.name for rule in field_rules if not rule.check(value)}
        if failed:
            errors[field] = failed
    return errors
