"""
Declarative validation for request contracts.

Each contract declares an ordered tuple of rules. ``validate`` runs every rule
and collects a ``Violation`` per failed rule, so a single field can report
several messages (e.g. both the length and the email syntax rule).

Invariants:
    - validate() never raises and never stops at the first failure
    - Violations come out in rule declaration order
    - Same input, same violations
"""

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Iterable, Union

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict

from accounts.core.errors import HttpError


@dataclass(frozen=True)
class Violation:
    """A failed rule: the field it applies to and a human-readable message."""

    field: str
    message: str


@dataclass(frozen=True)
class FieldRule:
    """Predicate applied to a single attribute of the contract."""

    field: str
    check: Callable[[Any], bool]
    message: str

    def passes(self, contract: Any) -> bool:
        return self.check(getattr(contract, self.field))


@dataclass(frozen=True)
class ModelRule:
    """Predicate applied to the whole contract, reported against ``field``."""

    field: str
    check: Callable[[Any], bool]
    message: str

    def passes(self, contract: Any) -> bool:
        return self.check(contract)


Rule = Union[FieldRule, ModelRule]


# Predicates


def min_length(n: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return value is not None and len(value) >= n

    return check


def is_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def one_of(values: Iterable[Any]) -> Callable[[Any], bool]:
    allowed = frozenset(values)

    def check(value: Any) -> bool:
        return value in allowed

    return check


def in_range(minimum: int | None = None, maximum: int | None = None) -> Callable[[Any], bool]:
    """Bounds check, inclusive on both ends. An absent value passes."""

    def check(value: Any) -> bool:
        if value is None:
            return True
        if minimum is not None and value < minimum:
            return False
        if maximum is not None and value > maximum:
            return False
        return True

    return check


def matches(field: str, other: str) -> Callable[[Any], bool]:
    def check(contract: Any) -> bool:
        return getattr(contract, field) == getattr(contract, other)

    return check


# Engine


def validate(contract: "Contract") -> list[Violation]:
    """
    Evaluate every rule declared on the contract.

    Args:
        contract: A populated input contract

    Returns:
        Violations in declaration order; empty when the contract is valid
    """
    violations: list[Violation] = []
    for rule in type(contract).rules:
        try:
            ok = rule.passes(contract)
        except Exception:
            # A predicate that cannot evaluate its input counts as a failed rule
            ok = False
        if not ok:
            violations.append(Violation(rule.field, rule.message))
    return violations


def ensure_valid(contract: "Contract") -> "Contract":
    """
    Raise a Bad Request envelope listing every violation, if any.

    Returns:
        The contract unchanged when it is valid
    """
    violations = validate(contract)
    if violations:
        raise HttpError.bad_request(", ".join(v.message for v in violations))
    return contract


class Contract(BaseModel):
    """Base class for input contracts carrying their own validation rules."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rules: ClassVar[tuple[Rule, ...]] = ()

    def violations(self) -> list[Violation]:
        return validate(self)
