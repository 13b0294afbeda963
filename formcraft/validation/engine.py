"""
Formcraft Validation Engine
===========================

Per-field validation state: ordered rules, length bounds and the
outcome of the most recent check.

Example:
    field = ValidationEngine().not_empty().email_value().max(64)

    if not field.check_rules(submitted):
        print(field.get_error_message())  # "must be an Email"

Validation failures are data, never exceptions. `check_rules`
records at most one failure per call: the length bounds are
checked first, then the rules in the order they were added, and
the first failing check wins.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Protocol, Union

from formcraft.utils.logger import get_logger
from formcraft.validation.messages import MessageCatalog, RuleKind, get_catalog
from formcraft.validation.rules import (
    Email,
    Integer,
    NotEmpty,
    Numeric,
    Rule,
    RuleSpec,
    Url,
    parse_rule,
    stringify,
)

logger = get_logger("formcraft.validation")


class Validatable(Protocol):
    """What rendering collaborators rely on."""

    def add_rule(self, rule: RuleSpec) -> Any: ...

    def min(self, length: int) -> Any: ...

    def max(self, length: int) -> Any: ...

    def set_custom_error(self, message: str) -> None: ...

    def check_rules(self, value: Any) -> bool: ...

    def get_error_message(self) -> str: ...


class ErrorState(str, Enum):
    """
    Fixed error states.

    A failing rule records its identifier string instead
    ("not_empty", "email", or the raw pattern).
    """

    NONE = ""
    MIN = "min"
    MAX = "max"
    CUSTOM = "custom"


class ValidationEngine:
    """
    Ordered validation of a single submitted value.

    Mutators return the engine itself so configuration can be
    chained. Duplicate rules are kept and evaluated again.

    Attributes:
        rules: Rules in evaluation order
        min_length: Minimum length in UTF-8 bytes, 0 for no lower bound
        max_length: Maximum length in UTF-8 bytes, 0 for no upper bound
        custom_error_message: Message used instead of the derived one
        forced_error_message: Message of the error set by `set_custom_error`
    """

    def __init__(self, messages: Optional[MessageCatalog] = None) -> None:
        self.rules: List[Rule] = []
        self.min_length: int = 0
        self.max_length: int = 0
        self.custom_error_message: Optional[str] = None
        self.forced_error_message: Optional[str] = None
        self._messages = messages
        self._state: Union[ErrorState, str] = ErrorState.NONE
        self._failed_rule: Optional[Rule] = None
        self._custom = False

    # Configuration

    def add_rule(self, rule: RuleSpec) -> "ValidationEngine":
        """Append a rule identifier or `Rule` instance."""
        self.rules.append(parse_rule(rule))
        return self

    def not_empty(self) -> "ValidationEngine":
        self.rules.append(NotEmpty())
        return self

    def integer_value(self) -> "ValidationEngine":
        self.rules.append(Integer())
        return self

    def numeric_value(self) -> "ValidationEngine":
        self.rules.append(Numeric())
        return self

    def url_value(self) -> "ValidationEngine":
        self.rules.append(Url())
        return self

    def email_value(self) -> "ValidationEngine":
        self.rules.append(Email())
        return self

    def min(self, length: int) -> "ValidationEngine":
        """Set the minimum text length."""
        self.min_length = length
        return self

    def max(self, length: int) -> "ValidationEngine":
        """Set the maximum text length (0 disables the bound)."""
        self.max_length = length
        return self

    def messages(self, catalog: MessageCatalog) -> "ValidationEngine":
        """Use ``catalog`` for derived error messages."""
        self._messages = catalog
        return self

    def error_message(self, message: str) -> "ValidationEngine":
        """Replace the derived message of any future failure."""
        self.custom_error_message = message
        return self

    def set_custom_error(self, message: str) -> None:
        """
        Force the field into the custom error state.

        The error survives later `check_rules` calls until
        `clear_custom_error` is called or another custom error
        replaces it.
        """
        self._custom = True
        self.forced_error_message = message

    def clear_custom_error(self) -> None:
        """Drop the forced error; an `error_message` override is kept."""
        self._custom = False
        self.forced_error_message = None

    # Evaluation

    @property
    def error_state(self) -> Union[ErrorState, str]:
        """Outcome of the last check, or CUSTOM while a custom error is set."""
        if self._custom:
            return ErrorState.CUSTOM
        return self._state

    @property
    def error_kind(self) -> Optional[RuleKind]:
        """Message kind for the current error, None when there is none."""
        if self._custom or self._state == ErrorState.NONE:
            return None
        # A rule named "min" or "max" is still a rule
        if self._failed_rule is not None:
            return self._failed_rule.kind
        if self._state == ErrorState.MIN:
            return RuleKind.MIN
        return RuleKind.MAX

    @property
    def has_error(self) -> bool:
        return self.error_state != ErrorState.NONE

    def check_rules(self, value: Any) -> bool:
        """
        Check ``value`` against the bounds and rules.

        Args:
            value: Submitted value; numbers and None are checked
                by their textual form, lengths count UTF-8 bytes

        Returns:
            True if every check passed
        """
        length = len(stringify(value).encode("utf-8"))

        if length < self.min_length:
            return self._fail(ErrorState.MIN, length=length)

        if self.max_length > 0 and length > self.max_length:
            return self._fail(ErrorState.MAX, length=length)

        for rule in self.rules:
            if not rule.check(value):
                return self._fail(rule.identifier, rule=rule)

        self._state = ErrorState.NONE
        self._failed_rule = None
        return True

    def _fail(
        self,
        state: Union[ErrorState, str],
        rule: Optional[Rule] = None,
        **context: Any,
    ) -> bool:
        self._state = state
        self._failed_rule = rule
        if isinstance(state, ErrorState):
            context["bound"] = state.value
        else:
            context["rule"] = state
        logger.debug("Validation failed", **context)
        return False

    def get_error_message(self) -> str:
        """
        Human-readable message for the current error.

        Empty when there is no error. A forced custom error wins,
        then the `error_message` override, then the derived text.
        """
        if not self.has_error:
            return ""
        if self._custom:
            return self.forced_error_message or ""
        if self.custom_error_message is not None:
            return self.custom_error_message

        kind = self.error_kind or RuleKind.FORMAT
        catalog = self._messages or get_catalog()
        return catalog.format(
            kind,
            min_length=self.min_length,
            max_length=self.max_length,
        )
