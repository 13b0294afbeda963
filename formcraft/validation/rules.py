"""
Formcraft Validation Rules
==========================

Built-in validation rules for form values.

A rule is identified by a string. Well-known names map to their
own rule class; any other string is treated as a regular
expression the value has to match:

    parse_rule("email")      # Email()
    parse_rule("^[A-Z]+$")   # Pattern("^[A-Z]+$")

Only ``not_empty`` looks at empty values. Every other rule
passes when the value is empty, so optional fields can still
carry format rules.
"""

from __future__ import annotations

import functools
import ipaddress
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, NamedTuple, Optional, Tuple, Type, Union

from formcraft.utils.logger import get_logger
from formcraft.validation.messages import RuleKind

logger = get_logger("formcraft.validation")


def is_empty(value: Any) -> bool:
    """
    Permissive emptiness check.

    ``None``, ``False``, ``0``, ``0.0``, ``""``, ``"0"`` and empty
    collections all count as empty.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == "" or value == "0"
    if isinstance(value, (int, float)):
        return value == 0
    try:
        return len(value) == 0
    except TypeError:
        return False


def stringify(value: Any) -> str:
    """Textual form of a submitted value."""
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class Rule(ABC):
    """
    Abstract validation rule.

    Implement `validate` to create custom rules.

    Example:
        class Uppercase(Rule):
            identifier = "uppercase"

            def validate(self, value: Any) -> bool:
                return stringify(value).isupper()
    """

    identifier: str = ""
    kind: RuleKind = RuleKind.FORMAT
    # Only rules that set this see empty values
    checks_empty: bool = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # The identifier doubles as the error state, so it is never blank
        if not cls.__dict__.get("identifier", cls.identifier):
            cls.identifier = cls.__name__

    @abstractmethod
    def validate(self, value: Any) -> bool:
        """
        Validate the value.

        Args:
            value: Submitted value, never empty unless `checks_empty`

        Returns:
            True if valid, False otherwise
        """
        ...

    def check(self, value: Any) -> bool:
        """Validate, letting empty values through unless `checks_empty`."""
        if not self.checks_empty and is_empty(value):
            return True
        return self.validate(value)

    def __call__(self, value: Any) -> bool:
        return self.check(value)


@dataclass
class NotEmpty(Rule):
    """Require a non-empty value."""

    identifier = "not_empty"
    kind = RuleKind.NOT_EMPTY
    checks_empty = True

    def validate(self, value: Any) -> bool:
        return not is_empty(value)


@dataclass
class Integer(Rule):
    """Digits only: no sign, no decimal point."""

    identifier = "integer"
    kind = RuleKind.INTEGER

    _pattern = re.compile(r"[0-9]+")

    def validate(self, value: Any) -> bool:
        return self._pattern.fullmatch(stringify(value)) is not None


@dataclass
class Numeric(Rule):
    """Digits with an optional decimal part ("12", "12.", "12.5")."""

    identifier = "numeric"
    kind = RuleKind.NUMERIC

    _pattern = re.compile(r"[0-9]+(?:\.[0-9]*)?")

    def validate(self, value: Any) -> bool:
        return self._pattern.fullmatch(stringify(value)) is not None


_ATEXT = r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+"
_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"


@dataclass
class Email(Rule):
    """Validate email address syntax (dot-atom local part, dotted domain)."""

    identifier = "email"
    kind = RuleKind.EMAIL

    _pattern = re.compile(
        rf"(?P<local>{_ATEXT}(?:\.{_ATEXT})*)"
        rf"@(?P<domain>{_LABEL}(?:\.{_LABEL})+)"
    )

    def validate(self, value: Any) -> bool:
        text = stringify(value)
        if len(text) > 254:
            return False
        match = self._pattern.fullmatch(text)
        if match is None:
            return False
        return len(match.group("local")) <= 64


@dataclass
class Url(Rule):
    """Validate absolute URL syntax (scheme://host[:port][/path][?query])."""

    identifier = "url"
    kind = RuleKind.URL

    _pattern = re.compile(
        r"(?P<scheme>[A-Za-z][A-Za-z0-9+.-]*)://"
        r"(?:[^\s/?#@]*@)?"
        r"(?P<host>\[[0-9A-Fa-f:.]+\]|[^\s/?#:@\[\]]+)"
        r"(?::(?P<port>[0-9]*))?"
        r"(?P<rest>[/?#]\S*)?"
    )
    _label = re.compile(_LABEL)

    def validate(self, value: Any) -> bool:
        match = self._pattern.fullmatch(stringify(value))
        if match is None:
            return False
        return self._valid_host(match.group("host"))

    def _valid_host(self, host: str) -> bool:
        if host.startswith("["):
            try:
                ipaddress.IPv6Address(host[1:-1])
            except ValueError:
                return False
            return True

        if re.fullmatch(r"[0-9.]+", host):
            try:
                ipaddress.IPv4Address(host)
            except ValueError:
                return False
            return True

        if len(host) > 253:
            return False
        return all(self._label.fullmatch(label) for label in host.split("."))


# Characters that usually open a bare expression are never
# read as delimiters, so "^[A-Z]+$" or "(a|b)" stay bare.
_NOT_DELIMITERS = frozenset("^$.|?*+()[]\\")
_BRACKETS = {"{": "}", "<": ">"}
_MODIFIERS = re.compile(r"[imsxuADSUXJn]*")

_FLAG_MAP = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
    "S": 0,
    "X": 0,
    "n": 0,
}

# PCRE modifiers that `re` cannot reproduce
_UNSUPPORTED_FLAGS = frozenset("UDJ")


class CompiledPattern(NamedTuple):
    """A compiled rule pattern and whether it only matches at the start."""

    regex: re.Pattern[str]
    anchored: bool = False

    def matches(self, text: str) -> bool:
        if self.anchored:
            return self.regex.match(text) is not None
        return self.regex.search(text) is not None


def split_delimited(pattern: str) -> Optional[Tuple[str, str]]:
    """
    Split a delimited pattern into its body and modifiers.

    "#^[a-z]+$#i" gives ("^[a-z]+$", "i"), "{^a+$}" gives ("^a+$", "").
    Returns None for a bare expression.
    """
    if len(pattern) < 2:
        return None
    opening = pattern[0]
    if opening.isalnum() or opening.isspace() or opening in _NOT_DELIMITERS:
        return None

    closing = _BRACKETS.get(opening, opening)
    end = pattern.rfind(closing)
    if end < 1:
        return None

    modifiers = pattern[end + 1:]
    if not _MODIFIERS.fullmatch(modifiers):
        return None
    return pattern[1:end], modifiers


@functools.lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> Optional[CompiledPattern]:
    """
    Compile a rule pattern.

    Accepts a bare expression ("^[A-Z]+$") or the delimited form
    with trailing modifiers ("/^[a-z]+$/i", "#\\d+#", "{^a+$}").
    The ``A`` modifier anchors the match at the start of the value.
    Returns None when the expression does not compile or uses a
    modifier that cannot be honoured.
    """
    body, flags, anchored = pattern, 0, False
    delimited = split_delimited(pattern)
    if delimited:
        body, modifiers = delimited
        unsupported = "".join(sorted(set(modifiers) & _UNSUPPORTED_FLAGS))
        if unsupported:
            logger.warning(
                "Rule pattern uses unsupported modifiers, it will never match",
                pattern=pattern,
                modifiers=unsupported,
            )
            return None
        for modifier in modifiers:
            if modifier == "A":
                anchored = True
            else:
                flags |= _FLAG_MAP[modifier]

    try:
        return CompiledPattern(re.compile(body, flags), anchored)
    except re.error as e:
        logger.warning(
            "Rule pattern does not compile, it will never match",
            pattern=pattern,
            error=str(e),
        )
        return None


@dataclass
class Pattern(Rule):
    """Value must match a regular expression (searched, not anchored)."""

    pattern: str
    kind = RuleKind.FORMAT

    _compiled: Optional[CompiledPattern] = field(
        init=False, repr=False, compare=False, default=None
    )

    def __post_init__(self) -> None:
        self._compiled = compile_pattern(self.pattern)

    @property
    def identifier(self) -> str:  # type: ignore[override]
        return self.pattern

    @property
    def is_valid(self) -> bool:
        """Whether the pattern compiled."""
        return self._compiled is not None

    def validate(self, value: Any) -> bool:
        if self._compiled is None:
            return False
        return self._compiled.matches(stringify(value))


BUILTIN_RULES: Dict[str, Type[Rule]] = {
    NotEmpty.identifier: NotEmpty,
    Integer.identifier: Integer,
    Numeric.identifier: Numeric,
    Url.identifier: Url,
    Email.identifier: Email,
}

# Older spellings still found in rule lists
RULE_ALIASES: Dict[str, str] = {
    "numberic": Numeric.identifier,
}

RuleSpec = Union[str, Rule]


def parse_rule(spec: RuleSpec) -> Rule:
    """
    Turn a rule identifier into a rule.

    Known names map to their rule class, `Rule` instances are
    returned unchanged, any other string becomes a `Pattern`.
    """
    if isinstance(spec, Rule):
        return spec
    if not isinstance(spec, str):
        raise TypeError(
            f"Rule must be a string or Rule instance, got {type(spec).__name__}"
        )
    rule_class = BUILTIN_RULES.get(RULE_ALIASES.get(spec, spec))
    if rule_class is not None:
        return rule_class()
    return Pattern(spec)


# Rule factory functions

def not_empty() -> NotEmpty:
    """Create NotEmpty rule."""
    return NotEmpty()


def integer() -> Integer:
    """Create Integer rule."""
    return Integer()


def numeric() -> Numeric:
    """Create Numeric rule."""
    return Numeric()


def url() -> Url:
    """Create Url rule."""
    return Url()


def email() -> Email:
    """Create Email rule."""
    return Email()


def pattern(expression: str) -> Pattern:
    """Create Pattern rule."""
    return Pattern(expression)
