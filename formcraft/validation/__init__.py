"""
Formcraft Validation System
===========================

Validation for submitted form values.

Features:
- Ordered, string-identified rules
- Length bounds
- First-failure error state per field
- Localized error messages
"""

from formcraft.validation.engine import ErrorState, Validatable, ValidationEngine
from formcraft.validation.messages import (
    DEFAULT_MESSAGES,
    ZH_CN_MESSAGES,
    MessageCatalog,
    RuleKind,
    get_catalog,
    register_catalog,
)
from formcraft.validation.rules import (
    Email,
    Integer,
    NotEmpty,
    Numeric,
    Pattern,
    Rule,
    Url,
    is_empty,
    parse_rule,
    stringify,
)

__all__ = [
    # Engine
    "ValidationEngine",
    "ErrorState",
    "Validatable",
    # Messages
    "MessageCatalog",
    "RuleKind",
    "DEFAULT_MESSAGES",
    "ZH_CN_MESSAGES",
    "get_catalog",
    "register_catalog",
    # Rules
    "Rule",
    "NotEmpty",
    "Integer",
    "Numeric",
    "Url",
    "Email",
    "Pattern",
    "parse_rule",
    "is_empty",
    "stringify",
]
