"""
Formcraft - Server-side form widgets with inline validation
===========================================================

Widgets accumulate configuration through chained setters,
validate submitted values against ordered rules and render
themselves to HTML.

Quick Start:
    from formcraft import Form, FormText, FormButton

    form = Form(
        FormText("email").label("Email").not_empty().email_value(),
        FormButton("Save").primary(),
    )
    form.bind(submitted)
    if not form.validate():
        html = form.render()  # fields carry inline errors
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

from typing import TYPE_CHECKING

# Core imports (always available)
from formcraft.core.config import Config, get_config
from formcraft.validation.engine import ErrorState, ValidationEngine

if TYPE_CHECKING:
    from formcraft.validation.messages import MessageCatalog, RuleKind
    from formcraft.validation.rules import Rule
    from formcraft.widgets.form import Form, FormValidationError
    from formcraft.utils.logger import Logger


def __getattr__(name: str):
    """Lazy loading of widgets and helpers."""
    _imports = {
        # Validation
        "Rule": "formcraft.validation.rules",
        "MessageCatalog": "formcraft.validation.messages",
        "RuleKind": "formcraft.validation.messages",
        # Widgets
        "FormControl": "formcraft.widgets.base",
        "FormHtml": "formcraft.widgets.base",
        "FormScript": "formcraft.widgets.base",
        "FormValue": "formcraft.widgets.base",
        "FormButton": "formcraft.widgets.controls",
        "FormHidden": "formcraft.widgets.controls",
        "FormGroup": "formcraft.widgets.controls",
        "FormText": "formcraft.widgets.controls",
        "FormTextarea": "formcraft.widgets.controls",
        "FormRichText": "formcraft.widgets.controls",
        "FormSelect": "formcraft.widgets.controls",
        "Form": "formcraft.widgets.form",
        "FormValidationError": "formcraft.widgets.form",
        # Utils
        "Logger": "formcraft.utils.logger",
        "get_logger": "formcraft.utils.logger",
    }

    if name in _imports:
        import importlib
        module = importlib.import_module(_imports[name])
        return getattr(module, name)

    raise AttributeError(f"module 'formcraft' has no attribute '{name}'")


__all__ = [
    "__version__",
    # Core (always loaded)
    "Config",
    "get_config",
    "ValidationEngine",
    "ErrorState",
    # Lazy
    "Rule",
    "MessageCatalog",
    "RuleKind",
    "FormControl",
    "FormHtml",
    "FormScript",
    "FormValue",
    "FormButton",
    "FormHidden",
    "FormGroup",
    "FormText",
    "FormTextarea",
    "FormRichText",
    "FormSelect",
    "Form",
    "FormValidationError",
    "Logger",
    "get_logger",
]
