"""
Formcraft Widgets
=================

Chainable form widgets that validate and render themselves.
"""

from formcraft.widgets.base import FormControl, FormHtml, FormScript, FormValue
from formcraft.widgets.controls import (
    FormButton,
    FormGroup,
    FormHidden,
    FormRichText,
    FormSelect,
    FormText,
    FormTextarea,
    FormValueStyle,
)
from formcraft.widgets.form import Form, FormValidationError, check_field

__all__ = [
    # Base
    "FormControl",
    "FormHtml",
    "FormScript",
    "FormValue",
    # Controls
    "FormButton",
    "FormHidden",
    "FormGroup",
    "FormValueStyle",
    "FormText",
    "FormTextarea",
    "FormRichText",
    "FormSelect",
    # Form
    "Form",
    "FormValidationError",
    "check_field",
]
