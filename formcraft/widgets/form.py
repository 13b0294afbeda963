"""
Formcraft Form Container
========================

Groups controls, binds submitted data to them and validates
every value widget in one pass.

Example:
    form = Form(
        FormText("title").label("Title").not_empty().max(120),
        FormText("email").label("Email").email_value(),
        FormButton("Save").primary(),
    )

    if request.method == "POST":
        form.bind(request.form)

        if form.validate():
            title = form.data["title"]

    html = form.render()
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import orjson
from markupsafe import Markup

from formcraft.utils.logger import get_logger
from formcraft.widgets.base import FormControl, FormValue

logger = get_logger("formcraft.forms")


class FormValidationError(Exception):
    """
    Form validation failed.

    Raised only by `Form.validate_or_fail`; `Form.validate`
    reports failures as data.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or {}

    def __str__(self) -> str:
        if self.errors:
            lines = [f"  - {key}: {msg}" for key, msg in self.errors.items()]
            return "Validation failed:\n" + "\n".join(lines)
        return "Validation failed"

    def first(self, key: Optional[str] = None) -> Optional[str]:
        """Get first error message, optionally for one field."""
        if key is not None:
            return self.errors.get(key)
        for message in self.errors.values():
            return message
        return None


class Form:
    """Ordered collection of controls."""

    def __init__(self, *controls: FormControl) -> None:
        self._controls: List[FormControl] = []
        self._errors: Dict[str, str] = {}

        for control in controls:
            self.add(control)

    def add(self, control: FormControl) -> "Form":
        """Append a control. Value widgets must have distinct keys."""
        if isinstance(control, FormValue) and control.field_key in self.fields:
            raise ValueError(f"Duplicate field key: {control.field_key!r}")
        self._controls.append(control)
        return self

    @property
    def controls(self) -> List[FormControl]:
        return list(self._controls)

    @property
    def fields(self) -> Dict[str, FormValue]:
        """Value widgets by key, in form order."""
        return {
            control.field_key: control
            for control in self._controls
            if isinstance(control, FormValue)
        }

    def __getitem__(self, key: str) -> FormValue:
        return self.fields[key]

    def __contains__(self, key: str) -> bool:
        return key in self.fields

    def bind(self, data: Mapping[str, Any]) -> "Form":
        """
        Copy submitted values into the fields.

        Looks up each field by its prefixed parameter name first,
        then by its bare key. Fields missing from ``data`` keep
        their current value.
        """
        for key, field in self.fields.items():
            if field.field_name in data:
                field.value(data[field.field_name])
            elif key in data:
                field.value(data[key])

        return self

    def validate(self) -> bool:
        """
        Check every field against its rules.

        Every field is checked, so each one carries its own error
        state for rendering afterwards.
        """
        errors: Dict[str, str] = {}
        for key, field in self.fields.items():
            field.validate()
            if field.has_error:
                errors[key] = field.get_error_message()

        self._errors = errors
        if errors:
            logger.debug("Form invalid", fields=",".join(errors))
        return not errors

    def validate_or_fail(self) -> Dict[str, Any]:
        """
        Validate and return the data.

        Raises:
            FormValidationError: At least one field failed
        """
        if not self.validate():
            raise FormValidationError(errors=dict(self._errors))
        return self.data

    @property
    def is_valid(self) -> bool:
        """Validate the current field values and return the result."""
        return self.validate()

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self._errors)

    @property
    def data(self) -> Dict[str, Any]:
        return {key: field.current_value for key, field in self.fields.items()}

    def errors_json(self) -> bytes:
        """
        Errors as a JSON document, for client-side re-checks.

        Validates first. Shape: {"valid": bool, "errors": {param_name: message}}
        """
        self.validate()
        fields = self.fields
        payload = {
            "valid": not self._errors,
            "errors": {
                fields[key].field_name: message
                for key, message in self._errors.items()
            },
        }
        return orjson.dumps(payload)

    def render(self) -> Markup:
        return Markup("").join(control.render() for control in self._controls)

    def __html__(self) -> str:
        return str(self.render())


def check_field(field: FormValue, value: Any) -> Dict[str, Any]:
    """
    Re-check a single submitted value.

    Returns the same shape the client-side re-check expects:
    {"name": ..., "valid": bool, "message": str}
    """
    valid = field.check_rules(value)
    return {
        "name": field.field_name,
        "valid": valid and not field.has_error,
        "message": field.get_error_message(),
    }
