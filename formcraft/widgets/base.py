"""
Formcraft Widget Base Classes
=============================

Every widget renders to a `markupsafe.Markup` string. Value
widgets also carry a `ValidationEngine`, so a field is configured,
validated and rendered through one chained object:

    email = (
        FormText("email")
        .label("Email")
        .not_empty()
        .email_value()
    )
    email.check_rules(submitted)
    html = email.render()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from markupsafe import Markup

from formcraft.core.config import get_config
from formcraft.validation.engine import ValidationEngine
from formcraft.validation.messages import MessageCatalog
from formcraft.validation.rules import stringify


class FormControl(ABC):
    """Anything that can be placed in a form."""

    @abstractmethod
    def render(self) -> Markup:
        """Render the control to HTML."""
        ...

    def __html__(self) -> str:
        return str(self.render())

    def __str__(self) -> str:
        return str(self.render())


class FormHtml(FormControl):
    """Literal markup, emitted unescaped."""

    def __init__(self, html: str = "") -> None:
        self._html = html

    def html(self, html: str) -> "FormHtml":
        self._html = html
        return self

    def render(self) -> Markup:
        return Markup(self._html)


class FormScript(FormHtml):
    """Inline JavaScript."""

    def render(self) -> Markup:
        return Markup('<script type="text/javascript">\n{}\n</script>\n').format(
            Markup(self._html)
        )


class FormValue(ValidationEngine, FormControl):
    """
    Base class for widgets that submit a value.

    The submitted parameter is named ``<name_prefix><key>`` and the
    element id is ``<id_prefix><key>``; both prefixes come from the
    ``forms.name_prefix`` / ``forms.id_prefix`` configuration keys.
    """

    def __init__(self, key: str = "", messages: Optional[MessageCatalog] = None) -> None:
        super().__init__(messages)
        self._key = key
        self._label = ""
        self._value: Any = ""
        self._readonly = False

    def key(self, key: str) -> "FormValue":
        self._key = key
        return self

    def label(self, label: str) -> "FormValue":
        self._label = label
        return self

    def value(self, value: Any) -> "FormValue":
        self._value = value
        return self

    def readonly(self, readonly: bool = True) -> "FormValue":
        self._readonly = readonly
        return self

    @property
    def field_key(self) -> str:
        return self._key

    @property
    def label_text(self) -> str:
        return self._label

    @property
    def current_value(self) -> Any:
        return self._value

    @property
    def is_readonly(self) -> bool:
        return self._readonly

    @property
    def field_name(self) -> str:
        """Name of the submitted parameter."""
        return get_config().get_str("forms.name_prefix", "n_") + self._key

    @property
    def field_id(self) -> str:
        """Element id."""
        return get_config().get_str("forms.id_prefix", "i_") + self._key

    @property
    def display_value(self) -> str:
        return stringify(self._value)

    def readonly_attr(self) -> Markup:
        return Markup(' readonly="readonly"') if self._readonly else Markup("")

    def validate(self) -> bool:
        """Check the widget's own current value."""
        return self.check_rules(self._value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} key={self._key!r}>"
