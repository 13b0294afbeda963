"""
Formcraft Controls
==================

Concrete form widgets. Rendering follows Bootstrap 2 control
groups: label, input, inline error message and an optional tip.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import orjson
from markupsafe import Markup

from formcraft.validation.messages import MessageCatalog
from formcraft.validation.rules import stringify
from formcraft.widgets.base import FormControl, FormValue


class FormButton(FormControl):
    """
    Submit button or link styled as a button.

    Example:
        FormButton("Save").primary()
        FormButton("Cancel").link("/articles")
    """

    def __init__(self, name: str = "") -> None:
        self._name = name
        self._url = ""
        self._primary = False

    def name(self, name: str) -> "FormButton":
        self._name = name
        return self

    def link(self, url: str) -> "FormButton":
        self._primary = False
        self._url = url
        return self

    def primary(self) -> "FormButton":
        self._primary = True
        return self

    def render(self) -> Markup:
        if self._primary:
            return Markup(
                '<button class="btn btn-primary"><i class="fa fa-save"></i> {}</button>\n'
            ).format(self._name)
        if self._url:
            return Markup('<a href="{}" class="btn">{}</a>\n').format(self._url, self._name)
        return Markup('<button class="btn">{}</button>\n').format(self._name)


class FormHidden(FormValue):
    """Hidden input."""

    def render(self) -> Markup:
        return Markup('<input type="hidden" name="{}" value="{}" />\n').format(
            self.field_name, self.display_value
        )


class FormGroup(FormValue):
    """
    Labelled control group.

    Subclasses provide the input element through `render_input`.
    """

    def __init__(self, key: str = "", messages: Optional[MessageCatalog] = None) -> None:
        super().__init__(key, messages)
        self._remark = ""

    def remark(self, remark: str) -> "FormGroup":
        """Help text shown below the input."""
        self._remark = remark
        return self

    def render_input(self) -> Markup:
        return Markup("")

    def render(self) -> Markup:
        error = self.get_error_message()
        parts = [
            Markup('<div class="control-group{}">\n').format(" error" if error else ""),
            Markup('<label class="control-label" for="{}">{}</label>\n').format(
                self.field_id, self._label
            ),
            Markup('<div class="controls">\n'),
            self.render_input(),
        ]
        if error:
            parts.append(Markup('<span class="help-inline">{}</span>\n').format(error))
        if self._remark:
            parts.append(Markup('<span class="tip">{}</span>\n').format(self._remark))
        parts.append(Markup("</div>\n</div>\n"))
        return Markup("").join(parts)


class FormValueStyle(FormGroup):
    """Control group whose input has a size class."""

    def __init__(self, key: str = "", messages: Optional[MessageCatalog] = None) -> None:
        super().__init__(key, messages)
        self._size_class = "input-xlarge"

    def _size(self, size_class: str) -> "FormValueStyle":
        self._size_class = size_class
        return self

    def mini(self) -> "FormValueStyle":
        return self._size("input-mini")

    def small(self) -> "FormValueStyle":
        return self._size("input-small")

    def medium(self) -> "FormValueStyle":
        return self._size("input-medium")

    def large(self) -> "FormValueStyle":
        return self._size("input-large")

    def x_large(self) -> "FormValueStyle":
        return self._size("input-xlarge")

    def xx_large(self) -> "FormValueStyle":
        return self._size("input-xxlarge")

    @property
    def size_class(self) -> str:
        return self._size_class


class FormText(FormValueStyle):
    """Single-line text input."""

    def __init__(self, key: str = "", messages: Optional[MessageCatalog] = None) -> None:
        super().__init__(key, messages)
        self._placeholder = ""

    def placeholder(self, placeholder: str) -> "FormText":
        self._placeholder = placeholder
        return self

    def render_input(self) -> Markup:
        return Markup(
            '<input id="{}" type="text" name="{}" placeholder="{}" value="{}" class="{}"{} />\n'
        ).format(
            self.field_id,
            self.field_name,
            self._placeholder,
            self.display_value,
            self._size_class,
            self.readonly_attr(),
        )


class FormTextarea(FormText):
    """Multi-line text input."""

    def render_input(self) -> Markup:
        return Markup(
            '<textarea id="{}" name="{}" placeholder="{}" class="{}"{}>{}</textarea>\n'
        ).format(
            self.field_id,
            self.field_name,
            self._placeholder,
            self._size_class,
            self.readonly_attr(),
            self.display_value,
        )


class FormRichText(FormTextarea):
    """Textarea upgraded to a KindEditor instance on page load."""

    def __init__(self, key: str = "", messages: Optional[MessageCatalog] = None) -> None:
        super().__init__(key, messages)
        self._editor_options: Dict[str, Any] = {
            "allowFileManager": False,
            "width": "100%",
            "height": "500px",
        }

    def editor_option(self, name: str, value: Any) -> "FormRichText":
        self._editor_options[name] = value
        return self

    def render_input(self) -> Markup:
        selector = orjson.dumps("#" + self.field_id).decode()
        key = orjson.dumps(self._key).decode()
        options = orjson.dumps(self._editor_options).decode()
        script = Markup(
            '<script type="text/javascript">\n'
            "window.editors = window.editors || {{}};\n"
            "$('body').ready(function() {{\n"
            "\tKindEditor.ready(function(K) {{\n"
            "\t\twindow.editors[{key}] = K.create({selector}, {options});\n"
            "\t}});\n"
            "}});\n"
            "</script>\n"
        ).format(
            key=Markup(key),
            selector=Markup(selector),
            options=Markup(options),
        )
        return super().render_input() + script


SelectOption = Dict[str, str]
OptionsSpec = Union[Mapping[Any, Any], Iterable[Any]]


class FormSelect(FormValueStyle):
    """
    Drop-down select.

    Options may be given as:
    - a mapping of value -> name
    - a list of names (the list index is the value)
    - a list of dicts with "value" and "name" (or "key") entries
    """

    def __init__(
        self,
        key: str = "",
        options: Optional[OptionsSpec] = None,
        messages: Optional[MessageCatalog] = None,
    ) -> None:
        super().__init__(key, messages)
        self._options: List[SelectOption] = []
        if options is not None:
            self.options(options)

    def options(self, options: OptionsSpec) -> "FormSelect":
        """Append options; unrecognised entries are skipped."""
        if isinstance(options, Mapping):
            items = options.items()
        else:
            items = enumerate(options)

        for value, option in items:
            if isinstance(option, Mapping) and "value" in option:
                name = option.get("key", option.get("name"))
                if name is not None:
                    self._options.append(
                        {"name": str(name), "value": stringify(option["value"])}
                    )
            elif isinstance(option, str):
                self._options.append({"name": option, "value": stringify(value)})
        return self

    @property
    def option_list(self) -> List[SelectOption]:
        return list(self._options)

    def render_input(self) -> Markup:
        current = self.display_value
        parts = [
            Markup('<select id="{}" name="{}" class="{}"{}>\n').format(
                self.field_id,
                self.field_name,
                self._size_class,
                self.readonly_attr(),
            )
        ]
        for option in self._options:
            selected = ' selected="selected"' if option["value"] == current else ""
            parts.append(
                Markup('<option value="{}"{}>{}</option>\n').format(
                    option["value"], Markup(selected), option["name"]
                )
            )
        parts.append(Markup("</select>\n"))
        return Markup("").join(parts)
