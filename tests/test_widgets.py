"""Tests for widget rendering and the validation contract they share."""

from markupsafe import Markup

from formcraft.validation.messages import ZH_CN_MESSAGES
from formcraft.widgets import (
    FormButton,
    FormGroup,
    FormHidden,
    FormHtml,
    FormRichText,
    FormScript,
    FormSelect,
    FormText,
    FormTextarea,
)


class TestStaticControls:
    def test_html_is_not_escaped(self):
        assert FormHtml("<hr />").render() == Markup("<hr />")

    def test_script_wraps_code(self):
        html = FormScript("init();").render()
        assert html == '<script type="text/javascript">\ninit();\n</script>\n'

    def test_primary_button(self):
        html = FormButton("Save").primary().render()
        assert html == '<button class="btn btn-primary"><i class="fa fa-save"></i> Save</button>\n'

    def test_link_button(self):
        html = FormButton("Back").link("/list?page=2&sort=id").render()
        assert html == '<a href="/list?page=2&amp;sort=id" class="btn">Back</a>\n'

    def test_link_clears_primary(self):
        html = FormButton("Back").primary().link("/list").render()
        assert html.startswith("<a ")

    def test_plain_button(self):
        assert FormButton("Go").render() == '<button class="btn">Go</button>\n'


class TestValueWidgets:
    def test_chaining_returns_same_widget(self):
        field = FormText("title")
        assert field.label("Title") is field
        assert field.not_empty() is field
        assert field.max(10) is field
        assert field.placeholder("...") is field
        assert field.remark("hint") is field
        assert field.small() is field

    def test_hidden(self):
        html = FormHidden("id").value(42).render()
        assert html == '<input type="hidden" name="n_id" value="42" />\n'

    def test_value_is_escaped(self):
        html = FormHidden("q").value('"><script>').render()
        assert "<script>" not in html
        assert "&#34;&gt;&lt;script&gt;" in html

    def test_prefixes_come_from_configuration(self, fresh_config):
        fresh_config.set("forms.name_prefix", "")
        fresh_config.set("forms.id_prefix", "field-")
        field = FormText("title")
        assert field.field_name == "title"
        assert field.field_id == "field-title"

    def test_text_input(self):
        html = FormText("title").placeholder("Title").value("Hello").readonly().render_input()
        assert html == (
            '<input id="i_title" type="text" name="n_title" placeholder="Title" '
            'value="Hello" class="input-xlarge" readonly="readonly" />\n'
        )

    def test_size_class(self):
        assert FormText("t").mini().size_class == "input-mini"
        assert FormText("t").xx_large().size_class == "input-xxlarge"

    def test_textarea(self):
        html = FormTextarea("body").value("a < b").medium().render_input()
        assert html == (
            '<textarea id="i_body" name="n_body" placeholder="" '
            'class="input-medium">a &lt; b</textarea>\n'
        )

    def test_rich_text_adds_editor_script(self):
        html = FormRichText("content").render_input()
        assert html.startswith('<textarea id="i_content"')
        assert 'K.create("#i_content", {"allowFileManager":false,"width":"100%","height":"500px"})' in html
        assert 'window.editors["content"]' in html

    def test_rich_text_option(self):
        html = FormRichText("content").editor_option("height", "200px").render_input()
        assert '"height":"200px"' in html


class TestGroupRendering:
    def test_group_without_error(self):
        html = FormText("title").label("Title").render()
        assert html.startswith('<div class="control-group">\n')
        assert '<label class="control-label" for="i_title">Title</label>' in html
        assert "help-inline" not in html

    def test_group_with_error(self):
        field = FormText("title").label("Title").not_empty()
        field.check_rules("")
        html = field.render()
        assert html.startswith('<div class="control-group error">\n')
        assert '<span class="help-inline">must not be empty</span>' in html

    def test_group_with_localized_error(self):
        field = FormText("title", messages=ZH_CN_MESSAGES).min(5)
        field.check_rules("abc")
        assert '<span class="help-inline">长度必须大于5</span>' in field.render()

    def test_error_cleared_after_recheck(self):
        field = FormText("title").not_empty()
        field.check_rules("")
        field.check_rules("ok")
        assert "error" not in field.render()

    def test_custom_error_is_rendered(self):
        field = FormText("email")
        field.set_custom_error("already registered")
        field.check_rules("a@example.com")
        assert '<span class="help-inline">already registered</span>' in field.render()

    def test_remark(self):
        html = FormText("t").remark("max 10 chars").render()
        assert '<span class="tip">max 10 chars</span>' in html

    def test_base_group_has_no_input(self):
        html = FormGroup("x").label("X").render()
        assert html == (
            '<div class="control-group">\n'
            '<label class="control-label" for="i_x">X</label>\n'
            '<div class="controls">\n'
            "</div>\n</div>\n"
        )

    def test_widget_validates_its_own_value(self):
        field = FormText("age").integer_value().value("12a")
        assert field.validate() is False
        assert field.error_state == "integer"


class TestSelect:
    def test_mapping_options(self):
        select = FormSelect("status", {"draft": "Draft", "live": "Live"}).value("live")
        html = select.render_input()
        assert '<option value="draft">Draft</option>' in html
        assert '<option value="live" selected="selected">Live</option>' in html

    def test_list_of_names_uses_index(self):
        select = FormSelect("size", ["S", "M", "L"]).value(1)
        assert select.option_list == [
            {"name": "S", "value": "0"},
            {"name": "M", "value": "1"},
            {"name": "L", "value": "2"},
        ]
        assert '<option value="1" selected="selected">M</option>' in select.render_input()

    def test_list_of_dicts(self):
        select = FormSelect(
            "city",
            [
                {"name": "Paris", "value": "fr-par"},
                {"key": "Lyon", "name": "ignored", "value": "fr-lyo"},
                {"value": "no-name"},
                {"name": "no value"},
                42,
            ],
        )
        assert select.option_list == [
            {"name": "Paris", "value": "fr-par"},
            {"name": "Lyon", "value": "fr-lyo"},
        ]

    def test_options_accumulate(self):
        select = FormSelect("x", ["a"]).options({"b": "B"})
        assert [o["value"] for o in select.option_list] == ["0", "b"]

    def test_select_markup(self):
        html = FormSelect("x", {"1": "One"}).readonly().render_input()
        assert html == (
            '<select id="i_x" name="n_x" class="input-xlarge" readonly="readonly">\n'
            '<option value="1">One</option>\n'
            "</select>\n"
        )

    def test_select_validation(self):
        select = FormSelect("x", {"1": "One"}).not_empty()
        assert not select.check_rules("")
        assert select.get_error_message() == "must not be empty"
