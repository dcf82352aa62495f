"""Tests for the HTML -> UXML tag table."""

import pytest

from html2uitk.markup.tags import HTML_TO_UI, ui_tag_for_element, ui_tag_for_selector


class TestTagTable:
    @pytest.mark.parametrize(
        "tag, ui_tag",
        [
            ("div", "ui:VisualElement"),
            ("section", "ui:VisualElement"),
            ("li", "ui:VisualElement"),
            ("p", "ui:Label"),
            ("h3", "ui:Label"),
            ("time", "ui:Label"),
            ("button", "ui:Button"),
            ("input", "ui:TextField"),
        ],
    )
    def test_element(self, tag, ui_tag):
        assert ui_tag_for_element(tag) == ui_tag

    @pytest.mark.parametrize(
        "input_type, ui_tag",
        [
            ("number", "ui:IntegerField"),
            ("checkbox", "ui:Toggle"),
            ("radio", "ui:RadioButton"),
            ("range", "ui:Slider"),
            ("password", "ui:TextField"),
            ("EMAIL", "ui:TextField"),
        ],
    )
    def test_typed_input(self, input_type, ui_tag):
        assert ui_tag_for_element("input", input_type) == ui_tag

    def test_unknown_input_type_falls_back(self):
        assert ui_tag_for_element("input", "color") == "ui:TextField"

    def test_unmapped(self):
        assert ui_tag_for_element("img") is None
        assert ui_tag_for_selector("a") is None

    def test_selector_lookup(self):
        assert ui_tag_for_selector("SPAN") == "ui:Label"
        assert ui_tag_for_selector('input[type="range"]') == "ui:Slider"

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            HTML_TO_UI["img"] = "ui:Image"
