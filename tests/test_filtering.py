"""
Tests for the attribute filter engine.

Tests for:
- filter_html_attrs() with every matcher shape
- Rule-key aliasing (htmlFor / className)
- Closing tags, bare attributes and self-closing tags
- Identity, idempotence and order preservation
- apply_rules() removal counts and filter_attributes()
"""

import pytest
from bs4 import BeautifulSoup

from models.matchers import compile_rules, match_structured
from parsing.filtering import (
    apply_rules,
    filter_attributes,
    filter_html_attrs,
    rule_key,
)
from parsing.tokenizer import parse_elements

DIV = '<div data-x="y">t</div>'


# ===========================================================================
# MATCHER SHAPE TESTS
# ===========================================================================

class TestMatcherShapes:
    """Tests for each loose matcher shape end to end."""

    def test_boolean(self):
        assert filter_html_attrs(DIV, {"data-x": True}) == "<div>t</div>"

    def test_string_match(self):
        assert filter_html_attrs(DIV, {"data-x": "y"}) == "<div>t</div>"

    def test_string_mismatch(self):
        assert filter_html_attrs(DIV, {"data-x": "z"}) == DIV

    def test_string_is_case_sensitive(self):
        assert filter_html_attrs(DIV, {"data-x": "Y"}) == DIV

    def test_list(self):
        assert filter_html_attrs(DIV, {"data-x": ["y", "z"]}) == "<div>t</div>"
        assert filter_html_attrs(DIV, {"data-x": ["z"]}) == DIV

    def test_structured_node_name(self):
        """The rule only applies to elements with the given node name."""
        rules = {"className": {"nodeName": "input"}}

        assert (
            filter_html_attrs('<input type="text" class="foo">', rules)
            == '<input type="text">'
        )
        assert filter_html_attrs('<div class="foo">', rules) == '<div class="foo">'

    def test_structured_nested_markup(self):
        html = '<div class="foo"><input type="text" class="foo"/></div>'

        assert (
            filter_html_attrs(html, {"className": {"nodeName": "input"}})
            == '<div class="foo"><input type="text"/></div>'
        )

    def test_structured_sibling_attributes(self):
        html = (
            '<input type="hidden" name="csrf" value="abc">'
            '<input type="text" name="q" value="hi">'
        )
        rules = {"value": {"attributes": {"type": "hidden"}}}

        assert filter_html_attrs(html, rules) == (
            '<input type="hidden" name="csrf">'
            '<input type="text" name="q" value="hi">'
        )

    def test_structured_missing_sibling_is_skipped(self):
        rules = {"value": {"attributes": {"type": "hidden"}}}

        assert filter_html_attrs('<input value="x">', rules) == "<input>"

    @pytest.mark.parametrize("node_name", [5, True])
    def test_structured_non_string_node_name(self, node_name):
        """A malformed nodeName removes nothing."""
        html = '<div class="a"><input class="b"></div>'

        assert filter_html_attrs(html, {"className": {"nodeName": node_name}}) == html

    def test_typed_matchers_accepted(self):
        rules = {"className": match_structured("input")}

        assert filter_html_attrs('<input class="a">', rules) == "<input>"


# ===========================================================================
# ALIAS TESTS
# ===========================================================================

class TestAliases:
    """Tests for rule-key aliasing."""

    LABEL = '<label for="x" class="c">L</label>'

    def test_rule_key(self):
        assert rule_key("for") == "htmlFor"
        assert rule_key("class") == "className"
        assert rule_key("id") == "id"

    def test_html_for(self):
        assert filter_html_attrs(self.LABEL, {"htmlFor": True}) == (
            '<label class="c">L</label>'
        )

    def test_class_name(self):
        assert filter_html_attrs(self.LABEL, {"className": "c"}) == (
            '<label for="x">L</label>'
        )

    @pytest.mark.parametrize("key", ["for", "class"])
    def test_literal_names_do_not_apply(self, key):
        """Lookup only goes from HTML name to alias, never back."""
        assert filter_html_attrs(self.LABEL, {key: True}) == self.LABEL


# ===========================================================================
# MARKUP TESTS
# ===========================================================================

class TestMarkup:
    """Tests for how filtered tags are rewritten."""

    def test_closing_tag_untouched(self):
        result = filter_html_attrs(DIV, {"data-x": True})

        assert result.endswith("</div>")

    def test_bare_attribute_kept(self):
        html = '<input type="checkbox" disabled>'

        assert filter_html_attrs(html, {"checked": True}) == html

    def test_bare_attribute_removed(self):
        assert filter_html_attrs("<input disabled>", {"disabled": True}) == "<input>"
        assert (
            filter_html_attrs('<input type="checkbox" disabled>', {"disabled": True})
            == '<input type="checkbox">'
        )

    def test_self_closing_all_removed(self):
        assert filter_html_attrs("<input disabled />", {"disabled": True}) == (
            "<input />"
        )

    def test_order_preserved(self):
        html = '<div a="1" b="2" c="3" d="4">'

        assert filter_html_attrs(html, {"b": True, "d": True}) == '<div a="1" c="3">'

    def test_identical_elements(self):
        """Byte-identical tags are each filtered."""
        html = '<p data-id="1">a</p><p data-id="1">b</p>'

        assert filter_html_attrs(html, {"data-id": True}) == "<p>a</p><p>b</p>"

    def test_identical_attributes_on_different_elements(self):
        html = '<span data-id="1"></span><div data-id="1"></div>'
        rules = {"data-id": {"nodeName": "div"}}

        assert filter_html_attrs(html, rules) == '<span data-id="1"></span><div></div>'

    def test_extra_whitespace_inside_tag(self):
        html = '<div  a="1"   b="2">'

        assert filter_html_attrs(html, {"b": True}) == '<div  a="1">'

    def test_newline_between_attributes(self):
        """The attribute run is rewritten with single spaces."""
        html = '<div a="1"\n b="2" c="3">'

        assert filter_html_attrs(html, {"b": True}) == '<div a="1" c="3">'
        assert filter_html_attrs(html, {"a": True}) == '<div b="2" c="3">'
        assert filter_html_attrs(html, {"d": True}) == html

    def test_text_outside_tags_untouched(self):
        html = 'before <b title="x">bold</b> after'

        assert filter_html_attrs(html, {"title": True}) == "before <b>bold</b> after"

    def test_duplicate_attributes_filtered_independently(self):
        html = '<p class="a" class="b">'

        assert filter_html_attrs(html, {"className": "b"}) == '<p class="a">'


# ===========================================================================
# PROPERTY TESTS
# ===========================================================================

SAMPLES = [
    "",
    "plain text",
    DIV,
    '<label for="x" class="c">L</label><input id="x" disabled>',
    '<ul data-v-1a2b><li class="item" data-id=7>one</li></ul>',
]


class TestProperties:
    """Tests for identity and idempotence."""

    @pytest.mark.parametrize("html", SAMPLES)
    @pytest.mark.parametrize("rules", [None, {}, {"data-x": False}, {"id": ""}])
    def test_identity(self, html, rules):
        assert filter_html_attrs(html, rules) == html

    @pytest.mark.parametrize("html", SAMPLES)
    def test_idempotent(self, html):
        rules = {"className": True, "data-id": True, "data-v-1a2b": True}
        once = filter_html_attrs(html, rules)

        assert filter_html_attrs(once, rules) == once

    def test_agrees_with_independent_parser(self):
        """Surviving attributes equal what an HTML parser sees afterwards."""
        html = (
            '<div id="main" class="box" data-track="x">'
            '<label for="q" class="lbl">Q</label>'
            '<input id="q" type="text" class="fld" data-track="y" disabled>'
            "</div>"
        )
        result = filter_html_attrs(html, {"className": True, "data-track": True})
        soup = BeautifulSoup(result, "lxml")

        assert set(soup.find("div").attrs) == {"id"}
        assert set(soup.find("label").attrs) == {"for"}
        assert set(soup.find("input").attrs) == {"id", "type", "disabled"}
        assert soup.find("label").get_text() == "Q"


# ===========================================================================
# ENGINE TESTS
# ===========================================================================

class TestEngine:
    """Tests for apply_rules() and filter_attributes()."""

    def test_removed_count(self):
        html = '<a href="#" data-a="1" data-b="2">x</a><a data-a="3">y</a>'
        rules = compile_rules({"data-a": True, "data-b": True})

        result, removed = apply_rules(html, rules)

        assert result == '<a href="#">x</a><a>y</a>'
        assert removed == 3

    def test_no_rules(self):
        assert apply_rules(DIV, {}) == (DIV, 0)

    def test_unchanged_element_is_returned_as_is(self):
        element = parse_elements(DIV)[0]

        assert filter_attributes(element, compile_rules({"id": True})) is element

    def test_filtered_element(self):
        element = parse_elements('<input type="text" class="foo">')[0]
        filtered = filter_attributes(element, compile_rules({"className": True}))

        assert filtered.node_name == "input"
        assert [a.name for a in filtered.attributes] == ["type"]
        assert filtered.raw == '<input type="text">'
        assert (filtered.start, filtered.end) == (element.start, element.end)
