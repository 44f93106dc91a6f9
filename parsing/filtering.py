"""Attribute filtering for serialized HTML fragments.

Removes attributes matching caller-supplied rules from every opening tag and
returns the edited string.  This is **not** an XSS sanitizer: the input is
assumed to be ordinary, well-formed markup, and the goal is only to strip
noise (generated ids, tracking data) before HTML is reported or compared.

Examples::

    # remove the attribute whatever its value
    filter_html_attrs('<div data-attr="foo">my div</div>', {"data-attr": True})

    # remove it only for a given value, or one of several values
    filter_html_attrs(html, {"data-attr": "foo"})
    filter_html_attrs(html, {"data-attr": ["foo", "bar"]})

    # remove class only from <input> elements
    filter_html_attrs(html, {"className": {"nodeName": "input"}})

Rules are looked up by logical key: ``for`` is governed by ``htmlFor`` and
``class`` by ``className``; every other attribute by its own name.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Optional

from models.elements import Element
from models.matchers import MatcherUnion, compile_rules
from parsing.matcher import matches
from parsing.tokenizer import parse_elements

logger = logging.getLogger("attrfilter")

ATTRIBUTE_ALIASES = {"for": "htmlFor", "class": "className"}


def rule_key(name: str) -> str:
    """Return the rule key that governs the HTML attribute *name*."""
    return ATTRIBUTE_ALIASES.get(name, name)


def filter_attributes(element: Element, rules: Mapping[str, MatcherUnion]) -> Element:
    """Return *element* without the attributes whose rule matches.

    The attribute run inside ``raw`` is replaced by the surviving raw
    attributes joined with single spaces.  When nothing is dropped ``raw``
    is returned untouched; when everything is dropped the whitespace before
    the attribute run goes too, so ``<div data-x="y">`` becomes ``<div>``.
    Offsets keep referring to the source string.
    """
    kept = tuple(
        attr
        for attr in element.attributes
        if not matches(
            element.node_name,
            element.attributes,
            attr.value,
            rules.get(rule_key(attr.name)),
        )
    )
    if len(kept) == len(element.attributes):
        return element

    first, last = element.attributes[0], element.attributes[-1]
    head = element.raw[: first.start - element.start]
    tail = element.raw[last.end - element.start :]
    if not kept:
        head = head.rstrip()
    raw = head + " ".join(attr.raw for attr in kept) + tail
    return replace(element, attributes=kept, raw=raw)


def apply_rules(html: str, rules: Mapping[str, MatcherUnion]) -> tuple[str, int]:
    """Filter *html* with compiled *rules*.

    Rewritten tags are spliced back by offset, so byte-identical tags are
    each handled on their own.

    Returns:
        The filtered string and the number of attribute records removed.
    """
    if not rules:
        return html, 0

    pieces: list[str] = []
    cursor = 0
    removed = 0
    for element in parse_elements(html):
        filtered = filter_attributes(element, rules)
        if filtered is element:
            continue
        dropped = len(element.attributes) - len(filtered.attributes)
        removed += dropped
        logger.debug(
            "filtered <%s> at %d: removed %d attribute(s)",
            element.node_name,
            element.start,
            dropped,
        )
        pieces.append(html[cursor : element.start])
        pieces.append(filtered.raw)
        cursor = element.end
    pieces.append(html[cursor:])
    return "".join(pieces), removed


def filter_html_attrs(html: str, filter_attrs: Optional[Mapping[str, Any]] = None) -> str:
    """Remove attributes matching *filter_attrs* from *html*.

    Args:
        html: HTML fragment to edit.
        filter_attrs: Rule key to matcher.  A matcher is ``True``, a string,
            a list of strings, a ``{"nodeName": ..., "attributes": {...}}``
            mapping, or one of the typed matchers in ``models.matchers``.

    Returns:
        *html* with the matching attributes removed; unchanged when
        *filter_attrs* is empty or ``None``.
    """
    if not filter_attrs:
        return html
    filtered, _ = apply_rules(html, compile_rules(filter_attrs))
    return filtered
