"""Flat, regex-based tokenizer for opening tags in an HTML fragment.

This is not an HTML parser.  It scans for ``<...>`` spans left to right,
skips closing tags, and splits each opening tag into a node name and its
attributes while remembering the exact source text and offsets of every
piece so the filter engine can splice edits back in.

HTML does not allow escaping quotes inside attribute values, so no escape
handling is done (``aria-label="\\"x\\""`` is not valid markup anyway).
"""

from __future__ import annotations

import re

from models.elements import AttributeRecord, Element

# Everything between an opening and closing bracket; a trailing "/" of a
# self-closing tag is left outside the captured group.
TAG_PATTERN = re.compile(r"<([^>]+?)/?>")

# Word boundary over ASCII word characters only; "ü" is not a word char.
_BOUNDARY = (
    r"(?:(?<![A-Za-z0-9_])(?=[A-Za-z0-9_])"
    r"|(?<=[A-Za-z0-9_])(?![A-Za-z0-9_]))"
)

ATTRIBUTE_PATTERN = re.compile(
    r"(?:([^\s=]+)="  # 1: name of a valued attribute
    r"(?:\"([^\"]*)\""  # 2: double quoted value
    r"|'([^']*)'"  # 3: single quoted value
    r"|([^'\"\s]*)))"  # 4: unquoted value
    r"|" + _BOUNDARY + r"(\S+)"  # 5: bare attribute name
)


def _parse_attributes(text: str, offset: int) -> tuple[AttributeRecord, ...]:
    """Split the attribute text of one tag into records.

    *offset* is the absolute position of ``text[0]`` in the scanned string.
    """
    attributes: list[AttributeRecord] = []
    for match in ATTRIBUTE_PATTERN.finditer(text):
        name = match.group(1) or match.group(5)
        value = match.group(2) or match.group(3) or match.group(4) or ""
        attributes.append(
            AttributeRecord(
                name=name.lower(),
                value=value,
                raw=match.group(0),
                start=offset + match.start(),
                end=offset + match.end(),
            )
        )
    return tuple(attributes)


def parse_elements(html: str) -> list[Element]:
    """Tokenize every opening tag in *html*, in document order.

    Closing tags (``</div>``) never produce an element.  The node name runs
    up to the first space and is lowercased; the rest of the tag, trimmed,
    is the attribute text.
    """
    elements: list[Element] = []
    for match in TAG_PATTERN.finditer(html):
        tag = match.group(1)
        if tag.startswith("/"):
            continue

        space = tag.find(" ")
        if space == -1:
            space = len(tag)
        node_name = tag[:space].lower()

        rest = tag[space + 1 :]
        attribute_text = rest.strip()
        # skip the separating space and any leading whitespace of the rest
        offset = match.start(1) + space + 1 + (len(rest) - len(rest.lstrip()))

        elements.append(
            Element(
                node_name=node_name,
                attributes=_parse_attributes(attribute_text, offset),
                raw=match.group(0),
                start=match.start(),
                end=match.end(),
            )
        )
    return elements
