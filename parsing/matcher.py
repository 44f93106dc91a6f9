"""Predicate deciding whether an attribute value satisfies a matcher."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from models.elements import AttributeRecord
from models.matchers import (
    AlwaysMatcher,
    EqualsMatcher,
    MatcherUnion,
    OneOfMatcher,
    StructuredMatcher,
)


def _find_attribute(
    attributes: Sequence[AttributeRecord], name: str
) -> AttributeRecord | None:
    for attr in attributes:
        if attr.name == name:
            return attr
    return None


def matches(
    node_name: str,
    attributes: Sequence[AttributeRecord],
    value: str,
    matcher: Optional[MatcherUnion],
) -> bool:
    """Return True if *value* (on an element *node_name* with *attributes*)
    satisfies *matcher*.

    Structured matchers AND together the node name check and one check per
    referenced sibling attribute.  A referenced attribute that is missing
    from the element is skipped rather than failing the match.
    """
    if isinstance(matcher, AlwaysMatcher):
        return True
    if isinstance(matcher, EqualsMatcher):
        return matcher.value == value
    if isinstance(matcher, OneOfMatcher):
        return value in matcher.values
    if isinstance(matcher, StructuredMatcher):
        if matcher.node_name and matcher.node_name != node_name:
            return False
        for attr_name, nested in (matcher.attributes or {}).items():
            attr = _find_attribute(attributes, attr_name)
            if attr is None:
                continue
            if not matches(node_name, attributes, attr.value, nested):
                return False
        return True
    return False
