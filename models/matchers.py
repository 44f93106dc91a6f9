"""Attribute matcher types as Pydantic v2 models with discriminated union.

Callers usually hand rules over in the loose dict/JSON shape::

    {"data-x": True}                                   # always
    {"data-x": "y"}                                    # exact value
    {"data-x": ["y", "z"]}                             # value in list
    {"className": {"nodeName": "input",
                   "attributes": {"type": "text"}}}    # structured

``to_matcher()`` turns each of those into one of the typed variants below.
"""

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


class AlwaysMatcher(BaseModel):
    """Matches regardless of the attribute value."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["always"] = "always"


class EqualsMatcher(BaseModel):
    """Matches when the attribute value equals ``value`` (case-sensitive)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["equals"] = "equals"
    value: str


class OneOfMatcher(BaseModel):
    """Matches when the attribute value is one of ``values``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["oneOf"] = "oneOf"
    values: list[str]


class StructuredMatcher(BaseModel):
    """Matches on the owning element's node name and sibling attributes.

    A ``None`` entry in ``attributes`` is an unrecognized nested rule and
    never matches.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["structured"] = "structured"
    node_name: Optional[str] = None
    attributes: Optional[dict[str, Optional["MatcherUnion"]]] = None


MatcherUnion = Annotated[
    Union[AlwaysMatcher, EqualsMatcher, OneOfMatcher, StructuredMatcher],
    Field(discriminator="kind"),
]

StructuredMatcher.model_rebuild()

_MATCHER_TYPES = (AlwaysMatcher, EqualsMatcher, OneOfMatcher, StructuredMatcher)


# ---------------------------------------------------------------------------
# Helper factory functions
# ---------------------------------------------------------------------------


def match_always() -> AlwaysMatcher:
    """Create an always matcher."""
    return AlwaysMatcher()


def match_equals(value: str) -> EqualsMatcher:
    """Create an exact-value matcher."""
    return EqualsMatcher(value=value)


def match_one_of(*values: str) -> OneOfMatcher:
    """Create a value-membership matcher."""
    return OneOfMatcher(values=list(values))


def match_structured(
    node_name: Optional[str] = None,
    attributes: Optional[dict[str, Any]] = None,
) -> StructuredMatcher:
    """Create a structured matcher; nested rules may use the loose shapes."""
    nested = None
    if attributes:
        nested = {
            name: to_matcher(rule, nested=True) for name, rule in attributes.items()
        }
    return StructuredMatcher(node_name=node_name or None, attributes=nested)


# ---------------------------------------------------------------------------
# Coercion from the loose dict/JSON shapes
# ---------------------------------------------------------------------------


def to_matcher(raw: Any, *, nested: bool = False) -> Optional[MatcherUnion]:
    """Coerce a loose rule value into a matcher variant.

    Returns ``None`` for "no rule".  At the top level ``None``, ``False``
    and ``""`` mean the attribute is not filtered.  Inside a structured
    matcher's ``attributes`` any boolean (even ``False``) matches and
    ``""`` only matches an empty value.  Unrecognized shapes (numbers,
    arbitrary objects) are never an error.  A structured rule whose
    ``nodeName`` is set but is not a string can never equal a tag name,
    so it becomes a matcher that matches nothing.
    """
    if isinstance(raw, _MATCHER_TYPES):
        return raw
    if isinstance(raw, bool):
        if raw or nested:
            return AlwaysMatcher()
        return None
    if isinstance(raw, str):
        if raw or nested:
            return EqualsMatcher(value=raw)
        return None
    if isinstance(raw, _SEQUENCE_TYPES):
        return OneOfMatcher(values=[v for v in raw if isinstance(v, str)])
    if isinstance(raw, Mapping):
        node_name = raw.get("nodeName")
        if node_name and not isinstance(node_name, str):
            return OneOfMatcher(values=[])
        attributes = raw.get("attributes")
        if not isinstance(attributes, Mapping) or not attributes:
            attributes = None
        return match_structured(node_name, attributes)
    return None


def compile_rules(filter_attrs: Optional[Mapping[str, Any]]) -> dict[str, MatcherUnion]:
    """Coerce every rule in *filter_attrs*, dropping keys with no matcher."""
    rules: dict[str, MatcherUnion] = {}
    for key, raw in (filter_attrs or {}).items():
        matcher = to_matcher(raw)
        if matcher is not None:
            rules[key] = matcher
    return rules
