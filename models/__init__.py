"""Public re-exports of all model types."""

from models.elements import AttributeRecord, Element
from models.matchers import (
    AlwaysMatcher,
    EqualsMatcher,
    MatcherUnion,
    OneOfMatcher,
    StructuredMatcher,
    compile_rules,
    match_always,
    match_equals,
    match_one_of,
    match_structured,
    to_matcher,
)
from models.request import FilterRequest
from models.response import FilterResponse

__all__ = [
    # Tokens
    "AttributeRecord",
    "Element",
    # Matchers
    "AlwaysMatcher",
    "EqualsMatcher",
    "OneOfMatcher",
    "StructuredMatcher",
    "MatcherUnion",
    # Matcher factories
    "match_always",
    "match_equals",
    "match_one_of",
    "match_structured",
    # Coercion
    "to_matcher",
    "compile_rules",
    # Request/Response
    "FilterRequest",
    "FilterResponse",
]
