"""Opening-tag tokenizer, matcher predicate and attribute filter engine."""

from parsing.filtering import (
    ATTRIBUTE_ALIASES,
    apply_rules,
    filter_attributes,
    filter_html_attrs,
    rule_key,
)
from parsing.matcher import matches
from parsing.tokenizer import parse_elements

__all__ = [
    "ATTRIBUTE_ALIASES",
    "apply_rules",
    "filter_attributes",
    "filter_html_attrs",
    "matches",
    "parse_elements",
    "rule_key",
]
