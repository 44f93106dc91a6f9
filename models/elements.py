"""Tokenized opening-tag records produced by ``parsing.tokenizer``."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AttributeRecord:
    """One attribute occurrence inside an opening tag.

    ``name`` is lowercased, ``value`` is quote-stripped (empty for bare
    attributes) and ``raw`` is the exact source text, e.g. ``class="a"``.
    ``start``/``end`` are absolute offsets into the tokenized string.
    """

    name: str
    value: str
    raw: str
    start: int
    end: int


@dataclass(frozen=True)
class Element:
    """An opening tag: lowercased node name, attributes and raw source text."""

    node_name: str
    attributes: tuple[AttributeRecord, ...]
    raw: str
    start: int
    end: int
