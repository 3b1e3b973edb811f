from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import asdict
from typing import Any

from ..models import (
    FILTER_VALUE_RE,
    FieldFilter,
    Filter,
    ObjectFilter,
    TextFilter,
    Token,
    TokenKind,
)
from .tokenizer import tokenize
from .vocabulary import is_field_filter_key, is_file_object_type, is_object_type

logger = logging.getLogger(__name__)


def _text_filter_from_key_value(key: str, value: str) -> TextFilter:
    # unrecognized qualifiers are searched literally
    return TextFilter(search_text=f"{key}:{value}")


def filter_from_token(token: Token) -> Filter:
    """Classify a single token.

    - ``type:<object type>``      -> ObjectFilter(object_type, "")
    - ``owner:x`` / ``datasource:x`` -> FieldFilter
    - any other ``key:value``     -> TextFilter("key:value")
    - free text                   -> TextFilter
    """
    if token.kind is TokenKind.KEY_VALUE:
        key, _, value = token.value
        if key == "type" and (is_object_type(value) or is_file_object_type(value)):
            return ObjectFilter(object_type=value, object_name="")
        if is_field_filter_key(key) and FILTER_VALUE_RE.search(value):
            return FieldFilter(field_type=key, field_name=value)
        return _text_filter_from_key_value(key, value)
    return TextFilter(search_text=token.value)


def build_filters(tokens: Iterable[Token]) -> list[Filter]:
    """Map every token to exactly one filter, in order."""
    return [filter_from_token(t) for t in tokens]


def merge_filters(filters: Iterable[Filter]) -> list[Filter]:
    """Join runs of adjacent text filters with a single space.

    Object and field filters are kept as they are and end the current run.
    """
    merged: list[Filter] = []
    run: list[str] = []
    for f in filters:
        if isinstance(f, TextFilter):
            run.append(f.search_text)
            continue
        if run:
            merged.append(TextFilter(search_text=" ".join(run)))
            run = []
        merged.append(f)
    if run:
        merged.append(TextFilter(search_text=" ".join(run)))
    return merged


def serialize_filter(f: Filter) -> str:
    """Return a stable string key for a filter, e.g. ``field-owner-alice``."""
    if isinstance(f, TextFilter):
        return f"text-{f.search_text}"
    if isinstance(f, FieldFilter):
        return f"field-{f.field_type}-{f.field_name}"
    if isinstance(f, ObjectFilter):
        return f"object-{f.object_type}-{f.object_name}"
    raise TypeError(f"not a filter: {f!r}")


def filter_to_dict(f: Filter) -> dict[str, Any]:
    """Return a JSON-serializable representation of a filter."""
    key = serialize_filter(f)
    return {"type": key.split("-", 1)[0], **asdict(f), "key": key}


def parse_query(q: str) -> list[Filter]:
    """Parse a search box string into merged filters.

    Examples:
      'type:model owner:alice' -> [ObjectFilter('model', ''), FieldFilter('owner', 'alice')]
      'foo:bar baz'            -> [TextFilter('foo:bar baz')]
    """
    tokens = tokenize(q)
    filters = merge_filters(build_filters(tokens))
    logger.debug("parsed %d tokens into %d filters", len(tokens), len(filters))
    return filters
