"""Closed vocabularies of the AML search syntax and their predicates.

Each predicate is an exact, case-sensitive membership test. Adding a new object
type means updating the sets below together.
"""
from __future__ import annotations

import re

from ..models import FILTER_OBJECT_TYPES, FieldType, FileType, PropertyType

FILE_TYPES: frozenset[str] = frozenset(t.value for t in FileType)
PROPERTY_TYPES: frozenset[str] = frozenset(t.value for t in PropertyType)

# Keys accepted as `key:value` field filters. FieldType also lists `tag`, but a
# `tag:` qualifier is searched as literal text.
FIELD_FILTER_KEYS: frozenset[str] = frozenset({FieldType.OWNER.value, FieldType.DATASOURCE.value})

FILE_OBJECT_TYPES: frozenset[str] = frozenset(
    {FileType.MODEL.value, FileType.DATASET.value, FileType.DASHBOARD.value}
)

_REGEX_SPECIALS = re.compile(r"[.*+?^${}()|\[\]\\]")


def is_file_type(value: str) -> bool:
    return value in FILE_TYPES


def is_property_type(value: str) -> bool:
    return value in PROPERTY_TYPES


def is_field_filter_key(value: str) -> bool:
    return value in FIELD_FILTER_KEYS


def is_object_type(value: str) -> bool:
    """Return True if ``value`` may follow ``type:``."""
    return value in FILTER_OBJECT_TYPES


def is_file_object_type(value: str) -> bool:
    return value in FILE_OBJECT_TYPES


def escape_regexp(text: str) -> str:
    """Backslash-escape regex metacharacters in ``text``.

    Example:
      'a.b' -> 'a\\.b'
    """
    return _REGEX_SPECIALS.sub(lambda m: "\\" + m.group(0), text)
