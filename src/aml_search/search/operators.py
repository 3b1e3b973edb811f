from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from ..models import (
    FieldFilter,
    FieldType,
    Filter,
    ObjectFilter,
    PropertyType,
    SearchOperator,
    SearchOptions,
    TextFilter,
)
from .filters import parse_query
from .vocabulary import escape_regexp, is_file_object_type, is_property_type

logger = logging.getLogger(__name__)

# Object types whose operator takes its search text from the following text filter
_PREFIXED_OBJECT_TYPES = frozenset(
    {PropertyType.DIMENSION.value, PropertyType.MEASURE.value, PropertyType.METRIC.value}
)
_PREFIXED_FIELD_TYPES = frozenset({FieldType.OWNER.value, FieldType.TAG.value})

# datasource lines are written as `data_source_name: ...` in AML files
DATASOURCE_PREFIX_RE = re.compile(r"\sdata_source_name:\s+.*")


def build_prefix_regex_for_object_type(object_type: str) -> re.Pattern[str] | None:
    """Return ``\\s<type>\\s+.*`` for dimension/measure/metric, else None."""
    if object_type in _PREFIXED_OBJECT_TYPES:
        return re.compile(rf"\s{escape_regexp(object_type)}\s+.*")
    return None


def build_prefix_regex_for_field_type(field_type: str) -> re.Pattern[str] | None:
    if field_type in _PREFIXED_FIELD_TYPES:
        return re.compile(rf"\s{escape_regexp(field_type)}:\s+.*")
    if field_type == FieldType.DATASOURCE.value:
        return DATASOURCE_PREFIX_RE
    return None


def build_prefix_regex_for_object_filter(f: ObjectFilter) -> re.Pattern[str] | None:
    if is_file_object_type(f.object_type):
        return None
    return build_prefix_regex_for_object_type(f.object_type)


def _with(base: SearchOptions, **update) -> SearchOptions:
    return base.model_copy(update=update)


def build_search_operators(
    filters: Sequence[Filter], base_options: SearchOptions | None = None
) -> list[SearchOperator]:
    """Compile merged filters into search operators.

    A dimension/measure/metric object filter consumes the text filter right after
    it and is dropped when none follows. File object filters restrict the file
    type instead of adding search text.
    """
    base = base_options or SearchOptions()
    operators: list[SearchOperator] = []
    i = 0
    while i < len(filters):
        f = filters[i]
        if isinstance(f, ObjectFilter):
            if is_file_object_type(f.object_type):
                operators.append(
                    SearchOperator(search_text=f.object_name, options=_with(base, file_type=f.object_type))
                )
            elif is_property_type(f.object_type):
                nxt = filters[i + 1] if i + 1 < len(filters) else None
                if isinstance(nxt, TextFilter):
                    prefix = build_prefix_regex_for_object_type(f.object_type)
                    options = _with(base, prefix_regex=prefix) if prefix else _with(base)
                    operators.append(SearchOperator(search_text=nxt.search_text, options=options))
                    i += 1
                else:
                    logger.info("discarding %s filter with no search text after it", f.object_type)
            else:
                operators.append(
                    SearchOperator(
                        search_text=f.object_name,
                        options=_with(base, prefix_regex=build_prefix_regex_for_object_filter(f)),
                    )
                )
        elif isinstance(f, FieldFilter):
            operators.append(
                SearchOperator(
                    search_text=f.field_name,
                    options=_with(base, prefix_regex=build_prefix_regex_for_field_type(f.field_type)),
                )
            )
        elif isinstance(f, TextFilter):
            operators.append(SearchOperator(search_text=f.search_text, options=_with(base)))
        else:
            raise TypeError(f"not a filter: {f!r}")
        i += 1

    logger.debug("built %d operators from %d filters", len(operators), len(filters))
    return operators


def search_operators_for_query(q: str, base_options: SearchOptions | None = None) -> list[SearchOperator]:
    """Parse ``q`` and compile it into search operators in one step."""
    return build_search_operators(parse_query(q), base_options)
