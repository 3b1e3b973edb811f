from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import PurePosixPath

from ..models import MultipleSearchParams, SearchFile, SearchOperator, SingleSearchParams
from .vocabulary import is_file_object_type

logger = logging.getLogger(__name__)


def file_type_of(path: str) -> str | None:
    """Return the AML object type encoded in a file name, if any.

    This is a local naming convention (`<name>.<type>.aml`) used only to pre-pair
    files with operators here. How `file_type` restricts files inside the search
    engine is up to the engine.

    Examples:
      'models/orders.model.aml'      -> 'model'
      'dashboards/sales.page.aml'    -> None
    """
    for suffix in reversed(PurePosixPath(path).suffixes):
        candidate = suffix.lstrip(".")
        if is_file_object_type(candidate):
            return candidate
    return None


def build_search_params(
    files: Mapping[str, SearchFile] | Iterable[SearchFile],
    operators: list[SearchOperator],
    search_id: int,
) -> MultipleSearchParams:
    """Bundle files and operators into one request for the search engine."""
    if isinstance(files, Mapping):
        by_path = dict(files)
    else:
        by_path = {f.path: f for f in files}
    return MultipleSearchParams(files=by_path, operators=list(operators), search_id=search_id)


def split_search_params(params: MultipleSearchParams) -> Iterator[SingleSearchParams]:
    """Yield one unit of work per (file, operator) pair.

    Files come in insertion order and operators in query order. An operator with a
    ``file_type`` is only paired with files whose name carries that type (see
    :func:`file_type_of`).
    """
    for file in params.files.values():
        ftype = file_type_of(file.path)
        for op in params.operators:
            wanted = op.options.file_type
            if wanted is not None and wanted != ftype:
                continue
            yield SingleSearchParams(file=file, operator=op, search_id=params.search_id)
    logger.debug(
        "split search %s over %d files and %d operators",
        params.search_id,
        len(params.files),
        len(params.operators),
    )
