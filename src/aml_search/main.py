import logging
from types import SimpleNamespace
from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from aml_search.config import Settings
from aml_search.models import SearchFile
from aml_search.search.dispatch import build_search_params, split_search_params
from aml_search.search.filters import filter_to_dict, parse_query
from aml_search.search.operators import build_search_operators

logger = logging.getLogger(__name__)

# ----- Initialization: settings ---------------------------------------------

settings = Settings()

# ----- FastMCP app and tools ------------------------------------------------

mcp = FastMCP(name=settings.server_name)

# attach state container for tools to access
mcp.state = SimpleNamespace()
mcp.state.settings = settings


@mcp.tool()
async def parse_search_query(query: str, ctx: Context | None = None) -> dict[str, Any]:
    """Parse a search box string into object, field and text filters."""
    filters = parse_query(query)
    return {"count": len(filters), "filters": [filter_to_dict(f) for f in filters]}


@mcp.tool()
async def build_query_operators(
    query: str,
    match_case: bool | None = None,
    match_whole_word: bool | None = None,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Compile a search box string into the operators the search engine runs.

    match_case and match_whole_word default to the server settings.
    """
    options = mcp.state.settings.options_for(match_case, match_whole_word)
    operators = build_search_operators(parse_query(query), options)
    return {
        "count": len(operators),
        "operators": [op.model_dump(mode="json") for op in operators],
    }


@mcp.tool()
async def plan_search(
    query: str,
    files: dict[str, str],
    search_id: int = 0,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Pair each file (path -> content) with the operators that apply to it."""
    operators = build_search_operators(parse_query(query), mcp.state.settings.base_options())
    params = build_search_params(
        [SearchFile(path=p, content=c) for p, c in files.items()], operators, search_id
    )
    units = [
        {"path": unit.file.path, "operator": unit.operator.model_dump(mode="json")}
        for unit in split_search_params(params)
    ]
    return {"search_id": search_id, "count": len(units), "units": units}


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    mcp.run()
