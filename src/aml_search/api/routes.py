from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter, Depends, FastAPI

from ..config import Settings
from ..models import OperatorsRequest, ParseRequest
from ..search.filters import filter_to_dict, parse_query
from ..search.operators import build_search_operators

router = APIRouter()


@lru_cache
def get_settings() -> Settings:
    return Settings()


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.post("/parse")
async def parse(request: ParseRequest):
    filters = parse_query(request.query)
    return {"count": len(filters), "filters": [filter_to_dict(f) for f in filters]}


@router.post("/operators")
async def operators(request: OperatorsRequest, settings: Settings = Depends(get_settings)):
    """
    Compile the query into search operators. Modes missing from the request fall
    back to the configured defaults.
    """
    options = settings.options_for(request.match_case, request.match_whole_word)
    ops = build_search_operators(parse_query(request.query), options)
    return {"count": len(ops), "operators": [op.model_dump(mode="json") for op in ops]}


def create_app() -> FastAPI:
    app = FastAPI(title="aml-search")
    app.include_router(router)
    return app
