from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class FileType(StrEnum):
    MODEL = "model"
    DATASET = "dataset"
    DASHBOARD = "dashboard"
    TEXT = "text"


class PropertyType(StrEnum):
    DATASOURCE = "datasource"
    METRIC = "metric"
    DIMENSION = "dimension"
    MEASURE = "measure"
    TAG = "tag"
    OWNER = "owner"


class FieldType(StrEnum):
    OWNER = "owner"
    TAG = "tag"
    DATASOURCE = "datasource"


# Values accepted after `type:`
FILTER_OBJECT_TYPES: frozenset[str] = frozenset(
    {
        PropertyType.DIMENSION.value,
        PropertyType.MEASURE.value,
        PropertyType.METRIC.value,
        FileType.MODEL.value,
        FileType.DATASET.value,
        FileType.DASHBOARD.value,
    }
)

# A field value must contain at least one character that is neither whitespace nor ':'
FILTER_VALUE_RE = re.compile(r"[^\s:]+")


# ----- Tokens ----------------------------------------------------------------


class TokenKind(StrEnum):
    KEY_VALUE = "keyValue"
    TEXT = "text"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: tuple[str, str, str] | str

    @classmethod
    def key_value(cls, key: str, separator: str, value: str) -> Token:
        return cls(TokenKind.KEY_VALUE, (key, separator, value))

    @classmethod
    def text(cls, value: str) -> Token:
        return cls(TokenKind.TEXT, value)


# ----- Filters ---------------------------------------------------------------


@dataclass(frozen=True)
class ObjectFilter:
    object_type: str
    object_name: str = ""


@dataclass(frozen=True)
class FieldFilter:
    field_type: str
    field_name: str


@dataclass(frozen=True)
class TextFilter:
    search_text: str


Filter = ObjectFilter | FieldFilter | TextFilter


# ----- Search options and operators -------------------------------------------


class SearchModes(BaseModel):
    match_case: bool = False
    match_whole_word: bool = False


class SearchOptions(SearchModes):
    """Options handed to the search engine with every operator.

    ``prefix_regex`` is matched against the line content preceding a candidate
    match; ``file_type`` restricts the candidate files.
    """

    prefix_regex: re.Pattern[str] | None = None
    file_type: str | None = None


class SearchOperator(BaseModel):
    search_text: str
    options: SearchOptions

    def to_search_data(self) -> SearchData:
        """Return the flat form of this operator."""
        return SearchData(search_text=self.search_text, **self.options.model_dump())


class SearchData(SearchOptions):
    search_text: str


class SearchFile(BaseModel):
    path: str
    content: str


class MultipleSearchParams(BaseModel):
    files: dict[str, SearchFile] = Field(default_factory=dict)
    operators: list[SearchOperator] = Field(default_factory=list)
    search_id: int


class SingleSearchParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: SearchFile
    operator: SearchOperator
    search_id: int


# ----- API payloads ----------------------------------------------------------


class ParseRequest(BaseModel):
    query: str = ""


class OperatorsRequest(BaseModel):
    query: str = ""
    match_case: bool | None = None
    match_whole_word: bool | None = None
