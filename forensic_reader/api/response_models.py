"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    indexes: int
    rows: int
    revision: int


class IndexSummary(BaseModel):
    name: str
    file_name: str
    columns: list[str]
    rows: int


class IndexListResponse(BaseModel):
    indexes: list[IndexSummary]
    count: int


class UploadedFile(BaseModel):
    file_name: str
    index: str
    rows: int


class UploadResponse(BaseModel):
    status: str
    count: int
    files: list[UploadedFile]


class RemoveResponse(BaseModel):
    name: str
    removed: bool


class FieldValueModel(BaseModel):
    value: str
    count: int


class FieldInfoModel(BaseModel):
    name: str
    top_values: list[FieldValueModel]


class FieldsResponse(BaseModel):
    index: str
    fields: list[FieldInfoModel]


class QueryRequest(BaseModel):
    query: str = ""


class PageRequest(BaseModel):
    page: int


class QueryStateResponse(BaseModel):
    query: str
    page: int
    page_size: int


class ResultRow(BaseModel):
    index: str
    row: dict[str, str]


class ResultsResponse(BaseModel):
    query: str
    page: int
    total_pages: int
    page_size: int
    total_results: int
    index_count: int
    columns: list[str]
    results: list[ResultRow]
    message: Optional[str] = None
