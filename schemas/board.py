# schemas/board.py
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

# storage 정수 컬럼(64-bit signed) 범위
MIN_INT = -(2**63)
MAX_INT = 2**63 - 1


# ── 요청 바디 ───────────────────────────────────────────────

class ListRequest(BaseModel):
    pageNum: int = Field(..., ge=1, le=MAX_INT)
    rowsPerPage: int = Field(..., ge=1, le=MAX_INT)
    search: Optional[str] = None

    @model_validator(mode="after")
    def check_offset(self):
        if (self.pageNum - 1) * self.rowsPerPage > MAX_INT:
            raise ValueError("pageNum * rowsPerPage is out of range")
        return self


class DetailRequest(BaseModel):
    id: int = Field(..., ge=MIN_INT, le=MAX_INT)


class InsertRequest(BaseModel):
    title: str
    content: str
    writer: str
    password: str


class CheckPasswordRequest(BaseModel):
    id: int = Field(..., ge=MIN_INT, le=MAX_INT)
    password: str


class DeleteRequest(BaseModel):
    id: int = Field(..., ge=MIN_INT, le=MAX_INT)
    password: str


class UpdateRequest(BaseModel):
    id: int = Field(..., ge=MIN_INT, le=MAX_INT)
    title: str
    content: str
    password: str


# ── 응답 (OpenAPI 문서용) ───────────────────────────────────

class ListResponse(BaseModel):
    result: list[dict[str, Any]]
    totalCount: int
    totalPages: int


class ResultResponse(BaseModel):
    result: Any


class ErrorResponse(BaseModel):
    error: str


ERROR_422 = {422: {"model": ErrorResponse, "description": "NOT_FOUND / INVALID_PASSWORD"}}
