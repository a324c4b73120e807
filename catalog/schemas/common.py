from typing import List

from pydantic import BaseModel, ConfigDict, Field


class PaginationRead(BaseModel):
    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    total_count: int = Field(alias="totalCount")
    limit: int
    has_next_page: bool = Field(alias="hasNextPage")
    has_prev_page: bool = Field(alias="hasPrevPage")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class StringListResponse(BaseModel):
    success: bool = True
    data: List[str] = Field(default_factory=list)
