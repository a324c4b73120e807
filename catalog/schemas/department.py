from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class DepartmentRead(BaseModel):
    id: int
    name: str
    description: str
    is_active: bool = Field(alias="isActive")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class DepartmentWithCount(DepartmentRead):
    product_count: int = Field(0, alias="productCount")


class DepartmentListResponse(BaseModel):
    success: bool = True
    data: List[DepartmentRead] = Field(default_factory=list)


class DepartmentResponse(BaseModel):
    success: bool = True
    data: DepartmentWithCount
