from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from catalog.schemas.common import PaginationRead
from catalog.schemas.department import DepartmentRead


class ProductRead(BaseModel):
    id: int
    sku: str
    name: str
    brand: str
    category: str
    cost: float
    retail_price: float
    department_id: Optional[int] = None
    distribution_center_id: int
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ProductWithDepartment(ProductRead):
    department: Optional[DepartmentRead] = None


class ProductListResponse(BaseModel):
    success: bool = True
    data: List[ProductWithDepartment] = Field(default_factory=list)
    pagination: PaginationRead


class ProductResponse(BaseModel):
    success: bool = True
    data: ProductWithDepartment


class AppliedFilters(BaseModel):
    category: Optional[str] = None
    brand: Optional[str] = None
    min_price: Optional[float] = Field(None, alias="minPrice")
    max_price: Optional[float] = Field(None, alias="maxPrice")
    search: Optional[str] = None
    sort_by: str = Field("id", alias="sortBy")
    sort_order: str = Field("asc", alias="sortOrder")

    model_config = ConfigDict(populate_by_name=True)


class DepartmentProductsResponse(ProductListResponse):
    department: DepartmentRead
    filters: AppliedFilters
