DEFAULT_PAGE = 1
MIN_PAGE_LIMIT = 1

# Largest value an INTEGER column or LIMIT/OFFSET bind accepts.
MAX_STORE_INTEGER = 2**63 - 1

SORT_ASC = "asc"
SORT_DESC = "desc"

# Query-string name -> Product attribute.
SORTABLE_PRODUCT_FIELDS = {
    "id": "id",
    "sku": "sku",
    "name": "name",
    "brand": "brand",
    "category": "category",
    "cost": "cost",
    "retail_price": "retail_price",
    "department_id": "department_id",
    "distribution_center_id": "distribution_center_id",
    "created_at": "created_at",
    "createdAt": "created_at",
    "updated_at": "updated_at",
    "updatedAt": "updated_at",
}

DEPARTMENT_DESCRIPTION_TEMPLATE = "{name} department products"

GENERIC_ERROR_MESSAGE = "Internal server error"
ROUTE_NOT_FOUND_MESSAGE = "Route not found"
INVALID_PAGINATION_MESSAGE = "Invalid pagination parameters"

API_ENDPOINTS = {
    "GET /api/products": "List products with pagination",
    "GET /api/products/:id": "Get product by ID",
    "GET /api/departments": "Get all departments",
    "GET /api/departments/:id": "Get department by ID",
    "GET /api/departments/:id/products": "Get all products in a department",
    "GET /api/categories": "Get all categories",
    "GET /api/brands": "Get all brands",
}
