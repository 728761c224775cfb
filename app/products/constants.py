# Query parameter names (shared with the storefront URL state)
PRODUCT_FILTER_KEYS = {
    "PAGE": "page",
    "LIMIT": "limit",
    "SEARCH": "search",
    "CATEGORY": "category",
    "CATEGORIES": "categories",
    "SUBCATEGORY": "subcategory",
    "GROUP_ID": "groupId",
    "MIN_PRICE": "minPrice",
    "MAX_PRICE": "maxPrice",
    "IN_STOCK": "inStock",
    "FEATURED": "featured",
    "SORT": "sort",
    "STATUS": "status",
    "ADMIN": "admin",
}

# Sorting
SORT_OPTIONS = ("name", "price_asc", "price_desc", "created_at", "featured")
DEFAULT_SORT = "name"

# Price filter bound; every stored price (Numeric(10, 2)) is below it
PRICE_CEILING = 10**8

# Search
SEARCH_MAX_LENGTH = 100
LIKE_ESCAPE_CHAR = "\\"

# Category identifiers accepted from the query string
CATEGORY_PATTERN = r"^[a-zA-Z0-9-]+$"

# Cache-Control directives
PUBLIC_LIST_CACHE = "public, s-maxage=60, stale-while-revalidate=300"
PUBLIC_DETAIL_CACHE = "public, s-maxage=300, stale-while-revalidate=600"
ADMIN_CACHE = "no-cache"

# Fields an admin may set on create/update besides the required ones
OPTIONAL_PRODUCT_FIELDS = [
    "sku",
    "description",
    "short_description",
    "sale_price",
    "stock_quantity",
    "manage_stock",
    "status",
    "featured",
    "category_id",
    "subcategory_id",
    "images",
    "gallery",
    "meta_title",
    "meta_description",
    "weight",
    "dimensions",
]
