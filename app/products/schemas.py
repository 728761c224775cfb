from marshmallow import Schema, fields, validate, validates_schema, ValidationError, EXCLUDE
from app.libs.schemas import LenientInt, PaginationSchema, QueryArgsSchema
from app.navigation.schemas import CategoryRefSchema, SLUG_VALIDATOR
from .models import ProductStatus

POSITIVE = validate.Range(min=0, min_inclusive=False)


class DimensionsSchema(Schema):
    length = fields.Float(allow_none=True, validate=POSITIVE)
    width = fields.Float(allow_none=True, validate=POSITIVE)
    height = fields.Float(allow_none=True, validate=POSITIVE)


class ProductCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=2, max=200))
    slug = fields.Str(validate=SLUG_VALIDATOR)
    sku = fields.Str(allow_none=True, validate=validate.Length(max=50))
    description = fields.Str(allow_none=True)
    short_description = fields.Str(allow_none=True, validate=validate.Length(max=500))
    price = fields.Float(required=True, validate=validate.Range(min=0))
    sale_price = fields.Float(allow_none=True, validate=validate.Range(min=0))
    stock_quantity = fields.Int(validate=validate.Range(min=0))
    manage_stock = fields.Bool()
    status = fields.Enum(ProductStatus, by_value=True)
    featured = fields.Bool()
    category_id = fields.Str(allow_none=True)
    subcategory_id = fields.Str(allow_none=True)
    images = fields.List(fields.Str())
    gallery = fields.List(fields.Str())
    meta_title = fields.Str(allow_none=True, validate=validate.Length(max=60))
    meta_description = fields.Str(allow_none=True, validate=validate.Length(max=160))
    weight = fields.Float(allow_none=True, validate=validate.Range(min=0))
    dimensions = fields.Nested(DimensionsSchema, allow_none=True)

    @validates_schema
    def validate_sale_price(self, data, **kwargs):
        price = data.get("price")
        sale_price = data.get("sale_price")
        if price is not None and sale_price is not None and sale_price >= price:
            raise ValidationError(
                "Sale price must be lower than the regular price", "sale_price"
            )


class ProductUpdateSchema(ProductCreateSchema):
    """Loaded with ``partial=True``; cross-field rules re-checked on the merged row"""


class ProductSchema(ProductCreateSchema):
    id = fields.Str(dump_only=True)
    slug = fields.Str()
    effective_price = fields.Float(dump_only=True)
    created_by = fields.Str(dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)
    category = fields.Nested(CategoryRefSchema, dump_only=True, allow_none=True)
    subcategory = fields.Nested(CategoryRefSchema, dump_only=True, allow_none=True)


class ProductListArgsSchema(QueryArgsSchema):
    page = LenientInt()
    limit = LenientInt()
    search = fields.Str()
    category = fields.Str()
    categories = fields.Str()
    subcategory = fields.Str()
    group_id = fields.Str(data_key="groupId")
    min_price = LenientInt(data_key="minPrice")
    max_price = LenientInt(data_key="maxPrice")
    in_stock = fields.Str(data_key="inStock")
    featured = fields.Str()
    sort = fields.Str()
    status = fields.Str()
    admin = fields.Str()


class ProductListResultSchema(Schema):
    products = fields.List(fields.Nested(ProductSchema))
    pagination = fields.Nested(PaginationSchema)


class PriceRangeSchema(Schema):
    min = fields.Int()
    max = fields.Int()
