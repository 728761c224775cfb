from marshmallow import Schema, fields, validate, EXCLUDE

from app.libs.schemas import QueryArgsSchema

SLUG_VALIDATOR = validate.Regexp(
    r"^[a-z0-9]+(?:-[a-z0-9]+)*$", error="Slug may contain lowercase letters, digits and hyphens"
)


class CategoryRefSchema(Schema):
    id = fields.Str()
    name = fields.Str()
    slug = fields.Str()


class SubcategorySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(dump_only=True)
    category_id = fields.Str(required=True)
    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    slug = fields.Str(required=True, validate=SLUG_VALIDATOR)
    url = fields.Str(allow_none=True)
    icon = fields.Str(allow_none=True, validate=validate.Length(max=50))
    meta_title = fields.Str(allow_none=True, validate=validate.Length(max=120))
    meta_description = fields.Str(allow_none=True, validate=validate.Length(max=255))
    order_index = fields.Int(load_default=0)
    is_active = fields.Bool(load_default=True)


class SubcategoryUpdateSchema(SubcategorySchema):
    """Loaded with ``partial=True``"""


class CategorySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(dump_only=True)
    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    slug = fields.Str(required=True, validate=SLUG_VALIDATOR)
    url = fields.Str(allow_none=True)
    meta_title = fields.Str(allow_none=True, validate=validate.Length(max=120))
    meta_description = fields.Str(allow_none=True, validate=validate.Length(max=255))
    order_index = fields.Int(load_default=0)
    is_active = fields.Bool(load_default=True)


class CategoryUpdateSchema(CategorySchema):
    """Loaded with ``partial=True``"""


class CategoryTreeSchema(Schema):
    id = fields.Str()
    name = fields.Str()
    slug = fields.Str()
    url = fields.Str()
    order_index = fields.Int()
    subitems = fields.List(fields.Nested(SubcategorySchema))


class NavigationQueryArgs(QueryArgsSchema):
    admin = fields.Str()


class SubcategoryQueryArgs(NavigationQueryArgs):
    category_id = fields.Str()
