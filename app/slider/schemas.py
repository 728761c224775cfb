from marshmallow import Schema, fields, validate, EXCLUDE

from app.libs.schemas import QueryArgsSchema


class SlideSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(dump_only=True)
    title = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    subtitle = fields.Str(allow_none=True, validate=validate.Length(max=300))
    image_url = fields.Str(required=True, validate=validate.Length(min=1, max=500))
    button_text = fields.Str(allow_none=True, validate=validate.Length(max=80))
    button_link = fields.Str(allow_none=True, validate=validate.Length(max=500))
    order_index = fields.Int(load_default=0)
    is_active = fields.Bool(load_default=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


class SlideUpdateSchema(SlideSchema):
    """Loaded with ``partial=True``"""


class SlideQueryArgs(QueryArgsSchema):
    admin = fields.Str()
