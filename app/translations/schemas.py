from marshmallow import Schema, fields, validate, EXCLUDE

from app.libs.schemas import QueryArgsSchema
from .models import DEFAULT_NAMESPACE


class TranslationSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(dump_only=True)
    key = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    locale = fields.Str(required=True, validate=validate.Length(min=2, max=10))
    namespace = fields.Str(
        load_default=DEFAULT_NAMESPACE, validate=validate.Length(min=1, max=100)
    )
    value = fields.Str(required=True)
    created_by = fields.Str(dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


class TranslationValueSchema(Schema):
    value = fields.Str(required=True)


class TranslationQueryArgs(QueryArgsSchema):
    locale = fields.Str()
    namespace = fields.Str()


class TranslationFilesResultSchema(Schema):
    success = fields.Bool()
    message = fields.Str()
    imported = fields.Int()
    exported = fields.List(fields.Str())
