from marshmallow import Schema, fields, EXCLUDE


class LenientInt(fields.Field):
    """Integer query field that yields None instead of rejecting bad input

    Pagination and price inputs are clamped downstream rather than refused.
    """

    def _deserialize(self, value, attr, data, **kwargs):
        try:
            return int(str(value).strip())
        except (TypeError, ValueError):
            return None

    def _serialize(self, value, attr, obj, **kwargs):
        return value


class QueryArgsSchema(Schema):
    class Meta:
        unknown = EXCLUDE


class PaginationQueryArgs(QueryArgsSchema):
    page = LenientInt(required=False)
    limit = LenientInt(required=False)


class PaginationSchema(Schema):
    page = fields.Int()
    limit = fields.Int()
    total = fields.Int()
    total_pages = fields.Int(data_key="totalPages")


class MessageSchema(Schema):
    success = fields.Bool()
