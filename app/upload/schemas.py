from marshmallow import Schema, fields


class UploadResultSchema(Schema):
    url = fields.Str()
