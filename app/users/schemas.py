from marshmallow import Schema, fields, validate, EXCLUDE

from .models import PersonType, UserRole


class UserSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(dump_only=True)
    email = fields.Email(required=True)
    full_name = fields.Str(allow_none=True, validate=validate.Length(max=120))
    phone = fields.Str(allow_none=True, validate=validate.Length(max=30))
    role = fields.Enum(UserRole, by_value=True, dump_only=True)
    person_type = fields.Enum(PersonType, by_value=True, dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)
    last_login_at = fields.DateTime(dump_only=True)


class UserRegisterSchema(UserSchema):
    password = fields.Str(
        required=True, load_only=True, validate=validate.Length(min=8, max=128)
    )


class UserLoginSchema(Schema):
    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True)


class UserUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    full_name = fields.Str(allow_none=True, validate=validate.Length(max=120))
    phone = fields.Str(allow_none=True, validate=validate.Length(max=30))


class ProfileCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    # validated in the service so a bad value is a 400 like the original flow
    person_type = fields.Str(data_key="personType", load_default=None)
