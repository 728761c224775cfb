import uuid
from datetime import datetime

from external.database import db


def generate_uuid():
    return str(uuid.uuid4())


class TimestampMixin:
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


class BaseModel(db.Model, TimestampMixin):
    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)

    def update(self, **kwargs):
        for key, value in kwargs.items():
            setattr(self, key, value)
