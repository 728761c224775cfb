from external.database import db
from app.libs.models import BaseModel

DEFAULT_NAMESPACE = "default"


class Translation(BaseModel):
    """One message string, unique per ``(key, locale, namespace)``"""

    __tablename__ = "translations"
    __table_args__ = (
        db.UniqueConstraint("key", "locale", "namespace", name="uq_translation_key"),
    )

    key = db.Column(db.String(255), nullable=False)
    locale = db.Column(db.String(10), nullable=False, index=True)
    namespace = db.Column(db.String(100), nullable=False, default=DEFAULT_NAMESPACE)
    value = db.Column(db.Text, nullable=False, default="")
    created_by = db.Column(db.String(36), db.ForeignKey("users.id"))

    def __repr__(self):
        return f"<Translation {self.locale}:{self.namespace}:{self.key}>"
