from external.database import db
from app.libs.models import BaseModel


class Slide(BaseModel):
    __tablename__ = "homepage_slider"

    title = db.Column(db.String(200), nullable=False)
    subtitle = db.Column(db.String(300))
    image_url = db.Column(db.String(500), nullable=False)
    button_text = db.Column(db.String(80))
    button_link = db.Column(db.String(500))
    order_index = db.Column(db.Integer, default=0, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Slide {self.title}>"
