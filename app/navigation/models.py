from external.database import db
from app.libs.models import BaseModel


class NavigationCategory(BaseModel):
    """
    Top-level storefront category shown in the main navigation.

    Products reference a category through ``category_id``; subcategories hang
    off a category and are ordered by ``order_index`` just like categories.
    """

    __tablename__ = "navigation_categories"

    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False)
    url = db.Column(db.String(255))
    meta_title = db.Column(db.String(120))
    meta_description = db.Column(db.String(255))
    order_index = db.Column(db.Integer, default=0, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    subcategories = db.relationship(
        "NavigationSubcategory",
        back_populates="category",
        cascade="all, delete-orphan",
        order_by="NavigationSubcategory.order_index",
    )

    def __repr__(self):
        return f"<NavigationCategory {self.slug}>"


class NavigationSubcategory(BaseModel):
    __tablename__ = "navigation_subcategories"

    category_id = db.Column(
        db.String(36), db.ForeignKey("navigation_categories.id"), nullable=False
    )
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False)
    url = db.Column(db.String(255))
    icon = db.Column(db.String(50))
    meta_title = db.Column(db.String(120))
    meta_description = db.Column(db.String(255))
    order_index = db.Column(db.Integer, default=0, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    category = db.relationship("NavigationCategory", back_populates="subcategories")

    def __repr__(self):
        return f"<NavigationSubcategory {self.slug}>"
