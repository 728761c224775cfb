from enum import Enum

from external.database import db
from app.libs.models import BaseModel

from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy import and_, case


class ProductStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"


class Product(BaseModel):
    __tablename__ = "products"

    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(220), unique=True, nullable=False, index=True)
    sku = db.Column(db.String(50))
    description = db.Column(db.Text)
    short_description = db.Column(db.String(500))
    price = db.Column(db.Numeric(10, 2, asdecimal=False), nullable=False)
    sale_price = db.Column(db.Numeric(10, 2, asdecimal=False))
    stock_quantity = db.Column(db.Integer, default=0, nullable=False)
    manage_stock = db.Column(db.Boolean, default=True, nullable=False)
    status = db.Column(
        db.Enum(
            ProductStatus,
            name="product_status",
            values_callable=lambda e: [m.value for m in e],
        ),
        default=ProductStatus.ACTIVE,
        nullable=False,
        index=True,
    )
    featured = db.Column(db.Boolean, default=False, nullable=False)

    category_id = db.Column(db.String(36), db.ForeignKey("navigation_categories.id"))
    subcategory_id = db.Column(
        db.String(36), db.ForeignKey("navigation_subcategories.id")
    )

    images = db.Column(db.JSON, default=list)  # ordered image URLs
    gallery = db.Column(db.JSON, default=list)
    meta_title = db.Column(db.String(60))
    meta_description = db.Column(db.String(160))
    weight = db.Column(db.Float)  # in kg
    dimensions = db.Column(db.JSON)  # {"length": .., "width": .., "height": ..}
    created_by = db.Column(db.String(36), db.ForeignKey("users.id"))

    # Relationships
    category = db.relationship("NavigationCategory", lazy="joined")
    subcategory = db.relationship("NavigationSubcategory", lazy="joined")

    @hybrid_property
    def effective_price(self):
        """Sale price when it undercuts the list price, else the list price"""
        if self.sale_price is not None and self.sale_price < self.price:
            return self.sale_price
        return self.price

    @effective_price.expression
    def effective_price(cls):
        return case(
            (and_(cls.sale_price.isnot(None), cls.sale_price < cls.price), cls.sale_price),
            else_=cls.price,
        )

    def __repr__(self):
        return f"<Product {self.slug}>"
