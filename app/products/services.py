# python imports
import logging
import math
from datetime import datetime

# package imports
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

# project imports
from external.database import db
from app.libs.session import session_scope
from app.libs.pagination import Paginator
from app.libs.helper import slugify, generate_sku
from app.libs.errors import (
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from app.navigation.models import NavigationCategory, NavigationSubcategory

# app imports
from .models import Product, ProductStatus
from .query import ProductListQuery
from .constants import OPTIONAL_PRODUCT_FIELDS


logger = logging.getLogger(__name__)


class ProductService:
    @staticmethod
    def list_products(args, is_admin=False):
        """Page of products matching the listing filters plus pagination"""
        query = ProductListQuery.from_args(args, is_admin=is_admin)
        paginator = Paginator(query.build_select(), page=query.page, limit=query.limit)
        try:
            result = paginator.paginate()
        except SQLAlchemyError as e:
            logger.error(f"Database error listing products: {str(e)}")
            raise StoreError()

        return {
            "products": result["items"],
            "pagination": {
                "page": result["page"],
                "limit": result["limit"],
                "total": result["total"],
                "total_pages": result["total_pages"],
            },
        }

    @staticmethod
    def get_price_range():
        """Observed effective-price bounds of the active catalog"""
        stmt = select(
            func.min(Product.effective_price), func.max(Product.effective_price)
        ).where(Product.status == ProductStatus.ACTIVE)
        try:
            low, high = db.session.execute(stmt).one()
        except SQLAlchemyError as e:
            logger.error(f"Database error reading price range: {str(e)}")
            raise StoreError()

        if low is None or high is None:
            return {"min": 0, "max": 0}
        return {"min": math.floor(low), "max": math.ceil(high)}

    @staticmethod
    def get_product_by_slug(slug):
        try:
            product = db.session.execute(
                select(Product).where(
                    Product.slug == slug, Product.status == ProductStatus.ACTIVE
                )
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Database error fetching product {slug}: {str(e)}")
            raise StoreError()

        if not product:
            raise NotFoundError("Product not found")
        return product

    @staticmethod
    def get_product(product_id):
        try:
            product = db.session.get(Product, product_id)
        except SQLAlchemyError as e:
            logger.error(f"Database error fetching product {product_id}: {str(e)}")
            raise StoreError()

        if not product:
            raise NotFoundError("Product not found")
        return product

    @staticmethod
    def create_product(product_data, current_user):
        slug = product_data.get("slug") or slugify(product_data["name"])
        if not slug:
            raise ValidationError("Slug could not be derived from the name")

        try:
            with session_scope() as session:
                ProductService._ensure_slug_free(session, slug)
                ProductService._check_taxonomy(session, product_data)

                product = Product(
                    name=product_data["name"],
                    slug=slug,
                    price=product_data["price"],
                    created_by=current_user.id,
                    **{
                        k: v
                        for k, v in product_data.items()
                        if k in OPTIONAL_PRODUCT_FIELDS
                    },
                )
                if not product.sku:
                    product.sku = generate_sku(product.name)
                session.add(product)
                session.flush()  # Get product ID

                logger.info(f"Product {product.id} ({slug}) created by {current_user.id}")
                return product
        except IntegrityError as e:
            logger.warning(f"Integrity error creating product {slug}: {str(e)}")
            raise ConflictError("A product with this slug already exists")
        except SQLAlchemyError as e:
            logger.error(f"Database error creating product: {str(e)}")
            raise StoreError()

    @staticmethod
    def update_product(product_id, update_data):
        """Partial update; price rules are checked against the merged row"""
        try:
            with session_scope() as session:
                product = session.get(Product, product_id)
                if not product:
                    raise NotFoundError("Product not found")

                if "slug" in update_data and update_data["slug"] != product.slug:
                    ProductService._ensure_slug_free(session, update_data["slug"])
                    product.slug = update_data["slug"]

                if "name" in update_data:
                    product.name = update_data["name"]
                if "price" in update_data:
                    product.price = update_data["price"]

                for field in OPTIONAL_PRODUCT_FIELDS:
                    if field in update_data:
                        setattr(product, field, update_data[field])

                if product.sale_price is not None and product.sale_price >= product.price:
                    raise ValidationError(
                        "Sale price must be lower than the regular price",
                        errors={"sale_price": ["Must be lower than price"]},
                    )

                ProductService._check_taxonomy(session, update_data)
                product.updated_at = datetime.utcnow()

                logger.info(f"Product {product_id} updated")
                return product

        except IntegrityError as e:
            logger.warning(f"Integrity error updating product {product_id}: {str(e)}")
            raise ConflictError("A product with this slug already exists")
        except SQLAlchemyError as e:
            logger.error(f"Database error updating product {product_id}: {str(e)}")
            raise StoreError()

    @staticmethod
    def delete_product(product_id):
        try:
            with session_scope() as session:
                product = session.get(Product, product_id)
                if not product:
                    raise NotFoundError("Product not found")

                session.delete(product)
                logger.info(f"Product {product_id} deleted")
                return True

        except SQLAlchemyError as e:
            logger.error(f"Database error deleting product {product_id}: {str(e)}")
            raise StoreError()

    # ==================== PRIVATE HELPERS ====================

    @staticmethod
    def _ensure_slug_free(session, slug):
        existing = session.execute(
            select(Product.id).where(Product.slug == slug)
        ).first()
        if existing:
            raise ConflictError("A product with this slug already exists")

    @staticmethod
    def _check_taxonomy(session, data):
        if data.get("category_id") and not session.get(
            NavigationCategory, data["category_id"]
        ):
            raise ValidationError("Category not found")
        if data.get("subcategory_id") and not session.get(
            NavigationSubcategory, data["subcategory_id"]
        ):
            raise ValidationError("Subcategory not found")
