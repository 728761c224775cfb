import logging

# package imports
from flask_smorest import Blueprint
from flask.views import MethodView
from flask_login import current_user

# project imports
from app.libs.decorators import admin_requested, admin_required, rate_limit
from app.libs.schemas import MessageSchema

# app imports
from .services import ProductService
from .constants import ADMIN_CACHE, PUBLIC_DETAIL_CACHE, PUBLIC_LIST_CACHE
from .schemas import (
    ProductSchema,
    ProductCreateSchema,
    ProductUpdateSchema,
    ProductListArgsSchema,
    ProductListResultSchema,
    PriceRangeSchema,
)

logger = logging.getLogger(__name__)

bp = Blueprint(
    "products", __name__, description="Product operations", url_prefix="/products"
)


@bp.route("/")
class ProductList(MethodView):
    @rate_limit("read")
    @bp.arguments(ProductListArgsSchema, location="query")
    @bp.response(200, ProductListResultSchema)
    @bp.alt_response(401, description="Admin listing without a session")
    @bp.alt_response(403, description="Admin listing by a non-admin")
    @bp.alt_response(429, description="Rate limit exceeded")
    def get(self, args):
        """List products with search, filters, sorting and pagination"""
        is_admin = admin_requested()
        result = ProductService.list_products(args, is_admin=is_admin)
        cache = ADMIN_CACHE if is_admin else PUBLIC_LIST_CACHE
        return result, 200, {"Cache-Control": cache}

    @rate_limit("write")
    @admin_required
    @bp.arguments(ProductCreateSchema)
    @bp.response(201, ProductSchema)
    def post(self, product_data):
        """Create new product (admin only)"""
        return ProductService.create_product(product_data, current_user)


@bp.route("/price-range")
class ProductPriceRange(MethodView):
    @rate_limit("read")
    @bp.response(200, PriceRangeSchema)
    def get(self):
        """Lowest and highest effective price among active products"""
        return ProductService.get_price_range(), 200, {"Cache-Control": PUBLIC_LIST_CACHE}


@bp.route("/id/<product_id>")
class ProductAdminDetail(MethodView):
    @admin_required
    @bp.response(200, ProductSchema)
    def get(self, product_id):
        """Get any product by id, whatever its status (admin only)"""
        return ProductService.get_product(product_id), 200, {"Cache-Control": ADMIN_CACHE}

    @rate_limit("write")
    @admin_required
    @bp.arguments(ProductUpdateSchema(partial=True))
    @bp.response(200, ProductSchema)
    def put(self, product_data, product_id):
        """Update product (admin only)"""
        return ProductService.update_product(product_id, product_data)

    @rate_limit("write")
    @admin_required
    @bp.response(200, MessageSchema)
    def delete(self, product_id):
        """Delete product (admin only)"""
        ProductService.delete_product(product_id)
        return {"success": True}


@bp.route("/<slug>")
class ProductDetail(MethodView):
    @rate_limit("read")
    @bp.response(200, ProductSchema)
    @bp.alt_response(404, description="No active product with this slug")
    def get(self, slug):
        """Get an active product by slug"""
        return ProductService.get_product_by_slug(slug), 200, {
            "Cache-Control": PUBLIC_DETAIL_CACHE
        }
