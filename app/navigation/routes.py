import logging

# package imports
from flask_smorest import Blueprint
from flask.views import MethodView

# project imports
from app.libs.decorators import admin_requested, admin_required, rate_limit
from app.libs.schemas import MessageSchema

# app imports
from .services import NavigationService
from .schemas import (
    CategorySchema,
    CategoryUpdateSchema,
    CategoryTreeSchema,
    SubcategorySchema,
    SubcategoryUpdateSchema,
    NavigationQueryArgs,
    SubcategoryQueryArgs,
)

logger = logging.getLogger(__name__)

bp = Blueprint(
    "navigation",
    __name__,
    description="Storefront navigation taxonomy",
    url_prefix="/navigation",
)


@bp.route("/categories")
class CategoryList(MethodView):
    @rate_limit("read")
    @bp.arguments(NavigationQueryArgs, location="query")
    @bp.response(200, CategorySchema(many=True))
    def get(self, args):
        """List categories, inactive ones included for ``admin=true``"""
        return NavigationService.list_categories(include_inactive=admin_requested())

    @rate_limit("write")
    @admin_required
    @bp.arguments(CategorySchema)
    @bp.response(201, CategorySchema)
    @bp.alt_response(409, description="Slug already exists")
    def post(self, data):
        return NavigationService.create_category(data)


@bp.route("/categories/<category_id>")
class CategoryDetail(MethodView):
    @rate_limit("write")
    @admin_required
    @bp.arguments(CategoryUpdateSchema(partial=True))
    @bp.response(200, CategorySchema)
    def put(self, data, category_id):
        return NavigationService.update_category(category_id, data)

    @rate_limit("write")
    @admin_required
    @bp.response(200, MessageSchema)
    def delete(self, category_id):
        NavigationService.delete_category(category_id)
        return {"success": True}


@bp.route("/subcategories")
class SubcategoryList(MethodView):
    @rate_limit("read")
    @bp.arguments(SubcategoryQueryArgs, location="query")
    @bp.response(200, SubcategorySchema(many=True))
    def get(self, args):
        return NavigationService.list_subcategories(
            category_id=args.get("category_id"), include_inactive=admin_requested()
        )

    @rate_limit("write")
    @admin_required
    @bp.arguments(SubcategorySchema)
    @bp.response(201, SubcategorySchema)
    def post(self, data):
        return NavigationService.create_subcategory(data)


@bp.route("/subcategories/<subcategory_id>")
class SubcategoryDetail(MethodView):
    @rate_limit("write")
    @admin_required
    @bp.arguments(SubcategoryUpdateSchema(partial=True))
    @bp.response(200, SubcategorySchema)
    def put(self, data, subcategory_id):
        return NavigationService.update_subcategory(subcategory_id, data)

    @rate_limit("write")
    @admin_required
    @bp.response(200, MessageSchema)
    def delete(self, subcategory_id):
        NavigationService.delete_subcategory(subcategory_id)
        return {"success": True}


@bp.route("/tree")
class NavigationTree(MethodView):
    @rate_limit("read")
    @bp.response(200, CategoryTreeSchema(many=True))
    def get(self):
        """Active categories with their active subcategories"""
        return NavigationService.get_tree()
