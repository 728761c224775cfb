import logging

# package imports
from flask_smorest import Blueprint
from flask.views import MethodView

# project imports
from app.libs.decorators import admin_requested, admin_required, rate_limit
from app.libs.schemas import MessageSchema

# app imports
from .services import SliderService
from .schemas import SlideSchema, SlideQueryArgs, SlideUpdateSchema

logger = logging.getLogger(__name__)

bp = Blueprint("slider", __name__, description="Homepage slider", url_prefix="/slider")


@bp.route("/")
class SlideList(MethodView):
    @rate_limit("read")
    @bp.arguments(SlideQueryArgs, location="query")
    @bp.response(200, SlideSchema(many=True))
    def get(self, args):
        """Active slides in display order; every slide for ``admin=true``"""
        return SliderService.list_slides(include_inactive=admin_requested())

    @rate_limit("write")
    @admin_required
    @bp.arguments(SlideSchema)
    @bp.response(201, SlideSchema)
    def post(self, data):
        return SliderService.create_slide(data)


@bp.route("/<slide_id>")
class SlideDetail(MethodView):
    @rate_limit("write")
    @admin_required
    @bp.arguments(SlideUpdateSchema(partial=True))
    @bp.response(200, SlideSchema)
    def put(self, data, slide_id):
        return SliderService.update_slide(slide_id, data)

    @rate_limit("write")
    @admin_required
    @bp.response(200, MessageSchema)
    def delete(self, slide_id):
        SliderService.delete_slide(slide_id)
        return {"success": True}
