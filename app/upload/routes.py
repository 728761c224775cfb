import logging

# package imports
from flask import request
from flask_smorest import Blueprint
from flask.views import MethodView

# project imports
from app.libs.decorators import admin_required, rate_limit

# app imports
from .services import UploadService
from .schemas import UploadResultSchema

logger = logging.getLogger(__name__)

bp = Blueprint("upload", __name__, description="Image uploads", url_prefix="/upload")


@bp.route("/")
class ImageUpload(MethodView):
    @rate_limit("write")
    @admin_required
    @bp.response(200, UploadResultSchema)
    @bp.alt_response(400, description="Missing or invalid file")
    @bp.alt_response(413, description="File too large")
    @bp.alt_response(415, description="Unsupported file type")
    @bp.alt_response(502, description="Storage failure")
    def post(self):
        """Upload an image (multipart ``file`` and ``folder``) to object storage"""
        url = UploadService.upload_image(
            request.files.get("file"), request.form.get("folder")
        )
        return {"url": url}
