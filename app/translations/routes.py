import logging

# package imports
from flask_smorest import Blueprint
from flask.views import MethodView
from flask_login import current_user

# project imports
from app.libs.decorators import admin_required, rate_limit
from app.libs.schemas import MessageSchema

# app imports
from .services import TranslationService
from .schemas import (
    TranslationSchema,
    TranslationValueSchema,
    TranslationQueryArgs,
    TranslationFilesResultSchema,
)

logger = logging.getLogger(__name__)

bp = Blueprint(
    "translations",
    __name__,
    description="Interface translations",
    url_prefix="/translations",
)


@bp.route("/")
class TranslationList(MethodView):
    @rate_limit("read")
    @bp.arguments(TranslationQueryArgs, location="query")
    @bp.response(200, TranslationSchema(many=True))
    def get(self, args):
        return TranslationService.list_translations(
            locale=args.get("locale"), namespace=args.get("namespace")
        )

    @rate_limit("write")
    @admin_required
    @bp.arguments(TranslationSchema)
    @bp.response(200, TranslationSchema)
    def post(self, data):
        """Create or overwrite a translation (admin only)"""
        return TranslationService.upsert_translation(data, user_id=current_user.id)


@bp.route("/<translation_id>")
class TranslationDetail(MethodView):
    @rate_limit("write")
    @admin_required
    @bp.arguments(TranslationValueSchema)
    @bp.response(200, TranslationSchema)
    def put(self, data, translation_id):
        return TranslationService.update_translation(translation_id, data["value"])

    @rate_limit("write")
    @admin_required
    @bp.response(200, MessageSchema)
    def delete(self, translation_id):
        TranslationService.delete_translation(translation_id)
        return {"success": True}


@bp.route("/messages/<locale>")
class TranslationMessages(MethodView):
    @rate_limit("read")
    @bp.response(200)
    def get(self, locale):
        """Nested message tree for one locale"""
        return TranslationService.get_messages(locale)


@bp.route("/export")
class TranslationExport(MethodView):
    @rate_limit("write")
    @admin_required
    @bp.response(200, TranslationFilesResultSchema)
    def post(self):
        exported = TranslationService.export_files()
        return {
            "success": True,
            "message": "Translations exported successfully",
            "exported": exported,
        }


@bp.route("/import")
class TranslationImport(MethodView):
    @rate_limit("write")
    @admin_required
    @bp.response(200, TranslationFilesResultSchema)
    def post(self):
        imported = TranslationService.import_files(user_id=current_user.id)
        return {
            "success": True,
            "message": f"Imported {imported} translations from JSON files",
            "imported": imported,
        }


@bp.route("/sync")
class TranslationSync(MethodView):
    @rate_limit("write")
    @admin_required
    @bp.response(200, TranslationFilesResultSchema)
    def post(self):
        """Import the message files, then export them back"""
        return TranslationService.sync(user_id=current_user.id)
