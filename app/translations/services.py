# python imports
import json
import logging
from datetime import datetime
from pathlib import Path

# package imports
from flask import current_app
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

# project imports
from external.database import db
from app.libs.session import session_scope
from app.libs.errors import NotFoundError, StoreError

# app imports
from .models import Translation
from .messages import flatten_messages, nest_messages

logger = logging.getLogger(__name__)


def _messages_dir():
    return Path(current_app.config["MESSAGES_DIR"])


def _locales():
    return list(current_app.config["SUPPORTED_LOCALES"])


class TranslationService:
    @staticmethod
    def list_translations(locale=None, namespace=None):
        stmt = select(Translation).order_by(Translation.namespace, Translation.key)
        if locale:
            stmt = stmt.where(Translation.locale == locale)
        if namespace:
            stmt = stmt.where(Translation.namespace == namespace)
        try:
            return db.session.execute(stmt).scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Database error listing translations: {str(e)}")
            raise StoreError()

    @staticmethod
    def upsert_translation(data, user_id=None):
        """Insert or overwrite the value stored for ``(key, locale, namespace)``"""
        try:
            with session_scope() as session:
                translation = session.execute(
                    select(Translation).where(
                        Translation.key == data["key"],
                        Translation.locale == data["locale"],
                        Translation.namespace == data["namespace"],
                    )
                ).scalar_one_or_none()

                if translation:
                    translation.value = data["value"]
                    translation.updated_at = datetime.utcnow()
                else:
                    translation = Translation(
                        key=data["key"],
                        locale=data["locale"],
                        namespace=data["namespace"],
                        value=data["value"],
                        created_by=user_id,
                    )
                    session.add(translation)
                session.flush()
                return translation
        except SQLAlchemyError as e:
            logger.error(f"Database error saving translation {data['key']}: {str(e)}")
            raise StoreError()

    @staticmethod
    def update_translation(translation_id, value):
        try:
            with session_scope() as session:
                translation = session.get(Translation, translation_id)
                if not translation:
                    raise NotFoundError("Translation not found")
                translation.value = value
                translation.updated_at = datetime.utcnow()
                return translation
        except SQLAlchemyError as e:
            logger.error(f"Database error updating translation {translation_id}: {str(e)}")
            raise StoreError()

    @staticmethod
    def delete_translation(translation_id):
        try:
            with session_scope() as session:
                translation = session.get(Translation, translation_id)
                if not translation:
                    raise NotFoundError("Translation not found")
                session.delete(translation)
                return True
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting translation {translation_id}: {str(e)}")
            raise StoreError()

    @staticmethod
    def get_messages(locale):
        rows = TranslationService.list_translations(locale=locale)
        return nest_messages((t.namespace, t.key, t.value) for t in rows)

    # ==================== MESSAGE FILES ====================

    @staticmethod
    def export_files(messages_dir=None, locales=None):
        """Write ``<locale>.json`` for every supported locale, returning the paths"""
        messages_dir = Path(messages_dir or _messages_dir())
        messages_dir.mkdir(parents=True, exist_ok=True)

        written = []
        for locale in locales or _locales():
            path = messages_dir / f"{locale}.json"
            with open(path, "w", encoding="utf-8") as f:
                json.dump(
                    TranslationService.get_messages(locale), f, ensure_ascii=False, indent=2
                )
            written.append(str(path))
            logger.info(f"Exported {locale} translations to {path}")
        return written

    @staticmethod
    def import_files(messages_dir=None, locales=None, user_id=None):
        """Replace the translations table with the contents of the message files

        Unreadable locale files are logged and skipped. Returns the number of
        rows imported.
        """
        messages_dir = Path(messages_dir or _messages_dir())
        rows = {}
        for locale in locales or _locales():
            path = messages_dir / f"{locale}.json"
            try:
                with open(path, encoding="utf-8") as f:
                    messages = json.load(f)
            except (OSError, ValueError) as e:
                logger.error(f"Error reading {path}: {str(e)}")
                continue

            if not isinstance(messages, dict):
                logger.error(f"Ignoring {path}: top level is not an object")
                continue

            for namespace, key, value in flatten_messages(messages):
                rows[(locale, namespace, key)] = value

        try:
            with session_scope() as session:
                session.execute(delete(Translation))
                session.add_all(
                    Translation(
                        locale=locale,
                        namespace=namespace,
                        key=key,
                        value=value,
                        created_by=user_id,
                    )
                    for (locale, namespace, key), value in rows.items()
                )
        except SQLAlchemyError as e:
            logger.error(f"Database error importing translations: {str(e)}")
            raise StoreError("Failed to import translations")

        logger.info(f"Imported {len(rows)} translations from {messages_dir}")
        return len(rows)

    @staticmethod
    def sync(user_id=None):
        imported = TranslationService.import_files(user_id=user_id)
        exported = TranslationService.export_files()
        return {
            "success": True,
            "message": f"Imported {imported} translations, exported {len(exported)} files",
            "imported": imported,
            "exported": exported,
        }
