# python imports
import logging

# package imports
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

# project imports
from external.database import db
from app.libs.session import session_scope
from app.libs.errors import ConflictError, NotFoundError, StoreError, ValidationError

# app imports
from .models import NavigationCategory, NavigationSubcategory

logger = logging.getLogger(__name__)


class NavigationService:
    # ==================== CATEGORIES ====================

    @staticmethod
    def list_categories(include_inactive=False):
        stmt = select(NavigationCategory).order_by(
            NavigationCategory.order_index, NavigationCategory.name
        )
        if not include_inactive:
            stmt = stmt.where(NavigationCategory.is_active.is_(True))
        try:
            return db.session.execute(stmt).scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Database error listing categories: {str(e)}")
            raise StoreError()

    @staticmethod
    def create_category(data):
        return NavigationService._create(NavigationCategory, data)

    @staticmethod
    def update_category(category_id, data):
        return NavigationService._update(NavigationCategory, category_id, data)

    @staticmethod
    def delete_category(category_id):
        """Delete a category together with its subcategories"""
        return NavigationService._delete(NavigationCategory, category_id)

    # ==================== SUBCATEGORIES ====================

    @staticmethod
    def list_subcategories(category_id=None, include_inactive=False):
        stmt = select(NavigationSubcategory).order_by(
            NavigationSubcategory.order_index, NavigationSubcategory.name
        )
        if category_id:
            stmt = stmt.where(NavigationSubcategory.category_id == category_id)
        if not include_inactive:
            stmt = stmt.where(NavigationSubcategory.is_active.is_(True))
        try:
            return db.session.execute(stmt).scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Database error listing subcategories: {str(e)}")
            raise StoreError()

    @staticmethod
    def create_subcategory(data):
        if not db.session.get(NavigationCategory, data["category_id"]):
            raise ValidationError("Category not found")
        return NavigationService._create(NavigationSubcategory, data)

    @staticmethod
    def update_subcategory(subcategory_id, data):
        if data.get("category_id") and not db.session.get(
            NavigationCategory, data["category_id"]
        ):
            raise ValidationError("Category not found")
        return NavigationService._update(NavigationSubcategory, subcategory_id, data)

    @staticmethod
    def delete_subcategory(subcategory_id):
        return NavigationService._delete(NavigationSubcategory, subcategory_id)

    # ==================== TREE ====================

    @staticmethod
    def get_tree():
        """Active categories, each with its active subcategories as ``subitems``"""
        return [
            {
                "id": category.id,
                "name": category.name,
                "slug": category.slug,
                "url": category.url,
                "order_index": category.order_index,
                "subitems": [sub for sub in category.subcategories if sub.is_active],
            }
            for category in NavigationService.list_categories()
        ]

    # ==================== PRIVATE HELPERS ====================

    @staticmethod
    def _ensure_slug_free(session, model, slug, exclude_id=None):
        stmt = select(model.id).where(model.slug == slug)
        if exclude_id:
            stmt = stmt.where(model.id != exclude_id)
        if session.execute(stmt).first():
            raise ConflictError("Slug already exists")

    @staticmethod
    def _create(model, data):
        try:
            with session_scope() as session:
                NavigationService._ensure_slug_free(session, model, data["slug"])
                item = model(**data)
                session.add(item)
                session.flush()
                logger.info(f"{model.__name__} {item.id} ({item.slug}) created")
                return item
        except IntegrityError as e:
            logger.warning(f"Integrity error creating {model.__name__}: {str(e)}")
            raise ConflictError("Slug already exists")
        except SQLAlchemyError as e:
            logger.error(f"Database error creating {model.__name__}: {str(e)}")
            raise StoreError()

    @staticmethod
    def _update(model, item_id, data):
        try:
            with session_scope() as session:
                item = session.get(model, item_id)
                if not item:
                    raise NotFoundError(f"{model.__name__} not found")
                if "slug" in data:
                    NavigationService._ensure_slug_free(
                        session, model, data["slug"], exclude_id=item_id
                    )
                item.update(**data)
                logger.info(f"{model.__name__} {item_id} updated")
                return item
        except IntegrityError as e:
            logger.warning(f"Integrity error updating {model.__name__}: {str(e)}")
            raise ConflictError("Slug already exists")
        except SQLAlchemyError as e:
            logger.error(f"Database error updating {model.__name__}: {str(e)}")
            raise StoreError()

    @staticmethod
    def _delete(model, item_id):
        try:
            with session_scope() as session:
                item = session.get(model, item_id)
                if not item:
                    raise NotFoundError(f"{model.__name__} not found")
                session.delete(item)
                session.flush()
                logger.info(f"{model.__name__} {item_id} deleted")
                return True
        except IntegrityError as e:
            logger.warning(f"{model.__name__} {item_id} still referenced: {str(e)}")
            raise ConflictError("Navigation entry is still in use")
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting {model.__name__}: {str(e)}")
            raise StoreError()
