# python imports
import logging

# package imports
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

# project imports
from external.database import db
from app.libs.session import session_scope
from app.libs.errors import NotFoundError, StoreError

# app imports
from .models import Slide

logger = logging.getLogger(__name__)


class SliderService:
    @staticmethod
    def list_slides(include_inactive=False):
        stmt = select(Slide).order_by(Slide.order_index, Slide.created_at)
        if not include_inactive:
            stmt = stmt.where(Slide.is_active.is_(True))
        try:
            return db.session.execute(stmt).scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Database error listing slides: {str(e)}")
            raise StoreError()

    @staticmethod
    def create_slide(data):
        try:
            with session_scope() as session:
                slide = Slide(**data)
                session.add(slide)
                session.flush()
                logger.info(f"Slide {slide.id} created")
                return slide
        except SQLAlchemyError as e:
            logger.error(f"Database error creating slide: {str(e)}")
            raise StoreError()

    @staticmethod
    def update_slide(slide_id, data):
        try:
            with session_scope() as session:
                slide = session.get(Slide, slide_id)
                if not slide:
                    raise NotFoundError("Slide not found")
                slide.update(**data)
                return slide
        except SQLAlchemyError as e:
            logger.error(f"Database error updating slide {slide_id}: {str(e)}")
            raise StoreError()

    @staticmethod
    def delete_slide(slide_id):
        try:
            with session_scope() as session:
                slide = session.get(Slide, slide_id)
                if not slide:
                    raise NotFoundError("Slide not found")
                session.delete(slide)
                logger.info(f"Slide {slide_id} deleted")
                return True
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting slide {slide_id}: {str(e)}")
            raise StoreError()
