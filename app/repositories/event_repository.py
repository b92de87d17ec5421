"""
Repository for Event database operations
"""

from sqlalchemy.exc import SQLAlchemyError
from db import db
from models.event import Event


class EventRepository:
    """Repository for Event database operations"""

    @staticmethod
    def create(website_id, session_id, url, event_type, event_value):
        """Create new Event record"""
        try:
            item = Event(
                website_id=website_id,
                session_id=session_id,
                url=url,
                event_type=event_type,
                event_value=event_value,
            )
            db.session.add(item)
            db.session.commit()
            db.session.refresh(item)
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e
