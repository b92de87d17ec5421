"""
Repository for Session database operations
"""

from sqlalchemy.exc import SQLAlchemyError
from db import db
from models.session import Session
from utils import as_uuid


class SessionRepository:
    """Repository for Session database operations"""

    @staticmethod
    def get_by_uuid(session_uuid):
        """Get Session by its public UUID"""
        return Session.query.filter_by(session_uuid=as_uuid(session_uuid)).first()

    @staticmethod
    def create(website_id, **data):
        """Create new Session record and return its session_id"""
        if "session_uuid" in data:
            data["session_uuid"] = as_uuid(data["session_uuid"])
        try:
            item = Session(website_id=website_id, **data)
            db.session.add(item)
            db.session.commit()
            return item.session_id
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e
