"""
Repository for Website database operations
"""

from models.website import Website
from utils import as_uuid


class WebsiteRepository:
    """Repository for Website database operations"""

    @staticmethod
    def get_by_uuid(website_uuid):
        """Get Website by its public UUID"""
        return Website.query.filter_by(website_uuid=as_uuid(website_uuid)).first()

    @staticmethod
    def get_all_by_user(user_id):
        """Get all Website records owned by an account"""
        return Website.query.filter_by(user_id=user_id).order_by(Website.website_id).all()
