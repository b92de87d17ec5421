"""
Repository for Account database operations
"""

from models.account import Account


class AccountRepository:
    """Repository for Account database operations"""

    @staticmethod
    def get_by_username(username=""):
        """Get Account by username"""
        return Account.query.filter_by(username=username).first()
