"""
Models package

One SQLAlchemy model per analytics table:
- account.py
- website.py
- session.py
- pageview.py
- event.py
"""

from .account import Account
from .website import Website
from .session import Session
from .pageview import Pageview
from .event import Event

__all__ = [
    "Account",
    "Website",
    "Session",
    "Pageview",
    "Event",
]
