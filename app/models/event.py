"""
Model: Event
"""

from db import db, now_utc


class Event(db.Model):
    __tablename__ = "event"

    event_id = db.Column(db.Integer, primary_key=True)
    website_id = db.Column(db.Integer, db.ForeignKey("website.website_id", ondelete="CASCADE"), nullable=False)
    session_id = db.Column(db.Integer, db.ForeignKey("session.session_id", ondelete="CASCADE"), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc)
    url = db.Column(db.String(500), nullable=False)
    event_type = db.Column(db.String(50), nullable=False)
    event_value = db.Column(db.String(50), nullable=False)

    __table_args__ = (
        db.Index("event_website_id_created_at_idx", "website_id", "created_at"),
        db.Index("event_session_id_idx", "session_id"),
    )
