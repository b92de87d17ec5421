"""
Model: Pageview
"""

from db import db, now_utc


class Pageview(db.Model):
    __tablename__ = "pageview"

    view_id = db.Column(db.Integer, primary_key=True)
    website_id = db.Column(db.Integer, db.ForeignKey("website.website_id", ondelete="CASCADE"), nullable=False)
    session_id = db.Column(db.Integer, db.ForeignKey("session.session_id", ondelete="CASCADE"), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc)
    url = db.Column(db.String(500), nullable=False)
    referrer = db.Column(db.String(500))

    __table_args__ = (
        # Composite index for the range scans behind stats queries
        db.Index("pageview_website_id_created_at_idx", "website_id", "created_at"),
        db.Index("pageview_session_id_idx", "session_id"),
    )
