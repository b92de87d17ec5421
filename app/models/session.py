"""
Model: Session

One visitor session on a website. The client-side fingerprint fields are
all optional.
"""

import uuid

from db import db, now_utc


class Session(db.Model):
    __tablename__ = "session"

    session_id = db.Column(db.Integer, primary_key=True)
    session_uuid = db.Column(db.Uuid, unique=True, nullable=False, default=uuid.uuid4)
    website_id = db.Column(db.Integer, db.ForeignKey("website.website_id", ondelete="CASCADE"), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc)
    hostname = db.Column(db.String(100))
    browser = db.Column(db.String(20))
    os = db.Column(db.String(20))
    device = db.Column(db.String(20))
    screen = db.Column(db.String(11))
    language = db.Column(db.String(35))
    country = db.Column(db.String(2))

    website = db.relationship("Website", backref=db.backref("sessions", lazy=True, cascade="all, delete-orphan"))

    __table_args__ = (
        db.Index("session_created_at_idx", "created_at"),
        db.Index("session_website_id_idx", "website_id"),
    )
