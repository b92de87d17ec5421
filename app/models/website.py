"""
Model: Website
"""

import uuid

from db import db, now_utc


class Website(db.Model):
    __tablename__ = "website"

    website_id = db.Column(db.Integer, primary_key=True)
    website_uuid = db.Column(db.Uuid, unique=True, nullable=False, default=uuid.uuid4)
    user_id = db.Column(db.Integer, db.ForeignKey("account.user_id", ondelete="CASCADE"), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    domain = db.Column(db.String(500))
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc)

    account = db.relationship("Account", backref=db.backref("websites", lazy=True, cascade="all, delete-orphan"))

    __table_args__ = (db.Index("website_user_id_idx", "user_id"),)
