"""
System Routes - Health check
"""

from flask import Blueprint
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from api_responses import success_response, error_response, ErrorCode
from constants import BUILD_VERSION
from db import db, logger

system_bp = Blueprint("system", __name__, url_prefix="/api")


@system_bp.route("/health", methods=["GET"])
def health_check_api():
    """Report build version and whether the database answers"""
    try:
        db.session.execute(text("select 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        db.session.rollback()
        return error_response(
            ErrorCode.INTERNAL_ERROR,
            message="Database unavailable",
            details={"version": BUILD_VERSION},
            status_code=503,
            log_error=False,
        )

    return success_response({"status": "healthy", "version": BUILD_VERSION, "database": db.engine.dialect.name})
