"""
Umami - Custom Exceptions and Exception Handlers
"""
import structlog
from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from api_responses import ErrorCode, error_response

logger = structlog.get_logger('exceptions')


class UmamiException(Exception):
    """Base exception for Umami"""
    status_code = 400

    def __init__(self, message: str, code: str = "UMAMI_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self):
        return {
            'code': self.code,
            'success': False,
            'message': self.message
        }


class ValidationException(UmamiException):
    """Validation-related exceptions"""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message, code=ErrorCode.VALIDATION_ERROR)
        logger.warning(f"Validation error: {message}")


def register_exception_handlers(app):
    """Register exception handlers with Flask app"""

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Handle HTTP exceptions"""
        return error_response(
            e.name.upper().replace(' ', '_'),
            message=e.description,
            status_code=e.code,
            log_error=False,
        )

    @app.errorhandler(UmamiException)
    def handle_umami_exception(e):
        """Handle Umami custom exceptions"""
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_exception(e):
        """Query failures were already logged by run_query"""
        return error_response(ErrorCode.INTERNAL_ERROR, message="Database error", status_code=500, log_error=False)

    @app.errorhandler(Exception)
    def handle_generic_exception(e):
        """Handle all other exceptions"""
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        return error_response(ErrorCode.INTERNAL_ERROR, status_code=500, log_error=False)
