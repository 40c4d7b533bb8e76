"""
Pokemon Tracker - Custom Exceptions and Exception Handlers
"""
import structlog
from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = structlog.get_logger('exceptions')


class TrackerException(Exception):
    """Base exception for the tracker"""
    status_code = 400

    def __init__(self, message: str, code: str = "TRACKER_ERROR", details=None):
        self.message = message
        self.code = code
        self.details = details
        super().__init__(message)

    def to_dict(self):
        data = {
            'error': True,
            'success': False,
            'code': self.code,
            'message': self.message
        }
        if self.details:
            data['details'] = self.details
        return data


class DatabaseException(TrackerException):
    """Database-related exceptions"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="DATABASE_ERROR")
        logger.error(f"Database error: {message}")


class ValidationException(TrackerException):
    """Validation-related exceptions"""
    status_code = 400

    def __init__(self, message: str, details=None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)
        logger.warning(f"Validation error: {message}")


class NotFoundException(TrackerException):
    """Missing resource"""
    status_code = 404

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, code="NOT_FOUND")


class GameMismatchException(TrackerException):
    """Detected save file game disagrees with the selected game (strict mode only)"""
    status_code = 409

    def __init__(self, detected_game: str, target_game: str):
        super().__init__(
            f"Save file looks like {detected_game}, not {target_game}",
            code="GAME_MISMATCH",
            details={'detected_game': detected_game, 'target_game': target_game},
        )
        logger.warning("Save file rejected", detected_game=detected_game, target_game=target_game)


def register_exception_handlers(app):
    """Register exception handlers with Flask app"""

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Handle HTTP exceptions"""
        return jsonify({
            'error': True,
            'code': e.name.upper().replace(' ', '_'),
            'message': e.description
        }), e.code

    @app.errorhandler(TrackerException)
    def handle_tracker_exception(e):
        """Handle tracker exceptions, status code comes from the exception class"""
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(Exception)
    def handle_generic_exception(e):
        """Handle all other exceptions"""
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        return jsonify({
            'error': True,
            'code': 'INTERNAL_ERROR',
            'message': 'An unexpected error occurred'
        }), 500
