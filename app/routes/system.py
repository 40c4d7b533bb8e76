"""
System Routes - health, user statistics and settings
"""

from flask import Blueprint, request, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import socket

from db import db, logger
from api_responses import success_response, error_response, handle_api_errors, ErrorCode
from constants import BUILD_VERSION
from repositories.games_repository import GamesRepository
from repositories.user_progress_repository import UserProgressRepository
from settings import load_settings, reload_conf, set_savefile_settings
from utils import now_utc

system_bp = Blueprint("system", __name__, url_prefix="/api")


@system_bp.route("/health", methods=["GET"])
def health_check_api():
    """
    Health check endpoint for monitoring.
    """
    checks = {
        "status": "ok",
        "timestamp": now_utc().isoformat(),
        "version": BUILD_VERSION,
        "hostname": socket.gethostname(),
        "database": "unknown",
    }

    try:
        db.session.execute(text("SELECT 1"))
        checks["database"] = "ok"
        checks["games"] = GamesRepository.count()
    except SQLAlchemyError as e:
        logger.error(f"Health check database error: {e}")
        checks["database"] = f"error: {str(e)}"
        checks["status"] = "unhealthy"
        return jsonify(checks), 503

    return jsonify(checks)


@system_bp.route("/stats/<user_id>", methods=["GET"])
@handle_api_errors
def user_stats_api(user_id):
    """Game counts per status and hours spent on completed games"""
    return jsonify(UserProgressRepository.stats(user_id))


@system_bp.route("/settings", methods=["GET"])
@handle_api_errors
def get_settings_api():
    reload_conf()
    return success_response(data=load_settings())


@system_bp.route("/settings/savefile", methods=["POST"])
@handle_api_errors
def set_savefile_settings_api():
    data = request.get_json(silent=True) or {}
    success, errors = set_savefile_settings(data)
    if not success:
        return error_response(
            ErrorCode.VALIDATION_ERROR, message="Invalid save file settings", details=errors, status_code=400
        )
    logger.info(f"Save file settings updated: {sorted(data.keys())}")
    return success_response(data=load_settings()["savefile"], message="Settings saved")
