"""
Save File Routes - single upload for a chosen game, and bulk upload
"""

from flask import Blueprint, request, jsonify
from api_responses import handle_api_errors
from exceptions import ValidationException
from services.bulk_import_service import BulkImportService
from services.savefile_import_service import SaveFileImportService
import structlog

logger = structlog.get_logger('main')

savefile_bp = Blueprint("savefile", __name__, url_prefix="/api")


@savefile_bp.route("/savefile/upload/<user_id>/<int:game_id>", methods=["POST"])
@handle_api_errors
def upload_savefile_api(user_id, game_id):
    """Parse an uploaded save file and fill the tracker of the selected game"""
    upload = request.files.get("savefile")
    if upload is None or not upload.filename:
        raise ValidationException("No file uploaded")

    result = SaveFileImportService().import_save_file(user_id, game_id, upload.filename, upload.read())
    return jsonify(result)


@savefile_bp.route("/savefile/bulk-upload/<user_id>", methods=["POST"])
@handle_api_errors
def bulk_upload_savefiles_api(user_id):
    """Import several save files, the game of each one is guessed from its content"""
    uploads = [f for f in request.files.getlist("savefiles") if f and f.filename]
    if not uploads:
        raise ValidationException("No files uploaded")

    logger.info("Bulk upload received", user_id=user_id, files=len(uploads))
    files = [(f.filename, f.read()) for f in uploads]
    return jsonify(BulkImportService().bulk_import(user_id, files))
