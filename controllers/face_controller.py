import logging

from flask import Blueprint, jsonify

from models.users import User
from utils.errors import ValidationError
from utils.face_match import MAX_CANDIDATES, mock_confidence, pick_candidate
from utils.payload import json_object

logger = logging.getLogger(__name__)

face_bp = Blueprint("face", __name__, url_prefix="/api/face")


# -------------------------------------------------------------
# MOCK FACE RECOGNITION
# -------------------------------------------------------------
@face_bp.route("/recognize", methods=["POST"])
def recognize():
    data = json_object()
    face_data = data.get("faceData")
    if not isinstance(face_data, str):
        raise ValidationError("faceData is required")

    matched = pick_candidate(face_data, User.first(MAX_CANDIDATES))
    if matched is None:
        return jsonify({"success": False, "message": "No face recognized"})

    logger.debug("Mock recognition matched %s", matched.get("employeeId"))
    return jsonify({
        "success": True,
        "user": {
            "name": matched.get("name"),
            "employeeId": matched.get("employeeId")
        },
        "confidence": mock_confidence()
    })
