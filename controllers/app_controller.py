import logging
import os

from flask import Blueprint, abort, current_app, jsonify, send_from_directory
from pymongo.errors import PyMongoError

from utils import db

logger = logging.getLogger(__name__)

app_bp = Blueprint("app_shell", __name__)


# -----------------------------
# HEALTH CHECK
# -----------------------------
@app_bp.route("/api/health", methods=["GET"])
def health():
    try:
        db.ping()
    except PyMongoError as e:
        logger.warning("Health check failed: %s", e)
        return jsonify({"status": "unavailable", "message": str(e)}), 503
    return jsonify({"status": "ok"})


# -----------------------------
# FRONTEND SHELL
# -----------------------------
@app_bp.route("/", defaults={"path": ""}, methods=["GET"])
@app_bp.route("/<path:path>", methods=["GET"])
def shell(path):
    if path == "api" or path.startswith("api/"):
        abort(404, description="Not found")

    static_dir = current_app.static_folder
    if path and os.path.isfile(os.path.join(static_dir, path)):
        return send_from_directory(static_dir, path)
    return send_from_directory(static_dir, "index.html")
