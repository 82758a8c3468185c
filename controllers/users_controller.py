import logging

from flask import Blueprint, jsonify
from pymongo.errors import DuplicateKeyError

from models.users import User
from utils.errors import ConflictError, NotFoundError
from utils.payload import json_object

logger = logging.getLogger(__name__)

users_bp = Blueprint("users", __name__, url_prefix="/api/users")


# -----------------------------
# LIST USERS (without face data)
# -----------------------------
@users_bp.route("", methods=["GET"])
def list_users():
    return jsonify(User.list_without_face_data())


# -----------------------------
# REGISTER USER
# -----------------------------
@users_bp.route("", methods=["POST"])
def register_user():
    data = json_object()

    user = User(
        name=data.get("name"),
        employee_id=data.get("employeeId"),
        email=data.get("email"),
        face_data=data.get("faceData"),
    )

    # Prevent duplicate users
    if User.find_existing(user.employee_id, user.email):
        raise ConflictError("User with this employee ID or email already exists")

    try:
        user.save()
    except DuplicateKeyError:
        # lost a race with a concurrent registration
        raise ConflictError("User with this employee ID or email already exists")

    logger.info("Registered user %s (%s)", user.employee_id, user.email)
    return jsonify({
        "message": "User registered successfully",
        "user": user.public_dict()
    }), 201


# -----------------------------
# GET USER BY EMPLOYEE ID
# -----------------------------
@users_bp.route("/<employee_id>", methods=["GET"])
def get_user(employee_id):
    user = User.find_by_employee_id(employee_id)
    if not user:
        raise NotFoundError("User not found")
    return jsonify(user)
