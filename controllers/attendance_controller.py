import logging

from flask import Blueprint, current_app, jsonify, request
from pymongo.errors import DuplicateKeyError, PyMongoError

from models.attendance import Attendance
from models.users import User
from utils import clock
from utils.errors import ConflictError, NotFoundError, ValidationError
from utils.payload import json_object

logger = logging.getLogger(__name__)

attendance_bp = Blueprint("attendance", __name__, url_prefix="/api/attendance")

UNKNOWN_NAME = "Unknown"


# ==========================================================
# MARK ATTENDANCE
# ==========================================================
@attendance_bp.route("", methods=["POST"])
def mark_attendance():
    data = json_object()
    employee_id = data.get("employeeId")
    if not employee_id:
        raise ValidationError("employeeId is required")

    # Check if user exists
    user = User.find_by_employee_id(employee_id)
    if not user:
        raise NotFoundError("User not found")

    now = clock.utcnow()

    # Check if already marked attendance today
    start, end = clock.day_window(now)
    existing = Attendance.find_in_window(employee_id, start, end)
    if existing:
        logger.info("Attendance already marked today for %s", employee_id)
        raise ConflictError("Attendance already marked for today", attendance=existing)

    name = data.get("name")
    if not name or name == UNKNOWN_NAME:
        name = user.get("name") or UNKNOWN_NAME

    attendance = Attendance(
        employee_id=employee_id,
        name=name,
        method=data.get("method"),
        status=data.get("status") or _status_for(now),
        location=data.get("location"),
        ip_address=data.get("ipAddress") or request.remote_addr,
        timestamp=now,
    )

    try:
        record = attendance.save()
    except DuplicateKeyError:
        # concurrent mark won the (employeeId, day) index
        existing = Attendance.find_in_window(employee_id, start, end)
        raise ConflictError("Attendance already marked for today", attendance=existing)

    # Update user's last login; the mark stands even if this fails
    try:
        User.update_last_login(employee_id, now)
    except PyMongoError as e:
        logger.warning("lastLogin update failed for %s: %s", employee_id, e)

    logger.info("Attendance marked for %s via %s (%s)", employee_id, attendance.method, attendance.status)
    return jsonify({
        "message": "Attendance marked successfully",
        "attendance": record
    }), 201


def _status_for(now):
    late_after = clock.parse_clock(current_app.config["LATE_AFTER"])
    return "late" if clock.local_time_of_day(now) >= late_after else "present"


# ==========================================================
# LIST ATTENDANCE
# ==========================================================
@attendance_bp.route("", methods=["GET"])
def list_attendance():
    employee_id = request.args.get("employeeId")
    start_date = request.args.get("startDate")
    end_date = request.args.get("endDate")
    limit = _parse_limit(request.args.get("limit"))

    query = {}
    if employee_id:
        query["employeeId"] = employee_id

    window = {}
    if start_date:
        window["$gte"] = _parse_date(start_date, "startDate")
    if end_date:
        bound = _parse_date(end_date, "endDate")
        if clock.is_date_only(end_date.strip()):
            # whole end day is included
            _, window["$lt"] = clock.day_window(bound)
        else:
            window["$lte"] = bound
    if window:
        query["timestamp"] = window

    return jsonify(Attendance.find_latest(query, limit))


def _parse_limit(raw):
    if raw is None or raw == "":
        return current_app.config["DEFAULT_ATTENDANCE_LIMIT"]
    try:
        limit = int(raw)
    except ValueError:
        raise ValidationError(f"Invalid limit: {raw}")
    if limit < 1:
        raise ValidationError(f"Invalid limit: {raw}")
    return limit


def _parse_date(raw, field):
    try:
        return clock.parse_datetime(raw)
    except ValueError:
        raise ValidationError(f"Invalid {field}: {raw}")


# ==========================================================
# ATTENDANCE STATS
# ==========================================================
@attendance_bp.route("/stats", methods=["GET"])
def attendance_stats():
    employee_id = request.args.get("employeeId")
    period = request.args.get("period", clock.DEFAULT_PERIOD)
    if period not in clock.PERIODS:
        period = clock.DEFAULT_PERIOD

    since = clock.period_start(period)
    query = {"timestamp": {"$gte": since}}
    if employee_id:
        query["employeeId"] = employee_id

    result = Attendance.summarize(query)
    result["period"] = period
    result["since"] = since
    return jsonify(result)
