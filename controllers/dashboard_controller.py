from flask import Blueprint, current_app, jsonify

from models.attendance import Attendance
from models.users import User
from utils import clock

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.route("", methods=["GET"])
def dashboard():
    start, end = clock.day_window()

    # ------ Today's Attendance ------
    today_attendance = Attendance.find_latest({"timestamp": {"$gte": start, "$lt": end}})

    # ------ Total Users ------
    total_users = User.count()

    # ------ Recent Attendance ------
    recent_attendance = Attendance.find_latest(limit=current_app.config["RECENT_ATTENDANCE_LIMIT"])

    # ------ Summary Counts ------
    marked = len(today_attendance)
    today_stats = {
        "total": marked,
        "present": sum(1 for a in today_attendance if a.get("status") == "present"),
        "late": sum(1 for a in today_attendance if a.get("status") == "late"),
        # no roll call: everyone who has not marked yet counts as absent
        "absent": max(total_users - marked, 0),
    }

    return jsonify({
        "todayAttendance": today_attendance,
        "totalUsers": total_users,
        "recentAttendance": recent_attendance,
        "todayStats": today_stats,
    })
