import math

import pymongo

from utils.db import mongo
from utils import clock
from utils.errors import ValidationError


class Attendance:

    METHODS = ("face", "qr", "card", "manual")
    STATUSES = ("present", "late", "absent")

    @staticmethod
    def collection():
        return mongo.db.attendances

    def __init__(self, employee_id, name, method, status, location=None, ip_address=None,
                 timestamp=None, day=None):
        if not employee_id or not name:
            raise ValidationError("employeeId and name are required")
        if method not in Attendance.METHODS:
            raise ValidationError(f"Invalid method: {method}. Expected one of {', '.join(Attendance.METHODS)}")
        if status not in Attendance.STATUSES:
            raise ValidationError(f"Invalid status: {status}. Expected one of {', '.join(Attendance.STATUSES)}")

        self.employee_id = employee_id
        self.name = name
        self.method = method
        self.status = status
        self.location = location
        self.ip_address = ip_address
        self.timestamp = timestamp or clock.utcnow()
        self.day = day or clock.day_key(self.timestamp)

    def to_dict(self):
        return {
            "employeeId": self.employee_id,
            "name": self.name,
            "timestamp": self.timestamp,
            "method": self.method,
            "status": self.status,
            "location": self.location,
            "ipAddress": self.ip_address,
            "day": self.day,
        }

    def save(self):
        doc = self.to_dict()
        Attendance.collection().insert_one(doc)
        return doc

    # Row already marked for employee inside [start, end)
    @staticmethod
    def find_in_window(employee_id, start, end):
        return Attendance.collection().find_one({
            "employeeId": employee_id,
            "timestamp": {"$gte": start, "$lt": end}
        })

    @staticmethod
    def find_latest(query=None, limit=None):
        cursor = Attendance.collection().find(query or {}).sort("timestamp", pymongo.DESCENDING)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    @staticmethod
    def summarize(query):
        """
        Count rows matching `query`, split by status.
        Returns totalDays / presentDays / lateDays / absentDays / attendanceRate.
        """
        pipeline = [
            {"$match": query},
            {
                "$group": {
                    "_id": None,
                    "totalDays": {"$sum": 1},
                    "presentDays": {"$sum": {"$cond": [{"$eq": ["$status", "present"]}, 1, 0]}},
                    "lateDays": {"$sum": {"$cond": [{"$eq": ["$status", "late"]}, 1, 0]}},
                    "absentDays": {"$sum": {"$cond": [{"$eq": ["$status", "absent"]}, 1, 0]}},
                }
            }
        ]
        groups = list(Attendance.collection().aggregate(pipeline))

        summary = {"totalDays": 0, "presentDays": 0, "lateDays": 0, "absentDays": 0}
        if groups:
            for key in summary:
                summary[key] = int(groups[0].get(key, 0))

        summary["attendanceRate"] = attendance_rate(summary["presentDays"], summary["totalDays"])
        return summary


def attendance_rate(present, total):
    # ratio first, then half-up rounding (29/200 -> 14.499... -> 14)
    if total <= 0:
        return 0
    return math.floor(present / total * 100 + 0.5)
