"""
utils/serializers.py
-----------------
JSON provider that knows how to write MongoDB documents:
ObjectId -> hex string, datetime -> ISO-8601 UTC.
"""

from datetime import datetime

from bson import ObjectId
from flask.json.provider import DefaultJSONProvider

from utils.clock import isoformat


class MongoJSONProvider(DefaultJSONProvider):
    sort_keys = False

    @staticmethod
    def default(o):
        if isinstance(o, ObjectId):
            return str(o)
        if isinstance(o, datetime):
            return isoformat(o)
        return DefaultJSONProvider.default(o)
