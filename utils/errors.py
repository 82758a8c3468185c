"""
utils/errors.py
-----------------
API exceptions and the handlers that turn them into {"message": ...} bodies.
"""

import logging

from flask import jsonify
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None, **payload):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        body = dict(self.payload)
        body["message"] = self.message
        return body


class ValidationError(ApiError):
    status_code = 400


class ConflictError(ApiError):
    # duplicates are reported as 400 to stay compatible with existing clients
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


def register_error_handlers(app):

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"message": error.description}), error.code

    @app.errorhandler(PyMongoError)
    def handle_db_error(error):
        logger.error("Database error: %s", error, exc_info=error)
        return jsonify({"message": str(error)}), 500

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception("Unhandled error: %s", error)
        return jsonify({"message": str(error)}), 500
