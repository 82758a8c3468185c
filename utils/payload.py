from flask import request

from utils.errors import ValidationError


def json_object():
    """Request body as a dict: {} when missing, 400 when it is not a JSON object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
