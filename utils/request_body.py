"""Reading JSON request bodies."""

from flask import request

from middleware.errors import ValidationError


def json_body() -> dict:
    """Return the JSON object sent with the request.

    A missing or unparsable body counts as empty; any other JSON value
    (array, string, number) is a client error.
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


__all__ = ["json_body"]
