# inkind_app/routes/helpers.py

"""
Request helpers shared by the JSON resource routes.
"""

from flask import request
from flask_login import current_user
from werkzeug.exceptions import RequestEntityTooLarge

CSV_CONTENT_TYPES = ("text/csv", "text/plain", "application/vnd.ms-excel")
CSV_UPLOAD_FIELD = "file"


def request_payload():
    """JSON object body, or an empty dict for a missing or non-object body."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def collect_updates(payload, validators):
    """
    Validate the keys of ``payload`` that have a validator.

    Keys absent from the payload are left out so PATCH only touches the
    fields the caller sent; a key sent as null is validated like any value.
    """
    return {field: validate(payload[field]) for field, validate in validators.items() if field in payload}


def current_user_id():
    if current_user and current_user.is_authenticated:
        return current_user.id
    return None


def read_csv_body(max_bytes):
    """
    Return the uploaded CSV as text.

    Accepts a raw ``text/csv``, ``text/plain`` or ``application/vnd.ms-excel``
    body, or a multipart upload in the ``file`` field. Anything else yields an
    empty string. Raises ``RequestEntityTooLarge`` above ``max_bytes``.
    """
    if request.content_length is not None and request.content_length > max_bytes:
        raise RequestEntityTooLarge()

    if request.mimetype == "multipart/form-data":
        upload = request.files.get(CSV_UPLOAD_FIELD)
        if upload is None:
            return ""
        raw = upload.read(max_bytes + 1)
    elif request.mimetype in CSV_CONTENT_TYPES:
        raw = request.get_data(cache=False)
    else:
        return ""

    if len(raw) > max_bytes:
        raise RequestEntityTooLarge()
    return raw.decode("utf-8", errors="replace")
