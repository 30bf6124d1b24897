from __future__ import annotations

import pytest
from flask import Flask

from classroom_attendance.common.http import error_response
from classroom_attendance.core.exceptions import (
    AuthenticationError,
    DuplicateKeyViolation,
    InvalidTimeFormat,
    MissingRequiredField,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def ctx():
    app = Flask(__name__)
    with app.app_context():
        yield


@pytest.mark.parametrize(
    "exc,status",
    [
        (ValidationError("bad"), 400),
        (InvalidTimeFormat("bad time"), 400),
        (MissingRequiredField("date"), 400),
        (AuthenticationError("no"), 401),
        (NotFoundError("missing"), 404),
        (DuplicateKeyViolation("dup"), 409),
    ],
)
def test_domain_errors_map_to_status(ctx, exc, status):
    resp, code = error_response(exc, action="mark attendance")
    assert code == status
    assert resp.get_json()["message"] == str(exc)


def test_duplicate_key_is_not_a_server_error(ctx):
    _, code = error_response(DuplicateKeyViolation("Duplicate attendance key"), action="mark attendance")
    assert code == 409


def test_unexpected_error_is_500(ctx):
    resp, code = error_response(RuntimeError("db down"), action="mark attendance")
    assert code == 500
    assert resp.get_json()["message"] == "Failed to mark attendance"
