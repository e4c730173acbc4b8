import pytest

from supertokens_client.domain.status import Outcome, body_status, classify


def test_ok_requires_ok_body_status():
    assert classify(200, "OK") is Outcome.ok


@pytest.mark.parametrize("status", ["WRONG_CREDENTIALS_ERROR", "UNKNOWN_ROLE_ERROR", "ok", ""])
def test_200_with_other_status_is_not_success(status):
    assert classify(200, status) is Outcome.not_ok


def test_200_without_readable_status_is_unknown():
    assert classify(200, None) is Outcome.unknown


def test_unenveloped_200_is_ok():
    assert classify(200, enveloped=False) is Outcome.ok


@pytest.mark.parametrize(
    "code, expected",
    [
        (400, Outcome.bad_request),
        (401, Outcome.invalid_api_key),
        (404, Outcome.not_found),
        (500, Outcome.internal),
    ],
)
def test_fixed_http_branches_ignore_body(code, expected):
    assert classify(code, "OK") is expected
    assert classify(code, None, enveloped=False) is expected


@pytest.mark.parametrize("code", [None, 201, 204, 302, 403, 409, 429, 502, 503])
def test_everything_else_is_unknown(code):
    assert classify(code, "OK") is Outcome.unknown


def test_body_status_reads_only_string_status():
    assert body_status({"status": "OK"}) == "OK"
    assert body_status({"status": 1}) is None
    assert body_status(["OK"]) is None
    assert body_status(None) is None
