import os
import sys
from types import SimpleNamespace

import pytest

os.environ.setdefault("SECRET_KEY", "0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef")

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from pointshare.services.results import ErrorKind, ValidationResult
from pointshare.services.validation import (
    MAX_POINTS,
    NewRequest,
    parse_new_request,
    validate_accept_request,
    validate_balance,
    validate_create_request,
    validate_decline_request,
    validate_delete_request,
    validate_notification_update,
)

POINTS_ERROR = {
    "valid": False,
    "error": "Points requested must be a positive integer",
    "status": 400,
}
LOCATION_ERROR = {"valid": False, "error": "Location is required", "status": 400}


def _request(requester_id="requester-123", status="pending", points_requested=5):
    return SimpleNamespace(
        requester_id=requester_id,
        status=status,
        points_requested=points_requested,
    )


@pytest.mark.parametrize(
    "location,points",
    [("C9/C10 Dining Hall", 5), ("Oakes Cafe", 1), ("  Porter/Kresge Dining Hall  ", 250), ("x", 5.0)],
)
def test_create_accepts_valid_input(location, points):
    assert validate_create_request(location, points) == ValidationResult.ok()


@pytest.mark.parametrize("location", [None, "", "   ", "\t\n", 123, ["Oakes Cafe"]])
def test_create_rejects_missing_or_blank_location(location):
    assert validate_create_request(location, 5).as_dict() == LOCATION_ERROR


@pytest.mark.parametrize("points", [None, 0, -5, 5.5, "5", True, float("nan"), float("inf")])
def test_create_rejects_bad_points(points):
    result = validate_create_request("Oakes Cafe", points)
    assert result.as_dict() == POINTS_ERROR
    assert result.kind == ErrorKind.INVALID_INPUT


def test_create_reports_location_before_points():
    assert validate_create_request("  ", "abc").error == "Location is required"


def test_parse_new_request_trims_and_normalises():
    parsed = parse_new_request("  Oakes Cafe ", 5.0, "  need lunch  ")

    assert parsed == NewRequest(location="Oakes Cafe", points_requested=5, message="need lunch")
    assert isinstance(parsed.points_requested, int)


@pytest.mark.parametrize("message", [None, "", "    ", 42])
def test_parse_new_request_drops_empty_message(message):
    parsed = parse_new_request("Oakes Cafe", 3, message)

    assert isinstance(parsed, NewRequest)
    assert parsed.message is None


def test_parse_new_request_returns_failure_for_bad_input():
    parsed = parse_new_request("Oakes Cafe", 0)

    assert isinstance(parsed, ValidationResult)
    assert parsed.as_dict() == POINTS_ERROR


def test_delete_accepts_own_pending_request():
    assert validate_delete_request(_request(requester_id="user-123"), "user-123").valid


def test_delete_rejects_missing_request():
    result = validate_delete_request(None, "user-123")
    assert result.as_dict() == {"valid": False, "error": "Request not found", "status": 404}
    assert result.kind == ErrorKind.NOT_FOUND


def test_delete_rejects_other_users_request():
    result = validate_delete_request(_request(requester_id="user-456"), "user-123")
    assert result.as_dict() == {
        "valid": False,
        "error": "You can only delete your own requests",
        "status": 403,
    }


@pytest.mark.parametrize("status", ["accepted", "declined"])
def test_delete_rejects_resolved_request(status):
    result = validate_delete_request(_request(requester_id="user-123", status=status), "user-123")
    assert result.as_dict() == {
        "valid": False,
        "error": "You can only delete pending requests",
        "status": 400,
    }


def test_delete_checks_ownership_before_status():
    result = validate_delete_request(_request(requester_id="user-456", status="accepted"), "user-123")
    assert result.status == 403


def test_accept_valid_with_sufficient_balance():
    assert validate_accept_request(_request(points_requested=5), "donor-456", 10).valid


def test_accept_valid_when_balance_exactly_matches():
    assert validate_accept_request(_request(points_requested=10), "donor-456", 10).valid


def test_accept_rejects_missing_request():
    assert validate_accept_request(None, "donor-456", 10).as_dict() == {
        "valid": False,
        "error": "Request not found",
        "status": 404,
    }


def test_accept_rejects_own_request():
    assert validate_accept_request(_request(), "requester-123", 10).as_dict() == {
        "valid": False,
        "error": "You cannot accept your own request",
        "status": 400,
    }


@pytest.mark.parametrize("status", ["accepted", "declined"])
def test_accept_rejects_resolved_request(status):
    result = validate_accept_request(_request(status=status), "donor-456", 10)
    assert result.as_dict() == {"valid": False, "error": "Request is no longer pending", "status": 400}
    assert result.kind == ErrorKind.INVALID_STATE


def test_accept_rejects_insufficient_balance():
    result = validate_accept_request(_request(points_requested=15), "donor-456", 10)
    assert result.as_dict() == {"valid": False, "error": "Insufficient points balance", "status": 400}
    assert result.kind == ErrorKind.INSUFFICIENT_RESOURCE


def test_accept_check_order():
    # Own, resolved and unaffordable: self-accept wins.
    own_resolved = _request(requester_id="donor-456", status="accepted", points_requested=50)
    assert validate_accept_request(own_resolved, "donor-456", 0).error == "You cannot accept your own request"

    # Resolved and unaffordable: status wins over balance.
    resolved = _request(status="declined", points_requested=50)
    assert validate_accept_request(resolved, "donor-456", 0).error == "Request is no longer pending"

    # Missing beats everything.
    assert validate_accept_request(None, "donor-456", 0).error == "Request not found"


def test_accept_is_monotonic_in_balance():
    request = _request(points_requested=7)
    outcomes = [validate_accept_request(request, "donor-456", balance).valid for balance in range(0, 20)]

    first_valid = outcomes.index(True)
    assert first_valid == 7
    assert all(outcomes[first_valid:])
    assert not any(outcomes[:first_valid])


def test_decline_rules():
    assert validate_decline_request(_request(), "donor-456").valid
    assert validate_decline_request(None, "donor-456").status == 404
    assert validate_decline_request(_request(), "requester-123").as_dict() == {
        "valid": False,
        "error": "You cannot decline your own request",
        "status": 400,
    }
    assert validate_decline_request(_request(status="accepted"), "donor-456").error == (
        "Request is no longer pending"
    )


@pytest.mark.parametrize("balance,valid", [(0, True), (25, True), (10.0, True), (-1, False), (2.5, False), ("10", False), (None, False)])
def test_validate_balance(balance, valid):
    assert validate_balance(balance).valid is valid


@pytest.mark.parametrize("notification_id,valid", [("n-1", True), (None, False), ("", False), (123, False)])
def test_validate_notification_update(notification_id, valid):
    result = validate_notification_update(notification_id)
    assert result.valid is valid
    if not valid:
        assert result.as_dict() == {"valid": False, "error": "Notification ID is required", "status": 400}


def test_points_must_fit_the_points_column():
    assert validate_create_request("Oakes Cafe", MAX_POINTS).as_dict() == {"valid": True}
    for too_many in (MAX_POINTS + 1, 10**20, 1e20):
        assert validate_create_request("Oakes Cafe", too_many).as_dict() == POINTS_ERROR
        assert isinstance(parse_new_request("Oakes Cafe", too_many), ValidationResult)


def test_balance_must_fit_the_points_column():
    assert validate_balance(MAX_POINTS).valid
    assert validate_balance(MAX_POINTS + 1).error == "Balance must be a non-negative integer"
    assert not validate_balance(1e20).valid
