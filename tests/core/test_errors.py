"""Error Hierarchy — tests for codes, statuses and the REST envelope."""

import pytest

from yogalog.core.errors import (
    ConcurrencyError, CutoffNotFoundError, DatabaseError, ErrorCategory,
    ErrorContext, ErrorSeverity, IncompleteSessionError, InvalidRangeError,
    InvalidTransitionError, MissingReferenceDataError, ResourceNotFoundError,
    UnauthorizedError, UnknownSegmentError, ValidationFailedError, YogaLogError,
)


@pytest.mark.parametrize("error, status, category", [
    (ValidationFailedError("bad"), 400, ErrorCategory.VALIDATION),
    (CutoffNotFoundError("x", "PRIMARY"), 400, ErrorCategory.VALIDATION),
    (InvalidRangeError("b", "a", "PRIMARY"), 400, ErrorCategory.VALIDATION),
    (UnknownSegmentError("SUN"), 400, ErrorCategory.VALIDATION),
    (UnauthorizedError(), 401, ErrorCategory.UNAUTHORIZED),
    (ResourceNotFoundError("PracticeSession", "1"), 404, ErrorCategory.RESOURCE_NOT_FOUND),
    (IncompleteSessionError([]), 422, ErrorCategory.COMPLETENESS),
    (InvalidTransitionError("ARCHIVED", "PUBLISHED"), 409, ErrorCategory.CONFLICT),
    (ConcurrencyError("race"), 409, ErrorCategory.CONFLICT),
    (MissingReferenceDataError(["a"]), 500, ErrorCategory.MISSING_REFERENCE_DATA),
    (DatabaseError("down", "execute"), 503, ErrorCategory.DATABASE),
])
def test_status_and_category(error, status, category):
    assert isinstance(error, YogaLogError)
    assert error.http_status == status
    assert error.category is category


def test_slice_errors_are_validation_errors():
    assert isinstance(CutoffNotFoundError("x", "PRIMARY"), ValidationFailedError)
    assert isinstance(InvalidRangeError("b", "a", "PRIMARY"), ValidationFailedError)


def test_missing_reference_data_is_critical():
    assert MissingReferenceDataError(["a"]).severity is ErrorSeverity.CRITICAL


def test_envelope_shape():
    err = ResourceNotFoundError(
        "ScoreCard", "abc", ErrorContext(score_card_id="abc"),
    )
    body = err.to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["category"] == "resource_not_found"
    assert body["context"] == {"session_id": None, "score_card_id": "abc"}
    assert "details" not in body


def test_envelope_carries_details():
    err = IncompleteSessionError([{"score_card_id": "x", "missing": ["focus"]}])
    body = err.to_response()["error"]
    assert body["code"] == "SESSION_INCOMPLETE"
    assert body["details"]["incomplete_cards"][0]["missing"] == ["focus"]


def test_user_message_overrides_message():
    err = ValidationFailedError("internal", context=ErrorContext(user_message="Try again"))
    assert err.to_response()["error"]["message"] == "Try again"


def test_validation_field_in_details():
    assert ValidationFailedError("bad", field="days").to_response()["error"]["details"] == {
        "field": "days",
    }
