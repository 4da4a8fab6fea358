"""Domain Types — verifies rich type definitions and enum values.

Tests:
    - NewType wrappers exist and are callable
    - ResponseErrorKind is a closed set of three kinds
    - InvocationState has the four lifecycle states
    - Enums serialize to their string values
"""

from authrelay.core.domain_types import (
    UserId, CommentId,
    ResponseErrorKind, InvocationState, RefreshFailurePolicy,
)


def test_identity_types_wrap_str():
    assert UserId("42") == "42"
    assert CommentId("c-1") == "c-1"


def test_response_error_kind_is_closed():
    assert set(ResponseErrorKind) == {
        ResponseErrorKind.SESSION_EXPIRED,
        ResponseErrorKind.OTHER,
        ResponseErrorKind.REFRESH_FAILED,
    }


def test_invocation_state_has_four_states():
    assert [s.value for s in InvocationState] == [
        "awaiting_first_attempt",
        "awaiting_refresh",
        "awaiting_second_attempt",
        "done",
    ]


def test_refresh_failure_policy_values():
    assert RefreshFailurePolicy("surface") is RefreshFailurePolicy.SURFACE
    assert RefreshFailurePolicy("retry_anyway") is RefreshFailurePolicy.RETRY_ANYWAY


def test_enums_compare_equal_to_their_values():
    assert ResponseErrorKind.SESSION_EXPIRED == "session_expired"
    assert InvocationState.DONE.value == "done"
