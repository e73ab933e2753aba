import pytest

from core.domain.outcome import (
    ErrorKind,
    Failure,
    OperationFailed,
    Success,
    failure_from_exception,
    status_failure,
)


def test_success_unwraps_payload():
    assert Success([1, 2]).unwrap() == [1, 2]
    assert Success("").ok


def test_failure_unwrap_raises_with_kind():
    with pytest.raises(OperationFailed) as excinfo:
        Failure("nope", ErrorKind.STREAM).unwrap()

    assert excinfo.value.message == "nope"
    assert excinfo.value.kind is ErrorKind.STREAM


def test_failure_message_is_never_empty():
    assert Failure("", ErrorKind.STREAM).message == "stream error"
    assert Failure("   ").message == "unexpected error"


def test_status_failure_format():
    assert status_failure(500, "Internal Server Error") == Failure("500 Internal Server Error", ErrorKind.TRANSPORT)
    assert status_failure(599, "").message == "599"


def test_failure_from_exception_falls_back_to_class_name():
    assert failure_from_exception(TimeoutError()).message == "TimeoutError"
    assert failure_from_exception(OperationFailed("x", ErrorKind.PRECONDITION)).kind is ErrorKind.PRECONDITION
