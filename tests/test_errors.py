import pytest

from ipfslog.errors import ErrorCode, LogError


def test_error_returns_message():
    assert ErrorCode.IPFS_NOT_DEFINED.error() == "ipfs instance not defined"
    assert ErrorCode.TIEBREAKER_FAILED.error() == "tiebreaker failed"


def test_plain_log_error_message_and_code():
    err = LogError(ErrorCode.ENTRY_NOT_DEFINED)
    assert str(err) == "entry is not defined"
    assert err.code is ErrorCode.ENTRY_NOT_DEFINED
    assert err.inner is None


def test_wrap_exception_sets_cause_and_message():
    inner = ValueError("boom")
    err = ErrorCode.SIG_SIGN.wrap(inner)
    assert isinstance(err, LogError)
    assert err.code is ErrorCode.SIG_SIGN
    assert err.__cause__ is inner
    assert str(err) == f"{ErrorCode.SIG_SIGN.error()}: {inner}"


def test_wrap_nested_log_error():
    inner = LogError(ErrorCode.SIG_NOT_DEFINED)
    outer = ErrorCode.TIEBREAKER_FAILED.wrap(inner)
    assert str(outer) == "tiebreaker failed: signature is not defined"
    assert outer.__cause__.code is ErrorCode.SIG_NOT_DEFINED


def test_wrapped_error_can_be_raised_and_caught():
    err = ErrorCode.IPFS_READ_FAILED.wrap(RuntimeError("gone"))
    assert str(err) == "ipfs read failed: gone"
    with pytest.raises(LogError) as info:
        raise err
    assert info.value is err
    assert info.value.code is ErrorCode.IPFS_READ_FAILED


def test_messages_are_unique():
    messages = {str(LogError(code)) for code in ErrorCode}
    assert len(messages) == len(ErrorCode)
    assert "log append denied" in messages