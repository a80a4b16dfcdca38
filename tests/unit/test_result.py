import pytest

from placeholder_client.errors import DecodeError, InvalidArgument
from placeholder_client.models import User
from placeholder_client.result import Result


class TestResult:
    def test_success(self):
        user = User(id=1)
        result = Result.success(user)

        assert result.ok
        assert result
        assert result.value is user
        assert result.error is None
        assert result.unwrap() is user

    def test_empty_success_is_still_ok(self):
        result = Result.success([])
        assert result.ok
        assert result.value_or(None) == []

    def test_failure_has_no_value(self):
        error = InvalidArgument("bad id")
        result = Result.failure(error)

        assert not result.ok
        assert not result
        assert result.value is None
        assert result.error is error
        assert result.value_or([]) == []

    def test_unwrap_raises(self):
        with pytest.raises(DecodeError):
            Result.failure(DecodeError("not json")).unwrap()

    def test_failure_requires_error(self):
        with pytest.raises(ValueError):
            Result.failure(None)

    def test_cannot_carry_both(self):
        with pytest.raises(ValueError):
            Result(value=1, error=DecodeError("x"))

    def test_repr(self):
        assert repr(Result.success(3)) == "Result.success(3)"
        assert repr(Result.failure(InvalidArgument("x"))).startswith("Result.failure(")
