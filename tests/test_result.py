"""Unit tests for the Result type."""
import pytest
from unittest.mock import Mock

from gimple.exceptions import ServiceNotFoundError
from gimple.result import Success, Failure


class TestSuccess:

    def test_success_creation(self):
        # Act
        result = Success("service")

        # Assert
        assert result.is_success()
        assert not result.is_failure()
        assert result.unwrap() == "service"

    def test_success_unwrap_or(self):
        assert Success(42).unwrap_or(0) == 42

    def test_success_map(self):
        # Act
        mapped = Success(5).map(lambda x: x * 2)

        # Assert
        assert mapped.is_success()
        assert mapped.unwrap() == 10

    def test_success_map_propagates_exceptions(self):
        # Arrange
        def broken_factory(value):
            raise RuntimeError("factory failed")

        # Assert
        with pytest.raises(RuntimeError, match="factory failed"):
            Success(1).map(broken_factory)

    def test_success_may_carry_none(self):
        # Act
        result = Success(None)

        # Assert
        assert result.is_success()
        assert result.unwrap_or("default") is None


class TestFailure:

    def test_failure_creation(self):
        # Arrange
        error = ServiceNotFoundError("db")

        # Act
        result = Failure(error)

        # Assert
        assert result.is_failure()
        assert not result.is_success()
        assert result.error is error

    def test_failure_unwrap_raises_carried_error(self):
        # Arrange
        error = ServiceNotFoundError("db")

        # Assert
        with pytest.raises(ServiceNotFoundError) as exc_info:
            Failure(error).unwrap()
        assert exc_info.value is error

    def test_failure_unwrap_or(self):
        assert Failure(ServiceNotFoundError("db")).unwrap_or(99) == 99

    def test_failure_map_skips_function(self):
        # Arrange
        result = Failure(ServiceNotFoundError("db"))
        fn = Mock()

        # Act
        mapped = result.map(fn)

        # Assert
        assert mapped is result
        fn.assert_not_called()
