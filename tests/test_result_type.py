"""Tests for the Result type and error codes."""

import dataclasses

import pytest

from services import error_codes
from services.result import Result
from services.session_service import SessionService


class TestResultOk:
    """Tests for successful Result creation."""

    def test_ok_without_value(self):
        """Result.ok() is a valueless success for void operations."""
        result = Result.ok()
        assert result.success is True
        assert result.value is None
        assert result.error is None
        assert result.error_code is None

    def test_ok_with_value(self):
        """Result.ok(value) carries the payload."""
        result = Result.ok(["black", "white"])
        assert result.success is True
        assert result.value == ["black", "white"]


class TestResultFail:
    """Tests for failed Result creation."""

    def test_fail_with_code(self):
        """Result.fail(msg, code) keeps both message and code."""
        result = Result.fail("Team not found", code=error_codes.TEAM_NOT_FOUND)
        assert result.success is False
        assert result.value is None
        assert result.error == "Team not found"
        assert result.error_code == error_codes.TEAM_NOT_FOUND

    def test_fail_without_code(self):
        """The code is optional."""
        result = Result.fail("Something went wrong")
        assert result.error_code is None


class TestResultAccessors:
    """Tests for truthiness and unwrapping."""

    def test_truthiness(self):
        """Success is truthy, failure is falsy."""
        assert Result.ok(0)
        assert not Result.fail("nope")

    def test_unwrap_success(self):
        """unwrap() returns the payload of a success."""
        assert Result.ok(3).unwrap() == 3

    def test_unwrap_failure_raises(self):
        """unwrap() on a failure raises with the error code and message."""
        with pytest.raises(ValueError, match=r"\[match_not_found\]: Match not found"):
            Result.fail("Match not found", code=error_codes.MATCH_NOT_FOUND).unwrap()

    def test_unwrap_failure_without_code(self):
        with pytest.raises(ValueError, match=r"\[unknown\]: nope"):
            Result.fail("nope").unwrap()

    def test_session_failure_unwraps_with_code(self):
        """A failed session call surfaces its code when unwrapped."""
        with pytest.raises(ValueError, match="team_not_found"):
            SessionService().rebalance("a", "b").unwrap()

    def test_unwrap_or(self):
        """unwrap_or() falls back only for failures."""
        assert Result.ok(5).unwrap_or(0) == 5
        assert Result.fail("nope").unwrap_or(0) == 0

    def test_immutable(self):
        """Results are frozen."""
        result = Result.ok(1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.value = 2


class TestErrorCodes:
    """Tests for the error code constants."""

    def test_codes_are_unique_strings(self):
        """Every public constant is a distinct string."""
        codes = [
            value
            for name, value in vars(error_codes).items()
            if name.isupper() and not name.startswith("_")
        ]
        assert codes
        assert all(isinstance(code, str) for code in codes)
        assert len(codes) == len(set(codes))
