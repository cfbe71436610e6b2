"""
Outcome type for session operations.

SessionService reports bad user input (an unknown team, an out-of-range
skill, a game that already started) as a failed Result carrying a message and
an error code, so the caller can show it without catching exceptions:

    result = session.move_player(player_id, team_id)
    if not result:
        show_error(result.error, result.error_code)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Success with an optional payload, or failure with a message and code.

    Attributes:
        success: Whether the operation went through
        value: The updated player, team, match or report (None for resets and failures)
        error: Message fit for showing to the organiser
        error_code: One of services.error_codes
    """

    success: bool
    value: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: str | None = None) -> "Result[T]":
        return cls(success=False, error=error, error_code=code)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """
        Payload of a successful result.

        Raises:
            ValueError: On a failure, naming its error code and message
        """
        if not self.success:
            raise ValueError(f"Session operation failed [{self.error_code or 'unknown'}]: {self.error}")
        return self.value  # type: ignore

    def unwrap_or(self, default: T) -> T:
        return self.value if self.success else default  # type: ignore
