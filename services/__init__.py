"""
Application services layer.

Services hold session state and orchestrate the domain balancing and
scheduling services.
"""

from services.result import Result
from services.session_service import SessionService

__all__ = [
    "Result",
    "SessionService",
]
