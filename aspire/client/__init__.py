from .api import ApiError, AspireClient
from .attempt import Attempt, AttemptState, AttemptStore, SubmissionError

__all__ = [
    "ApiError",
    "AspireClient",
    "Attempt",
    "AttemptState",
    "AttemptStore",
    "SubmissionError",
]
