"""
aspire.models package

Re-export the SQLAlchemy models so imports like:

    from aspire.models import User, Otp

work consistently.
"""

from .auth_models import User, Otp
from .test_models import Test, Question, Result
from .catalog_models import TestBundle

__all__ = [
    "User",
    "Otp",
    "Test",
    "Question",
    "Result",
    "TestBundle",
]
