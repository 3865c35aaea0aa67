# aspire/assignments.py
"""
Which test a user may take.

Payment happens offline (UPI); the admin then records it here by pointing the
user at a test and flipping ``is_paid``. A user only "owns" the assigned test
once both are set.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from .errors import BadRequest, NotFound, Unauthenticated
from .models import Test, User

logger = logging.getLogger(__name__)


def assign_test(db: Session, user_id: Optional[int], test_id: Optional[int], is_paid: bool) -> User:
    if not user_id or not test_id:
        raise BadRequest("User ID and Test ID are required")

    if db.get(Test, test_id) is None:
        raise NotFound("Test not found")

    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found or update failed")

    user.assigned_testid = test_id
    user.is_paid = bool(is_paid)
    db.commit()
    db.refresh(user)
    logger.info("Assigned test %s to user %s (paid=%s)", test_id, user_id, user.is_paid)
    return user


def get_bought_tests(db: Session, user_id: Optional[int]) -> List[Test]:
    if not user_id:
        raise Unauthenticated("Unauthorized")

    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")

    if not user.is_paid or not user.assigned_testid:
        return []

    test = db.get(Test, user.assigned_testid)
    if test is None:
        raise NotFound("Test not found")
    return [test]
