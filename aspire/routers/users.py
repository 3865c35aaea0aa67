# aspire/routers/users.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..assignments import assign_test, get_bought_tests
from ..auth.guards import CurrentUser, get_current_user, require_admin
from ..database import get_db
from ..errors import NotFound
from ..models import User
from ..schemas import (
    AssignTestIn,
    AssignTestOut,
    BoughtTestOut,
    ProfileOut,
    ProfileUpdateIn,
    ProfileUpdateOut,
    UserListItem,
)

router = APIRouter(prefix="/user", tags=["user"])


@router.get("", response_model=ProfileOut)
def get_profile(me: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    user = db.get(User, me.id)
    if not user:
        raise NotFound("User not found")
    return user


@router.post("/details", response_model=ProfileUpdateOut)
def update_profile(
    body: ProfileUpdateIn,
    me: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = db.get(User, me.id)
    if not user:
        raise NotFound("User not found or unable to update")

    user.full_name = body.full_name
    user.school_name = body.school_name
    user.dob = body.dob
    user.gender = body.gender
    user.mobile_number = body.mobileNumber   # camelCase from the profile form
    user.city = body.city
    user.state = body.state
    user.country = body.country
    db.commit()
    db.refresh(user)
    return {"message": "Profile updated successfully!", "user": user}


@router.get("/all", response_model=List[UserListItem])
def list_users(_admin=Depends(require_admin), db: Session = Depends(get_db)):
    return db.scalars(select(User).order_by(User.id)).all()


@router.post("/assigntest", response_model=AssignTestOut)
def assign(body: AssignTestIn, _admin=Depends(require_admin), db: Session = Depends(get_db)):
    user = assign_test(db, body.userId, body.testId, body.isPaid)
    return {"message": "Test assigned successfully", "user": user}


@router.get("/mytests", response_model=List[BoughtTestOut])
def my_tests(me: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_bought_tests(db, me.id)
