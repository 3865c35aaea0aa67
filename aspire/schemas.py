# aspire/schemas.py
"""Request/response bodies. Request models reject unknown keys."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class StrictBody(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class ORMOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# === auth ===================================================================
class SendOtpIn(StrictBody):
    email: EmailStr


class RegisterIn(StrictBody):
    fullName: str = Field(..., min_length=1, description="Full name is required")
    email: EmailStr
    school: str = Field(..., min_length=1, description="School name is required")
    otp: str = Field(..., pattern=r"^\d{6}$", description="A 6-digit OTP is required")


class LoginIn(StrictBody):
    email: str = Field(..., min_length=1, description="Email or phone is required")


class GoogleAuthIn(StrictBody):
    token: str = Field(..., min_length=1)


class AdminLoginIn(StrictBody):
    # passwords are compared byte for byte
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=False)

    username: str = ""
    password: str = ""


class SessionUser(BaseModel):
    id: int
    full_name: str
    email: str


class SessionOut(BaseModel):
    accessToken: str
    user: SessionUser


class MessageOut(BaseModel):
    message: str


class AdminTokenOut(BaseModel):
    token: str


# === users ==================================================================
class ProfileOut(ORMOut):
    id: int
    full_name: str
    email_or_phone: str
    school_name: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[str] = None
    mobile_number: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    is_paid: bool = False
    assigned_testid: Optional[int] = None


class ProfileUpdateIn(StrictBody):
    full_name: str = Field(..., min_length=1)
    school_name: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[str] = None
    mobileNumber: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None

    @field_validator("dob", mode="before")
    @classmethod
    def _blank_dob(cls, v: Any) -> Any:
        # the profile form posts "" when the date picker is untouched
        return None if v == "" else v


class ProfileUpdateOut(BaseModel):
    message: str
    user: ProfileOut


class UserListItem(ORMOut):
    id: int
    full_name: str
    email_or_phone: str
    school_name: Optional[str] = None


class AssignTestIn(StrictBody):
    userId: Optional[int] = None
    testId: Optional[int] = None
    isPaid: bool = False


class AssignmentOut(ORMOut):
    id: int
    full_name: str
    assigned_testid: Optional[int] = None
    is_paid: bool


class AssignTestOut(BaseModel):
    message: str
    user: AssignmentOut


# === tests / questions ======================================================
class TestIn(StrictBody):
    test_name: str = Field(..., min_length=1)
    num_questions: Optional[int] = Field(None, ge=0)
    duration_minutes: Optional[int] = Field(None, ge=1)
    subject_topic: Optional[str] = None
    instructions: Optional[str] = None
    test_category: Optional[str] = None
    date_scheduled: Optional[datetime] = None


class TestOut(ORMOut):
    id: int
    test_name: str
    num_questions: Optional[int] = None
    duration_minutes: Optional[int] = None
    subject_topic: Optional[str] = None
    instructions: Optional[str] = None
    test_category: Optional[str] = None
    date_scheduled: Optional[datetime] = None


class BoughtTestOut(ORMOut):
    id: int
    test_name: str
    subject_topic: Optional[str] = None
    num_questions: Optional[int] = None
    duration_minutes: Optional[int] = None


class QuestionIn(StrictBody):
    question_text: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=2)
    correct_option: str = Field(..., min_length=1)
    marks: int = Field(1, ge=0)
    image_url: Optional[str] = None


class QuestionOut(ORMOut):
    """What a candidate sees: no answer key."""
    id: int
    test_id: int
    question_text: str
    options: List[str]
    marks: int
    image_url: Optional[str] = None


class AdminQuestionOut(QuestionOut):
    correct_option: str


# === attempts / results =====================================================
class AnswerIn(StrictBody):
    questionId: int
    selectedOption: str


class SubmissionIn(StrictBody):
    answers: List[AnswerIn] = Field(default_factory=list)
    testId: Optional[int] = None   # the client echoes the path id; ignored


class SubmissionOut(BaseModel):
    message: str
    result_id: int
    test_id: int
    score: int
    total_marks: int
    correct: int
    attempted: int
    highest_score: int


class ResultOut(BaseModel):
    id: int
    test_id: int
    test_name: str
    score: int
    highest_score: Optional[int] = None
    submitted_at: datetime


class ImageUploadOut(BaseModel):
    imageUrl: str


# === catalog ================================================================
class BundleOut(ORMOut):
    id: int
    bundle_name: str
    slug: str
    description: Optional[str] = None
    price: Decimal
    features: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    category: Optional[str] = None

    @field_validator("features", mode="before")
    @classmethod
    def _null_features(cls, v: Any) -> Any:
        return v or []
