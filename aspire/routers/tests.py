# aspire/routers/tests.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..auth.guards import CurrentUser, get_current_user, require_admin
from ..database import get_db
from ..errors import BadRequest, NotFound
from ..models import Question, Test
from ..schemas import (
    AdminQuestionOut,
    MessageOut,
    QuestionIn,
    QuestionOut,
    SubmissionIn,
    SubmissionOut,
    TestIn,
    TestOut,
)
from ..scoring import Answer, submit_attempt

router = APIRouter(tags=["tests"])


def _get_test(db: Session, test_id: int) -> Test:
    test = db.get(Test, test_id)
    if test is None:
        raise NotFound("Test not found")
    return test


def _get_question(db: Session, question_id: int) -> Question:
    q = db.get(Question, question_id)
    if q is None:
        raise NotFound("Question not found")
    return q


def _check_correct_option(body: QuestionIn) -> None:
    # correct_option is either the option text or its letter key ("a", "b", ...)
    keys = {chr(97 + i) for i in range(len(body.options))}
    if body.correct_option not in body.options and body.correct_option not in keys:
        raise BadRequest("correct_option must match one of the options")


# === catalog ================================================================
@router.get("/tests", response_model=List[TestOut])
def list_tests(_me: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return db.scalars(select(Test).order_by(Test.id)).all()


@router.get("/upcoming-tests", response_model=List[TestOut])
def upcoming_tests(_me: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    now = datetime.now(timezone.utc)
    return db.scalars(
        select(Test)
        .where(Test.date_scheduled.is_not(None), Test.date_scheduled >= now)
        .order_by(Test.date_scheduled)
    ).all()


@router.get("/tests/{test_id}", response_model=TestOut)
def get_test(test_id: int, _me: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return _get_test(db, test_id)


@router.get("/tests/{test_id}/questions", response_model=List[QuestionOut])
def get_questions(test_id: int, _me: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return _get_test(db, test_id).questions


@router.post("/tests/{test_id}/submit", response_model=SubmissionOut)
def submit(
    test_id: int,
    body: SubmissionIn,
    me: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    answers = [Answer(a.questionId, a.selectedOption) for a in body.answers]
    result, card = submit_attempt(db, me.id, test_id, answers)
    return {
        "message": "Test submitted successfully",
        "result_id": result.id,
        "test_id": test_id,
        "score": card.score,
        "total_marks": card.total_marks,
        "correct": card.correct,
        "attempted": card.attempted,
        "highest_score": result.highest_score,
    }


# === admin ==================================================================
@router.post("/tests", response_model=TestOut, status_code=status.HTTP_201_CREATED)
def create_test(body: TestIn, _admin=Depends(require_admin), db: Session = Depends(get_db)):
    test = Test(**body.model_dump())
    db.add(test)
    db.commit()
    db.refresh(test)
    return test


@router.delete("/tests/{test_id}", response_model=MessageOut)
def delete_test(test_id: int, _admin=Depends(require_admin), db: Session = Depends(get_db)):
    db.delete(_get_test(db, test_id))
    db.commit()
    return {"message": "Test deleted"}


@router.get("/admin/tests/{test_id}/questions", response_model=List[AdminQuestionOut])
def admin_questions(test_id: int, _admin=Depends(require_admin), db: Session = Depends(get_db)):
    return _get_test(db, test_id).questions


@router.post(
    "/tests/{test_id}/questions",
    response_model=AdminQuestionOut,
    status_code=status.HTTP_201_CREATED,
)
def add_question(test_id: int, body: QuestionIn, _admin=Depends(require_admin), db: Session = Depends(get_db)):
    _get_test(db, test_id)
    _check_correct_option(body)
    q = Question(test_id=test_id, **body.model_dump())
    db.add(q)
    db.commit()
    db.refresh(q)
    return q


@router.put("/questions/{question_id}", response_model=AdminQuestionOut)
def edit_question(question_id: int, body: QuestionIn, _admin=Depends(require_admin), db: Session = Depends(get_db)):
    q = _get_question(db, question_id)
    _check_correct_option(body)
    for field, value in body.model_dump().items():
        setattr(q, field, value)
    db.commit()
    db.refresh(q)
    return q


@router.delete("/questions/{question_id}", response_model=MessageOut)
def delete_question(question_id: int, _admin=Depends(require_admin), db: Session = Depends(get_db)):
    db.delete(_get_question(db, question_id))
    db.commit()
    return {"message": "Question deleted"}
