# aspire/scoring.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .errors import NotFound
from .models import Question, Result, Test

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Answer:
    question_id: int
    selected_option: str


@dataclass(frozen=True)
class ScoreCard:
    score: int
    total_marks: int
    correct: int
    attempted: int


def score_answers(questions: Iterable[Question], answers: Iterable[Answer]) -> ScoreCard:
    """
    Sum the marks of correctly answered questions.

    Answers for questions outside ``questions`` are ignored; if a question is
    answered more than once the last answer counts.
    """
    by_id: Mapping[int, Question] = {q.id: q for q in questions}
    chosen: dict[int, str] = {}
    for a in answers:
        if a.question_id in by_id:
            chosen[a.question_id] = a.selected_option

    score = correct = 0
    for qid, option in chosen.items():
        q = by_id[qid]
        if option == q.correct_option:
            score += q.marks
            correct += 1

    return ScoreCard(
        score=score,
        total_marks=sum(q.marks for q in by_id.values()),
        correct=correct,
        attempted=len(chosen),
    )


def submit_attempt(db: Session, user_id: int, test_id: int, answers: List[Answer]) -> tuple[Result, ScoreCard]:
    test = db.get(Test, test_id)
    if test is None:
        raise NotFound("Test not found")

    card = score_answers(test.questions, answers)

    best = db.scalar(
        select(func.max(Result.score)).where(Result.user_id == user_id, Result.test_id == test_id)
    )
    highest = card.score if best is None else max(best, card.score)

    result = Result(user_id=user_id, test_id=test_id, score=card.score, highest_score=highest)
    db.add(result)
    db.commit()
    db.refresh(result)
    logger.info("User %s scored %s/%s on test %s", user_id, card.score, card.total_marks, test_id)
    return result, card


def list_results(db: Session, user_id: int) -> list[tuple[Result, str]]:
    rows = db.execute(
        select(Result, Test.test_name)
        .join(Test, Test.id == Result.test_id)
        .where(Result.user_id == user_id)
        .order_by(Result.submitted_at.desc(), Result.id.desc())
    ).all()
    return [(r, name) for r, name in rows]
