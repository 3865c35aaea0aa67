# aspire/routers/results.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.guards import CurrentUser, get_current_user
from ..database import get_db
from ..schemas import ResultOut
from ..scoring import list_results

router = APIRouter(tags=["results"])


@router.get("/results", response_model=List[ResultOut])
def my_results(me: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return [
        {
            "id": r.id,
            "test_id": r.test_id,
            "test_name": name,
            "score": r.score,
            "highest_score": r.highest_score,
            "submitted_at": r.submitted_at,
        }
        for r, name in list_results(db, me.id)
    ]
