# aspire/routers/bundles.py
from __future__ import annotations

import re
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..auth.guards import get_current_user
from ..database import get_db
from ..errors import BadRequest, NotFound
from ..models import TestBundle
from ..schemas import BundleOut

router = APIRouter(prefix="/test_bundles", tags=["bundles"])

_slug_re = re.compile(r"^[a-z0-9_-]+$", re.I)


def validate_slug(slug: str) -> str:
    slug = (slug or "").strip().strip("/")
    if not slug or not _slug_re.fullmatch(slug):
        raise BadRequest("invalid slug")
    return slug


@router.get("", response_model=List[BundleOut])
@router.get("/", response_model=List[BundleOut], include_in_schema=False)
def list_bundles(_me=Depends(get_current_user), db: Session = Depends(get_db)):
    return db.scalars(select(TestBundle).order_by(TestBundle.id)).all()


@router.get("/{slug}", response_model=BundleOut)
def get_bundle(slug: str, _me=Depends(get_current_user), db: Session = Depends(get_db)):
    slug = validate_slug(slug)
    bundle = db.scalars(select(TestBundle).where(TestBundle.slug == slug)).first()
    if bundle is None:
        raise NotFound("Bundle not found")
    return bundle
