# aspire/models/catalog_models.py
from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base
from .test_models import JSONType


class TestBundle(Base):
    """
    Storefront product: a group of tests sold together.
    Rows are seeded directly in the database; the API only reads them.
    """
    __tablename__ = "test_bundles"
    __test__ = False

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    bundle_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0)
    features: Mapped[Any] = mapped_column(JSONType, nullable=True)   # list of strings
    image_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
