from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from dp_cars.infra.db.models.base import Base


class VehicleRow(Base):
    __tablename__ = "vehicles"

    # Assigned by the record store (max + 1), never by the database
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    type: Mapped[str] = mapped_column(String(30), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)

    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2), nullable=False
    )  # 9,999,999,999.99
    year: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    km: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    fuel: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    transmission: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    power: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="available")

    # Ordered asset references, upload order preserved
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
