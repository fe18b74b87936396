"""Client and Phase Domain Entities

Owned by the time-tracking side of the application; invoicing only reads
them for snapshots and line item labels.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import ForeignKey, Numeric, String, Text
from src.domain.base import BaseModel, BigIntegerId


class Client(BaseModel, table=True):
    __tablename__ = "clients"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, primary_key=True, autoincrement=True),
    )

    user_id: str = Field(index=True)

    name: str = Field(sa_column=Column(String(255), nullable=False))

    address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    ico: Optional[str] = Field(
        default=None,
        sa_column=Column(String(20), nullable=True),
        description="Company registration number (IČO)"
    )

    hourly_rate: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 6), nullable=True),
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)


class Phase(BaseModel, table=True):
    __tablename__ = "phases"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, primary_key=True, autoincrement=True),
    )

    client_id: int = Field(
        sa_column=Column(BigIntegerId, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False),
    )

    name: str = Field(sa_column=Column(String(255), nullable=False))

    hourly_rate: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 6), nullable=True),
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
