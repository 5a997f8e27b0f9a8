# threadqueue/models/queue.py
from sqlmodel import SQLModel, Field, Column
from typing import Optional
import uuid
from datetime import datetime
from sqlalchemy import String, UniqueConstraint
from threadqueue.models.post import utcnow


class Queue(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("account_ref", "name"),)

    id: Optional[uuid.UUID] = Field(default_factory=uuid.uuid4, primary_key=True)
    account_ref: str = Field(sa_column=Column(String, index=True, nullable=False))
    name: str
    description: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow)
