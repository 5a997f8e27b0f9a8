# threadqueue/models/post.py
from sqlmodel import SQLModel, Field, Column
from typing import List, Optional
import uuid
from datetime import datetime, timezone
from sqlalchemy import String, JSON


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(SQLModel, table=True):
    id: Optional[uuid.UUID] = Field(default_factory=uuid.uuid4, primary_key=True)
    account_ref: str = Field(sa_column=Column(String, index=True, nullable=False))
    raw_events: List[dict] = Field(sa_column=Column(JSON, nullable=False), default_factory=list)  # [{"content": ...}]
    is_draft: bool = Field(default=False)
    quote_ref: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Schedule(SQLModel, table=True):
    id: Optional[uuid.UUID] = Field(default_factory=uuid.uuid4, primary_key=True)
    post_id: uuid.UUID = Field(foreign_key="post.id", index=True, unique=True)
    scheduled_time: Optional[datetime] = Field(default=None)  # None: next free slot
    status: str = Field(default="pending")  # pending, running, published, failed
    last_error: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow)
