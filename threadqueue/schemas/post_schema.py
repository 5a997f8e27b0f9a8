# threadqueue/schemas/post_schema.py
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, List, Literal, Optional, Union
import uuid
from datetime import datetime

from threadqueue.composer.segment import Segment


class RawEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str = Field(min_length=1)


class PostCreate(BaseModel):
    account_ref: str = Field(min_length=1)
    raw_events: List[RawEvent] = Field(min_length=1)
    is_draft: bool = False
    quote_ref: Optional[str] = None


class PostUpdate(BaseModel):
    # unset fields are left untouched by the store
    raw_events: Optional[Annotated[List[RawEvent], Field(min_length=1)]] = None
    is_draft: Optional[bool] = None


class PostRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    account_ref: str
    raw_events: List[RawEvent]
    is_draft: bool
    quote_ref: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PostEnvelope(BaseModel):
    post: PostRead


class PostListEnvelope(BaseModel):
    posts: List[PostRead]


class ScheduleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    post_id: uuid.UUID
    status: str
    scheduled_time: Optional[datetime] = None


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    PERSIST = "persist"
    SCHEDULE = "schedule"


class ComposeRequest(BaseModel):
    edit_ref: Optional[str] = None
    account_ref: Optional[str] = None
    quote_ref: Optional[str] = None
    segments: List[Segment] = Field(default_factory=list)


class ComposeOk(BaseModel):
    status: Literal["ok"] = "ok"
    post_id: str
    message: str


class ComposeErr(BaseModel):
    status: Literal["error"] = "error"
    kind: ErrorKind
    message: str
    post_id: Optional[str] = None


ComposeResult = Annotated[Union[ComposeOk, ComposeErr], Field(discriminator="status")]


class ThreadRead(BaseModel):
    post_id: str
    segments: List[Segment]
