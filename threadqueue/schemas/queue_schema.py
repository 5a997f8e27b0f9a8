# threadqueue/schemas/queue_schema.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
import uuid
from datetime import datetime


class QueueCreate(BaseModel):
    account_ref: str = Field(min_length=1)
    name: str
    description: Optional[str] = None


class QueueRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    account_ref: str
    name: str
    description: Optional[str]
    created_at: datetime


class QueueListEnvelope(BaseModel):
    queues: List[QueueRead]
