from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

# Range checks live in the gateway so they run the same way for every caller.


class NoteCreate(BaseModel):
    id: str
    content: str


class NoteUpdate(BaseModel):
    content: str


class NoteOut(BaseModel):
    id: str
    content: str
    created_at: datetime = Field(serialization_alias="createdAt")
    last_edited_at: Optional[datetime] = Field(default=None, serialization_alias="lastEditedAt")


class NoteAck(BaseModel):
    id: str
    message: str


class ExistsOut(BaseModel):
    exists: bool
