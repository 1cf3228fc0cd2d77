from pydantic import BaseModel, Field
from typing import Any, List, Optional
import uuid


def _rid():
    return uuid.uuid4().hex


class Notice(BaseModel):
    """A transient user-facing message raised by a tab action."""
    level: str
    message: str


class SuccessResponse(BaseModel):
    """Success wrapper with data, request_id and the notices the action produced"""
    success: Optional[bool] = Field(default=True)
    request_id: str = Field(default_factory=_rid)
    data: Optional[Any] = None
    notices: List[Notice] = Field(default_factory=list)
