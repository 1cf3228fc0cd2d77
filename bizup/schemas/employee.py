from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Employee(BaseModel):
    id: int
    name: str
    role: str
    phone: str
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    join_date: date
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class EmployeeCreate(BaseModel):
    name: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    join_date: date = Field(default_factory=date.today)


class EmployeeUpdate(BaseModel):
    name: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[EmployeeStatus] = None
