# PURPOSE: pydantic schemas for tasks, users, tokens and analytics reports.

from datetime import UTC, date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

Status = Literal["pending", "in-progress", "completed"]
Priority = Literal["low", "medium", "high"]

STATUSES: tuple[str, ...] = ("pending", "in-progress", "completed")
PRIORITIES: tuple[str, ...] = ("low", "medium", "high")

# Offered by clients as choices; never enforced.
SUGGESTED_CATEGORIES: list[str] = [
    "Mathematics",
    "Science",
    "Programming",
    "Language",
    "History",
    "Literature",
    "Art",
    "Music",
    "Personal Development",
    "Other",
]


class _DueDateInput(BaseModel):
    """Stores due dates as UTC; naive input is taken as UTC already."""

    @field_validator("due_date", check_fields=False)
    @classmethod
    def due_date_utc(cls, value: datetime | None) -> datetime | None:
        if value is None or value.tzinfo is None:
            return value
        return value.astimezone(UTC)


class TaskCreate(_DueDateInput):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    category: str = Field(min_length=1, max_length=100)
    priority: Priority = "medium"
    status: Status = "pending"
    due_date: datetime | None = None
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "examples": [
                {"title": "Read Ch.1", "category": "Mathematics", "priority": "high"},
                {
                    "title": "Write essay",
                    "category": "Language",
                    "due_date": "2025-12-31T18:00:00Z",
                },
            ]
        },
    )


class TaskUpdate(_DueDateInput):
    """Partial update; only fields present in the payload are applied."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    category: str | None = Field(default=None, min_length=1, max_length=100)
    priority: Priority | None = None
    status: Status | None = None
    due_date: datetime | None = None
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "examples": [
                {"status": "in-progress"},
                {"priority": "high"},
                {"due_date": None},
            ]
        },
    )


class TaskPut(_DueDateInput):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    category: str = Field(min_length=1, max_length=100)
    priority: Priority
    status: Status
    due_date: datetime | None = None
    model_config = ConfigDict(extra="ignore")


class Task(BaseModel):
    id: str
    title: str
    description: str | None = None
    category: str
    priority: Priority
    status: Status
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime
    user_id: str

    model_config = ConfigDict(from_attributes=True)  # ORM -> schema


# --- Analytics schemas ---


class TaskStats(BaseModel):
    total: int = 0
    completed: int = 0
    pending: int = 0
    in_progress: int = 0
    overdue: int = 0


class DistributionItem(BaseModel):
    name: str
    value: int
    percentage: str


class BucketItem(BaseModel):
    name: str
    value: int


class DayActivity(BaseModel):
    day: date
    label: str  # e.g. "Oct 19"
    created: int
    completed: int


class DashboardReport(BaseModel):
    stats: TaskStats
    completion_rate: float
    recent_tasks: list[Task]


class AnalyticsReport(BaseModel):
    total: int
    completed: int
    completion_rate: float
    categories: list[DistributionItem]
    priorities: list[BucketItem]
    statuses: list[BucketItem]
    weekly: list[DayActivity]


# --- User / Auth schemas ---


class UserBase(BaseModel):
    email: EmailStr


class UserCreate(UserBase):
    # Raw password only in create request
    password: str = Field(min_length=1)


class UserPublic(UserBase):
    id: str
    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    model_config = ConfigDict(
        json_schema_extra={"examples": [{"access_token": "<jwt>", "token_type": "bearer"}]}
    )
