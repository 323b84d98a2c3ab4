"""
Request bodies, one model per operation. Field names follow the JSON the
client sends (camelCase); services receive plain snake_case values.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.enums import (
    Availability, ItemCategory, ItemCondition, ReportStatus, Role, VerificationStatus, values,
)


def _parse_datetime(value: Any):
    """ISO-8601 date or datetime -> naive UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.strip())
        except ValueError:
            raise ValueError("Invalid date format")
    else:
        raise ValueError("Invalid date format")
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def _one_of(value, allowed, message):
    if value is not None and value not in allowed:
        raise ValueError(message)
    return value


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


# -----------------------------
# Auth / users
# -----------------------------
class RegisterIn(_Body):
    name: str = ""
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    phone: Optional[str] = None
    university: Optional[str] = None
    campus: Optional[str] = None
    student_id: Optional[str] = Field(None, alias="studentId")

    @field_validator("email")
    @classmethod
    def _email_shape(cls, v):
        if "@" not in v:
            raise ValueError("Invalid email")
        return v.lower()


class LoginIn(_Body):
    email: str
    password: str


class ProfileUpdateIn(_Body):
    name: Optional[str] = None
    phone: Optional[str] = None
    campus: Optional[str] = None
    student_id: Optional[str] = Field(None, alias="studentId")
    profile_image: Optional[str] = Field(None, alias="profileImage")


# -----------------------------
# Items
# -----------------------------
class LocationIn(_Body):
    address: Optional[str] = None
    campus: Optional[str] = None


class ItemCreateIn(_Body):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    category: str
    images: list[str] = Field(default_factory=list)
    condition: Optional[str] = None
    daily_rate: Decimal = Field(..., alias="dailyRate", ge=0)
    security_deposit: Decimal = Field(..., alias="securityDeposit", ge=0)
    location: Optional[LocationIn] = None
    tags: list[str] = Field(default_factory=list)
    min_lending_period: Optional[int] = Field(None, alias="minLendingPeriod", ge=1)
    max_lending_period: Optional[int] = Field(None, alias="maxLendingPeriod", ge=1)

    @field_validator("category")
    @classmethod
    def _category(cls, v):
        return _one_of(v, values(ItemCategory), "Invalid category")

    @field_validator("condition")
    @classmethod
    def _condition(cls, v):
        return _one_of(v, values(ItemCondition), "Invalid condition")

    def to_fields(self) -> dict:
        data = self.model_dump(exclude={"location"})
        if self.location:
            data["address"] = self.location.address
            data["campus"] = self.location.campus
        return data


class ItemUpdateIn(ItemCreateIn):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    images: Optional[list[str]] = None
    daily_rate: Optional[Decimal] = Field(None, alias="dailyRate", ge=0)
    security_deposit: Optional[Decimal] = Field(None, alias="securityDeposit", ge=0)
    tags: Optional[list[str]] = None
    availability: Optional[str] = None

    @field_validator("availability")
    @classmethod
    def _availability(cls, v):
        return _one_of(v, values(Availability), "Invalid availability")

    def to_fields(self) -> dict:
        data = self.model_dump(exclude={"location"}, exclude_unset=True)
        if self.location:
            loc = self.location.model_dump(exclude_unset=True)
            data.update({k: v for k, v in loc.items()})
        # null for a required column means "leave as is"
        return {k: v for k, v in data.items() if v is not None or k in ("address", "campus")}


# -----------------------------
# Lending
# -----------------------------
class LendingCreateIn(_Body):
    item_id: int = Field(..., alias="itemId")
    start_date: Optional[datetime] = Field(None, alias="startDate")
    end_date: Optional[datetime] = Field(None, alias="endDate")
    message: Optional[str] = Field(None, max_length=2000)
    pickup_location: Optional[str] = Field(None, alias="pickupLocation")
    return_location: Optional[str] = Field(None, alias="returnLocation")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _dates(cls, v):
        return _parse_datetime(v)


class ReasonIn(_Body):
    reason: Optional[str] = Field(None, max_length=500)


class ChatMessageIn(_Body):
    content: str = ""


# -----------------------------
# Admin / verification
# -----------------------------
class RoleChangeIn(_Body):
    role: str

    @field_validator("role")
    @classmethod
    def _role(cls, v):
        return _one_of(v, values(Role), "Invalid role")


class VerificationSubmitIn(_Body):
    message: Optional[str] = Field(None, max_length=2000)


class VerificationStatusIn(_Body):
    status: str
    admin_note: Optional[str] = Field(None, alias="adminNote")

    @field_validator("status")
    @classmethod
    def _status(cls, v):
        return _one_of(v, values(VerificationStatus), "Invalid status")


class AdminMessageIn(_Body):
    content: str = ""


# -----------------------------
# Reviews / reports
# -----------------------------
class ReviewCreateIn(_Body):
    booking_id: int = Field(..., alias="bookingId")
    to_user_id: int = Field(..., alias="toUserId")
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1)
    categories: Optional[dict[str, int]] = None


class ReportCreateIn(_Body):
    reported_item: Optional[int] = Field(None, alias="reportedItem")
    reported_user: Optional[int] = Field(None, alias="reportedUser")
    reason: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)


class ReportResolveIn(_Body):
    status: str
    admin_notes: Optional[str] = Field(None, alias="adminNotes")

    @field_validator("status")
    @classmethod
    def _status(cls, v):
        allowed = [ReportStatus.RESOLVED.value, ReportStatus.DISMISSED.value]
        return _one_of(v, allowed, "Status must be either Resolved or Dismissed")
