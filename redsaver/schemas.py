import math
from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from redsaver.core.states import DEFAULT_DONATION_STATUS, DonationStatus, Role

# Fields a user may never set on their own profile
PROTECTED_USER_FIELDS = ("role", "status", "email", "_id", "createdAt")


def _check_keys(data: Dict[str, Any]) -> None:
    # keys are written straight into $set / insert_one
    for key in data:
        if key.startswith("$") or "." in key:
            raise ValueError(f"invalid field name: {key}")


class Document(BaseModel):
    """Base for stored documents: `_id` as a string plus whatever else is stored."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")


# --------------------------
# Users
# --------------------------
class UserIn(BaseModel):
    email: EmailStr
    name: Optional[str] = None
    avatar: Optional[str] = None
    bloodGroup: Optional[str] = None
    division: Optional[str] = None
    district: Optional[str] = None
    upazila: Optional[str] = None


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    avatar: Optional[str] = None
    bloodGroup: Optional[str] = None
    division: Optional[str] = None
    district: Optional[str] = None
    upazila: Optional[str] = None

    @model_validator(mode="after")
    def reject_operator_keys(self):
        _check_keys(self.model_extra or {})
        return self

    def changes(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        for field in PROTECTED_USER_FIELDS:
            data.pop(field, None)
        return data


class RoleUpdate(BaseModel):
    role: Role


class UserOut(Document):
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None
    bloodGroup: Optional[str] = None
    division: Optional[str] = None
    district: Optional[str] = None
    upazila: Optional[str] = None
    avatar: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


# --------------------------
# Lookup tables
# --------------------------
class DivisionOut(Document):
    name: Optional[str] = None


class DistrictOut(Document):
    division_id: Optional[str] = None
    name: Optional[str] = None


# --------------------------
# Donations
# --------------------------
class DonationIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: DonationStatus = DEFAULT_DONATION_STATUS

    @model_validator(mode="after")
    def reject_operator_keys(self):
        _check_keys(self.model_extra or {})
        return self

    def document(self, now: datetime) -> Dict[str, Any]:
        data = self.model_dump()
        data.pop("_id", None)
        data["createdAt"] = now
        return data


class DonationStatusUpdate(BaseModel):
    status: DonationStatus


class DonationOut(Document):
    status: Optional[str] = None
    createdAt: Optional[datetime] = None


class DonationCreated(BaseModel):
    success: bool = True
    insertedId: str


# --------------------------
# Funds
# --------------------------
class FundIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    amount: Union[int, float]
    donorName: str = Field(min_length=1)
    donorEmail: EmailStr

    @field_validator("amount")
    @classmethod
    def positive_amount(cls, value):
        if not math.isfinite(value) or value <= 0:
            raise ValueError("amount must be a positive number")
        return value

    @field_validator("donorName")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("donorName required")
        return value


class FundOut(Document):
    amount: Optional[Union[int, float]] = None
    donorName: Optional[str] = None
    donorEmail: Optional[str] = None
    date: Optional[datetime] = None


class FundCreated(BaseModel):
    success: bool = True
    fundId: str


class FundTotal(BaseModel):
    total: Union[int, float]


# --------------------------
# Payments
# --------------------------
class PaymentIntentIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    amount: Optional[float] = None


class PaymentIntentOut(BaseModel):
    clientSecret: str


# --------------------------
# Generic acknowledgements
# --------------------------
class Ack(BaseModel):
    success: bool = True
    message: Optional[str] = None
    matched: Optional[int] = None
