"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from identity.user.email import is_valid_email, normalize_email
from shared.validation import bounded_text

PersonName = bounded_text(30, min_length=2)
EmailText = bounded_text(254)
StreetText = bounded_text(255)
PlaceText = bounded_text(100)
ZipCode = bounded_text(20)


def _checked_email(value):
    if value is None:
        return value
    value = normalize_email(value)
    if not is_valid_email(value):
        raise ValueError("Please enter valid email address")
    return value


# --- Request Schemas ---


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Jane Doe",
                    "email": "jane.doe@example.com",
                    "password": "s3cret-pass",
                    "role": "user",
                }
            ]
        }
    }

    name: PersonName
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=6, max_length=128)
    role: Literal["user", "seller"] = "user"
    phone_number: str | None = Field(None, max_length=20)

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return _checked_email(value)


class LoginRequest(BaseModel):
    email: EmailText
    password: str = Field(..., min_length=1, max_length=128)


class UpdateProfileRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Jane Smith", "phone_number": "+1-555-0456"}]}}

    name: PersonName | None = None
    email: str | None = Field(None, max_length=254)
    phone_number: str | None = Field(None, max_length=20)

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return _checked_email(value)


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=6, max_length=128)


class AdminUpdateUserRequest(BaseModel):
    name: PersonName | None = None
    email: str | None = Field(None, max_length=254)
    role: Literal["user", "seller", "admin"] | None = None

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return _checked_email(value)


class AddressRequest(BaseModel):
    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "street": "123 Elm Street",
                    "city": "Springfield",
                    "state": "IL",
                    "zipCode": "62701",
                    "country": "US",
                    "isDefault": False,
                }
            ]
        },
    }

    street: StreetText
    city: PlaceText
    state: PlaceText
    zip_code: ZipCode = Field(..., alias="zipCode")
    country: PlaceText
    is_default: bool = Field(False, alias="isDefault")


class UpdateAddressRequest(BaseModel):
    model_config = {"populate_by_name": True}

    street: StreetText | None = None
    city: PlaceText | None = None
    state: PlaceText | None = None
    zip_code: ZipCode | None = Field(None, alias="zipCode")
    country: PlaceText | None = None
    is_default: bool | None = Field(None, alias="isDefault")


# --- Response Schemas ---


class AddressResponse(BaseModel):
    id: str
    street: str
    city: str
    state: str
    zip_code: str
    country: str
    is_default: bool

    @classmethod
    def from_address(cls, address) -> AddressResponse:
        return cls(
            id=str(address.id),
            street=address.street,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            country=address.country,
            is_default=bool(address.is_default),
        )


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    phone_number: str | None = None
    addresses: list[AddressResponse] = []
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user) -> UserResponse:
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            role=user.role,
            phone_number=user.phone_number,
            addresses=[AddressResponse.from_address(address) for address in user.addresses],
            created_at=user.created_at,
        )


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: UserResponse


class UserEnvelope(BaseModel):
    success: bool = True
    user: UserResponse


class AddressBookResponse(BaseModel):
    success: bool = True
    addresses: list[AddressResponse]


class UserListResponse(BaseModel):
    success: bool = True
    count: int
    users: list[UserResponse]


class StatusResponse(BaseModel):
    success: bool = True
    message: str | None = None
