"""Schemas for user API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator


class UserRegister(BaseModel):
    user_id: str
    email: EmailStr
    display_name: str | None = None


class UserProfileUpdate(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    display_name: str | None = None
    username: str | None = None
    email_verified: bool | None = None
    photo_url: str | None = None
    github: str | None = None
    linkedin: str | None = None
    x_link: str | None = None
    website: str | None = None
    organization: str | None = None

    @field_validator("email_verified")
    @classmethod
    def email_verified_not_null(cls, value: bool | None) -> bool:
        if value is None:
            msg = "email_verified cannot be null"
            raise ValueError(msg)
        return value


class UserProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    email: str
    username: str | None = None
    display_name: str | None = None
    email_verified: bool = False
    photo_url: str | None = None
    github: str | None = None
    linkedin: str | None = None
    x_link: str | None = None
    website: str | None = None
    organization: str | None = None
    created_at: datetime | None = None


class FriendResponse(BaseModel):
    user_id: str
    username: str | None = None
    display_name: str | None = None
    photo_url: str | None = None
    since: datetime | None = None


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    notification_id: int
    message: str
    type: str
    is_read: bool
    created_at: datetime | None = None
