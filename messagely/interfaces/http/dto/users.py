from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from messagely.domain.users.entities import Profile, UserDetail


class ProfileDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    username: str
    first_name: str
    last_name: str
    phone: str

    @classmethod
    def from_entity(cls, profile: Profile) -> ProfileDTO:
        return cls.model_validate(profile)


class UserDetailDTO(ProfileDTO):
    joined_at: datetime
    last_login_at: datetime | None

    @classmethod
    def from_entity(cls, user: UserDetail) -> UserDetailDTO:  # type: ignore[override]
        return cls.model_validate(user)


class UpdateProfileRequestDTO(BaseModel):
    first_name: str | None = Field(None, min_length=1, max_length=128)
    last_name: str | None = Field(None, min_length=1, max_length=128)
    phone: str | None = Field(None, min_length=1, max_length=32)

    @model_validator(mode="after")
    def _require_change(self) -> UpdateProfileRequestDTO:
        if self.first_name is None and self.last_name is None and self.phone is None:
            raise ValueError("At least one of first_name, last_name or phone is required")
        return self
