"""
User model for the InfoBooks loan service.

Users borrow books. They are looked up by their normalized national ID at
login and by their internal id when a loan is created or returned. Users are
never deleted: admins deactivate them instead, which blocks both login and
new loans.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils import new_identifier


class User(BaseModel):
    """
    Represents a registered library user.

    ``secret_hash`` holds a salted digest of the user's credential, never the
    credential itself.
    """

    id: str = Field(
        default_factory=new_identifier,
        description="Unique identifier for the user (UUID4)",
    )

    name: str = Field(
        ...,
        description="Display name of the user",
        min_length=1,
        max_length=200,
        examples=["Miguel Silva Santos", "Lenitha Borges"],
    )

    national_id: str = Field(
        ...,
        description="National ID with formatting removed, used as the login key",
        pattern=r"^[0-9]+$",
        examples=["45863258207", "09835633304"],
    )

    secret_hash: str = Field(
        ...,
        description="Salted digest of the user's credential",
        repr=False,
    )

    is_admin: bool = Field(
        default=False,
        description="Whether the user may run administrative operations",
    )

    active: bool = Field(
        default=True,
        description="Whether the user may log in and borrow books",
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Name cannot be blank")
        return stripped

    def to_profile(self) -> "UserProfile":
        return UserProfile(
            id=self.id,
            name=self.name,
            national_id=self.national_id,
            is_admin=self.is_admin,
            active=self.active,
        )

    model_config = ConfigDict(
        validate_assignment=True,
        json_schema_extra={
            "example": {
                "id": "5b0f9c52-8c1f-4a52-9d5e-0f6f2f1a9b10",
                "name": "Miguel Silva Santos",
                "national_id": "45863258207",
                "is_admin": False,
                "active": True,
            }
        },
    )


class UserProfile(BaseModel):
    """Public view of a user returned after a successful login."""

    id: str
    name: str
    national_id: str
    is_admin: bool
    active: bool
