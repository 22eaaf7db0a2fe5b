from typing import Optional
from pydantic import BaseModel, constr, field_validator
from app.utils.validation import blank_to_none


class IdentityProfilePatch(BaseModel):
    """Self-editable identity fields; only slots present in the body are applied."""

    name: Optional[constr(max_length=120)] = None
    address: Optional[constr(max_length=255)] = None
    # stored as a path; uploads are handled elsewhere
    profile_image: Optional[constr(max_length=255)] = None

    @field_validator("name", "address", "profile_image", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)
