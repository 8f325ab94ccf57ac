"""
Physical patch produced by change routing.
"""
from typing import Any

from pydantic import BaseModel, Field

from user_adapter.models.document import UserDocument


class Patch(BaseModel):
    """Field assignments split by nesting level."""
    top_level_fields: dict[str, Any] = Field(
        default_factory=dict,
        description="Top-level physical field -> new value"
    )
    profile_fields: dict[str, Any] = Field(
        default_factory=dict,
        description="Profile key (un-prefixed) -> new value"
    )

    @property
    def is_empty(self) -> bool:
        return not self.top_level_fields and not self.profile_fields

    def apply_to(self, document: UserDocument) -> UserDocument:
        """
        Merge the patch onto a document.

        Profile keys are set one by one so sibling profile fields survive.
        """
        for field, value in self.top_level_fields.items():
            document.set(field, value)
        for key, value in self.profile_fields.items():
            document.set_profile(key, value)
        return document
