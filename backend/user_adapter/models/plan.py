"""
Field plan produced by schema planning and the registration handle.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from user_adapter.models.options import AdapterOptions
from user_adapter.models.schema import FieldType, SchemaField, UserSchema


class FieldPlan(BaseModel):
    """Schema declarations the adapter adds to a host schema."""
    fields: dict[str, SchemaField] = Field(
        default_factory=dict,
        description="New top-level declarations"
    )
    profile_field: Optional[str] = Field(None, description="Profile container path in profile mode")
    profile_fields: dict[str, SchemaField] = Field(
        default_factory=dict,
        description="New declarations inside the profile container"
    )

    @property
    def is_empty(self) -> bool:
        return not self.fields and not self.profile_fields

    def as_schema_fields(self) -> dict[str, SchemaField]:
        """Declarations in the shape ``UserSchema.add`` takes."""
        declarations = dict(self.fields)
        if self.profile_field and self.profile_fields:
            declarations[self.profile_field] = SchemaField(
                type=FieldType.OBJECT,
                fields=dict(self.profile_fields),
            )
        return declarations

    def paths(self) -> list[str]:
        """Every dotted path the plan declares."""
        paths = list(self.fields)
        paths.extend(f"{self.profile_field}.{name}" for name in self.profile_fields)
        return paths


class SchemaRegistration(BaseModel):
    """
    Proof that a field plan was applied to a live schema.

    Returned by ``register_schema`` and required by the adapter facade.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    user_schema: UserSchema
    options: AdapterOptions
    plan: FieldPlan

    def covers(self, schema: UserSchema) -> bool:
        """Whether this registration applies to the given live schema."""
        return self.user_schema is schema and all(path in schema for path in self.plan.paths())
