"""
Pydantic models and document types used by the adapter.
"""
from user_adapter.models.options import AdapterOptions, SemanticField
from user_adapter.models.schema import FieldType, SchemaField, UserSchema
from user_adapter.models.document import UserDocument
from user_adapter.models.plan import FieldPlan, SchemaRegistration
from user_adapter.models.patch import Patch

__all__ = [
    "AdapterOptions",
    "SemanticField",
    "FieldType",
    "SchemaField",
    "UserSchema",
    "UserDocument",
    "FieldPlan",
    "SchemaRegistration",
    "Patch",
]
