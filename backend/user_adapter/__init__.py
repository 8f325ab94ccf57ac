"""
user-adapter - configurable MongoDB user adapter.

Maps a sparse options object onto a user document schema, projects stored
users into caller-visible views and routes logical changes into patches.
"""
from user_adapter.core.exceptions import (
    UserAdapterError,
    ConfigurationError,
    InvalidOptionsError,
    MissingConnectionURIError,
    MissingSchemaError,
    MissingUserProfileError,
    MissingUsernameInProfileError,
    MissingEmailInProfileError,
    PlanNotRegisteredError,
    UnknownChangeKeyError,
)
from user_adapter.database.store import ConnectionState, MotorUserStore
from user_adapter.models import (
    AdapterOptions,
    FieldType,
    Patch,
    SchemaField,
    SchemaRegistration,
    SemanticField,
    UserDocument,
    UserSchema,
)
from user_adapter.services import (
    UserAdapter,
    create_user_adapter,
    plan_schema_fields,
    project,
    project_profile,
    register_schema,
    resolve_options,
    route_changes,
)

__version__ = "0.1.0"

__all__ = [
    "UserAdapterError",
    "ConfigurationError",
    "InvalidOptionsError",
    "MissingConnectionURIError",
    "MissingSchemaError",
    "MissingUserProfileError",
    "MissingUsernameInProfileError",
    "MissingEmailInProfileError",
    "PlanNotRegisteredError",
    "UnknownChangeKeyError",
    "ConnectionState",
    "MotorUserStore",
    "AdapterOptions",
    "FieldType",
    "Patch",
    "SchemaField",
    "SchemaRegistration",
    "SemanticField",
    "UserDocument",
    "UserSchema",
    "UserAdapter",
    "create_user_adapter",
    "plan_schema_fields",
    "project",
    "project_profile",
    "register_schema",
    "resolve_options",
    "route_changes",
]
