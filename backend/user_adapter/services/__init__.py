"""
Service layer: options, schema planning, projection, change routing and
the adapter facade.
"""
from user_adapter.services.options_resolver import DEFAULT_OPTIONS, resolve_options
from user_adapter.services.schema_planner import plan_schema_fields, register_schema
from user_adapter.services.projector import project, project_profile
from user_adapter.services.change_router import route_changes
from user_adapter.services.user_adapter import UserAdapter, create_user_adapter

__all__ = [
    "DEFAULT_OPTIONS",
    "resolve_options",
    "plan_schema_fields",
    "register_schema",
    "project",
    "project_profile",
    "route_changes",
    "UserAdapter",
    "create_user_adapter",
]
