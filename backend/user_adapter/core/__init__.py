"""
Core module - exceptions and logging.
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
from user_adapter.core.logging import setup_logging, LOGGER_NAME

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
    "setup_logging",
    "LOGGER_NAME",
]
