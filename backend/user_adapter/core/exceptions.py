"""
Exception hierarchy for the user adapter.

Configuration-shape errors are raised synchronously while the adapter is
being set up. Driver errors raised by the document store are never wrapped.
"""


class UserAdapterError(Exception):
    """Base class for every error raised by the adapter itself."""


class ConfigurationError(UserAdapterError, ValueError):
    """The adapter, its options or its schema are not set up correctly."""


class InvalidOptionsError(ConfigurationError):
    """An option value has the wrong shape."""


class MissingConnectionURIError(ConfigurationError):
    """A connection was requested without a MongoDB URI."""

    def __init__(self, message: str = "MissingConnectionURIError: no mongoURI configured"):
        super().__init__(message)


class MissingSchemaError(ConfigurationError):
    """Schema planning was invoked without a target schema."""

    def __init__(self, message: str = "MissingSchemaError: no schema to extend"):
        super().__init__(message)


class MissingUserProfileError(ConfigurationError):
    """Profile mode is on but the schema has no profile container."""

    def __init__(self, profile_field: str = "profile"):
        self.profile_field = profile_field
        super().__init__(
            f"MissingUserProfileError: schema declares no '{profile_field}' sub-document"
        )


class MissingUsernameInProfileError(ConfigurationError):
    """The profile container exists but declares no username path."""

    def __init__(self, path: str = "profile.username"):
        self.path = path
        super().__init__(f"MissingUsernameInProfileError: '{path}' is not declared")


class MissingEmailInProfileError(ConfigurationError):
    """The profile container exists but declares no email path."""

    def __init__(self, path: str = "profile.email"):
        self.path = path
        super().__init__(f"MissingEmailInProfileError: '{path}' is not declared")


class PlanNotRegisteredError(ConfigurationError):
    """The facade was used before its field plan was applied to the live schema."""

    def __init__(
        self,
        message: str = (
            "PlanNotRegisteredError: call register_schema() on the store schema "
            "before using the adapter"
        ),
    ):
        super().__init__(message)


class UnknownChangeKeyError(UserAdapterError, KeyError):
    """A change key maps to no declared field (strict mode only)."""

    def __init__(self, key: str, physical_name: str):
        self.key = key
        self.physical_name = physical_name
        super().__init__(f"Unknown change key '{key}' (field '{physical_name}')")

    def __str__(self) -> str:
        return self.args[0]
