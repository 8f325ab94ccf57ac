"""
Resolved adapter options.
"""
from enum import Enum
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SemanticField(str, Enum):
    """Logical user fields whose physical names are configurable."""
    USERNAME = "username"
    EMAIL = "email"
    HASH = "hash"
    SALT = "salt"
    LAST_LOGIN = "lastLogin"
    LAST_LOGOUT = "lastLogout"
    LOGIN_ATTEMPTS = "loginAttempts"
    LOGIN_ATTEMPT_LOCK_TIME = "loginAttemptLockTime"
    RESET_PASSWORD_HASH = "resetPasswordHash"
    RESET_PASSWORD_EXPIRATION = "resetPasswordExpiration"
    SIGNUP = "signup"


# SemanticField -> AdapterOptions attribute holding its physical name
FIELD_ATTRIBUTES: dict[SemanticField, str] = {
    SemanticField.USERNAME: "username_field",
    SemanticField.EMAIL: "email_field",
    SemanticField.HASH: "hash_field",
    SemanticField.SALT: "salt_field",
    SemanticField.LAST_LOGIN: "last_login_field",
    SemanticField.LAST_LOGOUT: "last_logout_field",
    SemanticField.LOGIN_ATTEMPTS: "login_attempts_field",
    SemanticField.LOGIN_ATTEMPT_LOCK_TIME: "login_attempt_lock_time_field",
    SemanticField.RESET_PASSWORD_HASH: "reset_password_hash_field",
    SemanticField.RESET_PASSWORD_EXPIRATION: "reset_password_expiration_field",
    SemanticField.SIGNUP: "signup_field",
}

# Fields stored inside the profile sub-document when profile mode is on
PROFILE_FIELDS = frozenset({SemanticField.USERNAME, SemanticField.EMAIL})

ProfileProjector = Callable[[dict[str, Any]], dict[str, Any]]


class AdapterOptions(BaseModel):
    """
    Complete, validated adapter configuration.

    Populated either by the camelCase option names hosts pass in
    (``usernameField``) or by attribute name (``username_field``).
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # Connection
    mongo_uri: Optional[str] = Field(None, alias="mongoURI", description="MongoDB connection URI")
    mongo_options: dict[str, Any] = Field(
        default_factory=dict,
        alias="mongoOptions",
        description="Extra keyword arguments for the Motor client"
    )
    database_name: Optional[str] = Field(None, alias="databaseName")
    collection_name: Optional[str] = Field(None, alias="collectionName")

    # Projection
    included_fields: tuple[str, ...] = Field((), alias="includedFields")
    excluded_fields: tuple[str, ...] = Field((), alias="excludedFields")
    included_profile_fields: tuple[str, ...] = Field((), alias="includedProfileFields")
    excluded_profile_fields: tuple[str, ...] = Field((), alias="excludedProfileFields")
    profile_projector: Optional[ProfileProjector] = Field(
        None,
        alias="profileProjector",
        description="Hook that builds the profile view instead of the default filters"
    )

    # Behaviour flags
    username_unique: bool = Field(True, alias="usernameUnique")
    username_lower_case: bool = Field(True, alias="usernameLowerCase")
    limit_login_attempts: bool = Field(True, alias="limitLoginAttempts")
    use_profile: bool = Field(False, alias="useProfile")
    create_profile: bool = Field(False, alias="createProfile")
    strict_changes: bool = Field(False, alias="strictChanges")

    # Physical field names
    profile_field: str = Field("profile", alias="profileField")
    username_field: str = Field("username", alias="usernameField")
    email_field: str = Field("email", alias="emailField")
    hash_field: str = Field("hash", alias="hashField")
    salt_field: str = Field("salt", alias="saltField")
    last_login_field: str = Field("lastLogin", alias="lastLoginField")
    last_logout_field: str = Field("lastLogout", alias="lastLogoutField")
    login_attempts_field: str = Field("loginAttempts", alias="loginAttemptsField")
    login_attempt_lock_time_field: str = Field(
        "loginAttemptLockTime", alias="loginAttemptLockTimeField"
    )
    reset_password_hash_field: str = Field("resetPasswordHash", alias="resetPasswordHashField")
    reset_password_expiration_field: str = Field(
        "resetPasswordExpiration", alias="resetPasswordExpirationField"
    )
    signup_field: str = Field("signup", alias="signupField")
    external_id_fields: tuple[str, ...] = Field(
        (),
        alias="externalIdFields",
        description="Physical names of identity-provider ids, e.g. googleId"
    )

    def field_name(self, semantic: Union[SemanticField, str]) -> str:
        """Physical name configured for a semantic field."""
        return getattr(self, FIELD_ATTRIBUTES[SemanticField(semantic)])

    def physical_name(self, key: str) -> str:
        """Physical name for a change key: mapped if semantic, verbatim otherwise."""
        try:
            semantic = SemanticField(key)
        except ValueError:
            return key
        return self.field_name(semantic)

    def in_profile(self, semantic: Union[SemanticField, str]) -> bool:
        """Whether a semantic field is stored inside the profile sub-document."""
        return self.use_profile and SemanticField(semantic) in PROFILE_FIELDS

    def document_path(self, semantic: Union[SemanticField, str]) -> str:
        """Dotted document path of a semantic field, as used in queries."""
        name = self.field_name(semantic)
        if self.in_profile(semantic):
            return f"{self.profile_field}.{name}"
        return name

    def external_id_path(self, field: str) -> str:
        """Dotted document path of an identity-provider id field."""
        if self.use_profile:
            return f"{self.profile_field}.{field}"
        return field
