"""
Options resolution: caller options merged over the compiled-in defaults.
"""
from typing import Any, Mapping, Union

from pydantic import ValidationError

from user_adapter.core.exceptions import InvalidOptionsError, MissingConnectionURIError
from user_adapter.models.options import AdapterOptions


DEFAULT_OPTIONS: dict[str, Any] = {
    "mongoURI": None,
    "mongoOptions": {},
    "databaseName": None,
    "collectionName": None,
    "includedFields": [],
    "excludedFields": [],
    "includedProfileFields": [],
    "excludedProfileFields": [],
    "profileProjector": None,
    "usernameUnique": True,
    "usernameLowerCase": True,
    "limitLoginAttempts": True,
    "useProfile": False,
    "createProfile": False,
    "strictChanges": False,
    "profileField": "profile",
    "usernameField": "username",
    "emailField": "email",
    "hashField": "hash",
    "saltField": "salt",
    "lastLoginField": "lastLogin",
    "lastLogoutField": "lastLogout",
    "loginAttemptsField": "loginAttempts",
    "loginAttemptLockTimeField": "loginAttemptLockTime",
    "resetPasswordHashField": "resetPasswordHash",
    "resetPasswordExpirationField": "resetPasswordExpiration",
    "signupField": "signup",
    "externalIdFields": [],
}

FLAG_OPTIONS = [key for key, value in DEFAULT_OPTIONS.items() if isinstance(value, bool)]
FIELD_OPTIONS = [key for key in DEFAULT_OPTIONS if key.endswith("Field")]
LIST_OPTIONS = [key for key, value in DEFAULT_OPTIONS.items() if isinstance(value, list)]

# attribute name (username_field) -> option name (usernameField)
_OPTION_NAMES = {
    name: field.alias or name for name, field in AdapterOptions.model_fields.items()
}


def _option_name(key: str) -> str:
    return _OPTION_NAMES.get(key, key)


def _flag(value: Any, default: bool) -> bool:
    """Explicit booleans are kept; anything else falls back to the default."""
    if value is True or value is False:
        return value
    return default


def resolve_options(
    user_options: Union[Mapping[str, Any], AdapterOptions, None] = None,
    *,
    enforce_connection_uri: bool = False,
) -> AdapterOptions:
    """
    Resolve caller options into a complete, validated configuration.

    The merge is shallow: a caller key replaces the default value of that
    key wholesale.

    Args:
        user_options: Sparse options keyed by option name (usernameField)
            or attribute name (username_field)
        enforce_connection_uri: Require a mongoURI to be present

    Returns:
        Immutable AdapterOptions

    Raises:
        MissingConnectionURIError: If enforce_connection_uri is set and no URI is given
        InvalidOptionsError: If an option value has the wrong shape
    """
    if isinstance(user_options, AdapterOptions):
        supplied = user_options.model_dump(by_alias=True)
    else:
        supplied = {_option_name(key): value for key, value in (user_options or {}).items()}

    merged = {**DEFAULT_OPTIONS, **supplied}

    for key in FIELD_OPTIONS:
        value = merged[key]
        if value is None or value == "":
            merged[key] = DEFAULT_OPTIONS[key]
        elif not isinstance(value, str):
            raise InvalidOptionsError(f"{key} must be a non-empty string, got {value!r}")

    for key in FLAG_OPTIONS:
        merged[key] = _flag(merged.get(key), DEFAULT_OPTIONS[key])

    for key in LIST_OPTIONS:
        value = merged[key]
        if value is None:
            merged[key] = []
        elif isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
            raise InvalidOptionsError(f"{key} must be a list of field names, got {value!r}")

    if merged["mongoOptions"] is None:
        merged["mongoOptions"] = {}

    projector = merged["profileProjector"]
    if projector is not None and not callable(projector):
        raise InvalidOptionsError("profileProjector must be callable")

    if enforce_connection_uri and not merged.get("mongoURI"):
        raise MissingConnectionURIError()

    try:
        return AdapterOptions.model_validate(merged)
    except ValidationError as exc:
        raise InvalidOptionsError(str(exc)) from exc
