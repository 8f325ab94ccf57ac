"""
Write-side routing of logical changes into a physical patch.
"""
import logging
from typing import Any, Mapping, Optional

from user_adapter.core.exceptions import UnknownChangeKeyError
from user_adapter.models.options import AdapterOptions
from user_adapter.models.patch import Patch
from user_adapter.models.schema import UserSchema

logger = logging.getLogger(__name__)


def route_changes(
    changes: Optional[Mapping[str, Any]],
    schema: UserSchema,
    options: AdapterOptions,
) -> Patch:
    """
    Split a changes object into top-level and profile assignments.

    Keys are semantic names (``loginAttempts``) or physical names. A key
    whose physical name is declared at the top level goes to the top-level
    fields, one declared inside the profile goes to the profile fields.
    In profile mode a mapping given under the profile field is split into
    its keys, so the container is patched rather than replaced. Anything
    else is dropped, unless strictChanges is set.

    Args:
        changes: Logical changes, may be None or empty
        schema: Live schema the adapter was registered on
        options: Resolved adapter options

    Returns:
        Patch with the physical assignments

    Raises:
        UnknownChangeKeyError: In strict mode, for a key matching no declared path
    """
    patch = Patch()
    if not changes:
        return patch

    profile_schema = schema.sub_schema(options.profile_field) if options.use_profile else None

    for key, value in changes.items():
        field = options.physical_name(key)

        if profile_schema is not None and field == options.profile_field and isinstance(value, Mapping):
            for sub_key, sub_value in value.items():
                _route_profile_key(
                    patch, profile_schema, options,
                    f"{key}.{sub_key}", options.physical_name(sub_key), sub_value,
                )
            continue

        if field in schema.fields:
            patch.top_level_fields[field] = value
        elif profile_schema is not None:
            _route_profile_key(patch, profile_schema, options, key, field, value)
        elif options.strict_changes:
            raise UnknownChangeKeyError(key, field)
        else:
            logger.debug(f"Dropping unmapped change key '{key}'")

    return patch


def _route_profile_key(
    patch: Patch,
    profile_schema: dict,
    options: AdapterOptions,
    key: str,
    field: str,
    value: Any,
) -> None:
    if field in profile_schema:
        patch.profile_fields[field] = value
    elif options.strict_changes:
        raise UnknownChangeKeyError(key, field)
    else:
        logger.debug(f"Dropping unmapped change key '{key}'")
