"""
Schema planning: derive the user fields the adapter needs and apply them
to the host's live schema.
"""
import logging
from typing import Optional

from user_adapter.core.exceptions import (
    MissingEmailInProfileError,
    MissingSchemaError,
    MissingUserProfileError,
    MissingUsernameInProfileError,
)
from user_adapter.models.options import AdapterOptions
from user_adapter.models.plan import FieldPlan, SchemaRegistration
from user_adapter.models.schema import FieldType, SchemaField, UserSchema

logger = logging.getLogger(__name__)


def _username_field(options: AdapterOptions) -> SchemaField:
    return SchemaField(
        type=FieldType.STRING,
        trim=True,
        unique=options.username_unique,
        lowercase=options.username_lower_case,
    )


def _identity_fields(options: AdapterOptions) -> dict[str, SchemaField]:
    """Username, email and identity-provider ids, keyed by physical name."""
    fields = {
        options.username_field: _username_field(options),
        options.email_field: SchemaField(type=FieldType.STRING, trim=True),
    }
    for external_id in options.external_id_fields:
        fields.setdefault(external_id, SchemaField(type=FieldType.STRING))
    return fields


def _credential_fields(options: AdapterOptions) -> dict[str, SchemaField]:
    fields = {
        options.hash_field: SchemaField(type=FieldType.STRING),
        options.salt_field: SchemaField(type=FieldType.STRING),
        options.last_login_field: SchemaField(type=FieldType.NUMBER),
        options.last_logout_field: SchemaField(type=FieldType.NUMBER),
        options.reset_password_hash_field: SchemaField(type=FieldType.STRING),
        options.reset_password_expiration_field: SchemaField(type=FieldType.NUMBER),
        options.signup_field: SchemaField(type=FieldType.NUMBER),
    }
    if options.limit_login_attempts:
        fields[options.login_attempts_field] = SchemaField(type=FieldType.NUMBER, default=0)
        fields[options.login_attempt_lock_time_field] = SchemaField(type=FieldType.NUMBER)
    return fields


def _plan_profile(schema: UserSchema, options: AdapterOptions) -> dict[str, SchemaField]:
    """
    Profile declarations missing from the schema.

    A declared profile container must already hold the username and email
    paths; an undeclared one is only created when createProfile is set.
    """
    profile_field = options.profile_field
    declared = schema.sub_schema(profile_field)

    if declared is None:
        if profile_field in schema or not options.create_profile:
            raise MissingUserProfileError(profile_field)
        return _identity_fields(options)

    if options.username_field not in declared:
        raise MissingUsernameInProfileError(f"{profile_field}.{options.username_field}")
    if options.email_field not in declared:
        raise MissingEmailInProfileError(f"{profile_field}.{options.email_field}")

    return {
        name: field
        for name, field in _identity_fields(options).items()
        if name not in declared
    }


def plan_schema_fields(schema: Optional[UserSchema], options: AdapterOptions) -> FieldPlan:
    """
    Work out which fields the adapter must add to a schema.

    Paths the schema already declares are never planned again, so planning
    an already-extended schema returns an empty plan.

    Args:
        schema: The host's live schema
        options: Resolved adapter options

    Returns:
        FieldPlan with the missing top-level and profile declarations

    Raises:
        MissingSchemaError: If no schema is given
        MissingUserProfileError: If profile mode cannot establish a profile container
        MissingUsernameInProfileError: If the profile container lacks a username path
        MissingEmailInProfileError: If the profile container lacks an email path
    """
    if schema is None:
        raise MissingSchemaError()

    planned: dict[str, SchemaField] = {}
    profile_fields: dict[str, SchemaField] = {}

    if options.use_profile:
        profile_fields = _plan_profile(schema, options)
    else:
        planned.update(_identity_fields(options))

    planned.update(_credential_fields(options))

    return FieldPlan(
        fields={name: field for name, field in planned.items() if name not in schema.fields},
        profile_field=options.profile_field if options.use_profile else None,
        profile_fields=profile_fields,
    )


def register_schema(schema: Optional[UserSchema], options: AdapterOptions) -> SchemaRegistration:
    """
    Plan the adapter fields and add them to the live schema.

    Returns the registration handle the adapter facade is built with.
    """
    plan = plan_schema_fields(schema, options)
    schema.add(plan.as_schema_fields())
    logger.debug(f"Registered user schema fields: {plan.paths() or 'none (already extended)'}")
    return SchemaRegistration(user_schema=schema, options=options, plan=plan)
