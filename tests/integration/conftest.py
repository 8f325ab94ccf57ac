"""
Integration test fixtures.

Integration tests wire options, schema registration, projection and
change routing together over an in-memory MongoDB.
"""

import pytest


@pytest.fixture
def host_schema():
    """The schema a host application declares before adding the adapter."""
    from user_adapter.models.schema import FieldType, SchemaField, UserSchema

    return UserSchema({
        "profile": {
            "username": SchemaField(type=FieldType.STRING, trim=True, lowercase=True, unique=True),
            "email": SchemaField(type=FieldType.STRING, trim=True),
            "displayName": FieldType.STRING,
            "avatarUrl": FieldType.STRING,
        },
        "plan": SchemaField(type=FieldType.STRING, default="free"),
    })
