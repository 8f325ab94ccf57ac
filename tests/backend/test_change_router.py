"""
Tests for write-side change routing.

These tests cover:
- Top-level versus profile placement
- Semantic and physical change keys
- Dropped keys and strict mode
- Empty changes
- Applying patches to documents
"""

import pytest


def _registered(schema, options=None):
    from user_adapter.services.options_resolver import resolve_options
    from user_adapter.services.schema_planner import register_schema

    resolved = resolve_options(options)
    register_schema(schema, resolved)
    return resolved


class TestPlacement:
    """Tests for where routed values land."""

    def test_login_attempts_go_top_level(self, profile_schema):
        """loginAttempts should route to the top level."""
        from user_adapter.services.change_router import route_changes

        options = _registered(profile_schema, {"useProfile": True})

        patch = route_changes({"loginAttempts": 3}, profile_schema, options)

        assert patch.top_level_fields == {"loginAttempts": 3}
        assert patch.profile_fields == {}

    def test_username_goes_to_profile(self, profile_schema):
        """username should route into the profile."""
        from user_adapter.services.change_router import route_changes

        options = _registered(profile_schema, {"useProfile": True})

        patch = route_changes({"username": "bob"}, profile_schema, options)

        assert patch.profile_fields == {"username": "bob"}
        assert patch.top_level_fields == {}

    def test_username_goes_top_level_without_profile(self, empty_schema):
        """username should route top level in flat mode."""
        from user_adapter.services.change_router import route_changes

        options = _registered(empty_schema)

        patch = route_changes({"username": "bob", "email": "b@example.com"}, empty_schema, options)

        assert patch.top_level_fields == {"username": "bob", "email": "b@example.com"}

    def test_semantic_keys_use_configured_names(self, empty_schema):
        """Semantic keys should map to configured physical names."""
        from user_adapter.services.change_router import route_changes

        options = _registered(empty_schema, {"loginAttemptsField": "failedLogins"})

        patch = route_changes({"loginAttempts": 5}, empty_schema, options)

        assert patch.top_level_fields == {"failedLogins": 5}

    def test_physical_keys_used_verbatim(self, profile_schema):
        """Non-semantic keys are looked up as physical names."""
        from user_adapter.services.change_router import route_changes

        options = _registered(profile_schema, {"useProfile": True})

        patch = route_changes({"displayName": "Bobby", "roles": ["admin"]}, profile_schema, options)

        assert patch.profile_fields == {"displayName": "Bobby"}
        assert patch.top_level_fields == {"roles": ["admin"]}

    def test_profile_mapping_split_into_profile_keys(self, profile_schema):
        """A mapping under the profile field should route key by key."""
        from user_adapter.services.change_router import route_changes

        options = _registered(profile_schema, {"useProfile": True})

        patch = route_changes(
            {"profile": {"username": "Carol", "email": "carol@example.com"}, "loginAttempts": 2},
            profile_schema,
            options,
        )

        assert patch.top_level_fields == {"loginAttempts": 2}
        assert patch.profile_fields == {"username": "Carol", "email": "carol@example.com"}

    def test_profile_mapping_drops_undeclared_keys(self, profile_schema):
        """Undeclared keys inside a profile mapping should be dropped."""
        from user_adapter.services.change_router import route_changes

        options = _registered(profile_schema, {"useProfile": True})

        patch = route_changes({"profile": {"nickname": "cc", "displayName": "C"}}, profile_schema, options)

        assert patch.top_level_fields == {}
        assert patch.profile_fields == {"displayName": "C"}

    def test_profile_mapping_strict_mode(self, profile_schema):
        """Strict mode should reject undeclared keys inside a profile mapping."""
        from user_adapter.core.exceptions import UnknownChangeKeyError
        from user_adapter.services.change_router import route_changes

        options = _registered(profile_schema, {"useProfile": True, "strictChanges": True})

        with pytest.raises(UnknownChangeKeyError) as exc_info:
            route_changes({"profile": {"nickname": "cc"}}, profile_schema, options)

        assert exc_info.value.key == "profile.nickname"


class TestUnmappedKeys:
    """Tests for keys that match no declared field."""

    def test_unknown_keys_dropped(self, empty_schema):
        """Unknown keys should be dropped."""
        from user_adapter.services.change_router import route_changes

        options = _registered(empty_schema)

        patch = route_changes({"usernmae": "typo", "salt": "s"}, empty_schema, options)

        assert patch.top_level_fields == {"salt": "s"}
        assert patch.profile_fields == {}

    def test_identity_keys_dropped(self, empty_schema):
        """Identity keys should never be routed."""
        from user_adapter.services.change_router import route_changes

        options = _registered(empty_schema)

        patch = route_changes({"_id": "x", "id": "y"}, empty_schema, options)

        assert patch.is_empty

    def test_strict_mode_rejects_unknown_keys(self, empty_schema):
        """Strict mode should raise UnknownChangeKeyError."""
        from user_adapter.core.exceptions import UnknownChangeKeyError
        from user_adapter.services.change_router import route_changes

        options = _registered(empty_schema, {"strictChanges": True})

        with pytest.raises(UnknownChangeKeyError) as exc_info:
            route_changes({"usernmae": "typo"}, empty_schema, options)

        assert exc_info.value.key == "usernmae"

    def test_profile_keys_dropped_without_profile_mode(self, profile_schema):
        """Profile paths are only routed in profile mode."""
        from user_adapter.services.change_router import route_changes
        from user_adapter.services.options_resolver import resolve_options

        options = resolve_options()

        patch = route_changes({"displayName": "Bob"}, profile_schema, options)

        assert patch.is_empty


class TestEmptyChanges:
    """Tests for empty and absent change objects."""

    @pytest.mark.parametrize("changes", [None, {}])
    def test_empty_changes_give_empty_patch(self, empty_schema, changes):
        """Empty changes should give an empty patch."""
        from user_adapter.services.change_router import route_changes

        options = _registered(empty_schema)

        patch = route_changes(changes, empty_schema, options)

        assert patch.top_level_fields == {}
        assert patch.profile_fields == {}
        assert patch.is_empty


class TestApplyPatch:
    """Tests for merging patches onto documents."""

    def test_profile_keys_set_not_replaced(self, profile_schema, mock_profile_user):
        """Profile keys should be set, not the profile replaced."""
        from user_adapter.models.document import UserDocument
        from user_adapter.services.change_router import route_changes

        options = _registered(profile_schema, {"useProfile": True})
        document = UserDocument(
            mock_profile_user, schema=profile_schema, profile_field="profile", is_new=False
        )

        route_changes({"username": "Robert"}, profile_schema, options).apply_to(document)

        assert document.get("profile.username") == "robert"
        assert document.get("profile.displayName") == "Bob"
        assert document.get("profile.googleId") == "g-1234"
        assert document.modified_paths == ["profile.username"]

    def test_profile_mapping_keeps_siblings(self, profile_schema, mock_profile_user):
        """Applying a profile mapping should leave other profile keys alone."""
        from user_adapter.models.document import UserDocument
        from user_adapter.services.change_router import route_changes

        options = _registered(profile_schema, {"useProfile": True})
        document = UserDocument(
            mock_profile_user, schema=profile_schema, profile_field="profile", is_new=False
        )

        route_changes({"profile": {"username": "Robert"}}, profile_schema, options).apply_to(document)

        assert document.get("profile.username") == "robert"
        assert document.get("profile.displayName") == "Bob"
        assert document.modified_paths == ["profile.username"]

    def test_username_setters_applied(self, empty_schema):
        """Applied usernames should be trimmed and lower-cased."""
        from user_adapter.models.document import UserDocument
        from user_adapter.services.change_router import route_changes

        options = _registered(empty_schema)
        document = UserDocument(schema=empty_schema)

        route_changes({"username": "  Alice "}, empty_schema, options).apply_to(document)

        assert document.get("username") == "alice"

    def test_lowercase_disabled_keeps_case(self, empty_schema):
        """Applied usernames should keep case when lower-casing is off."""
        from user_adapter.models.document import UserDocument
        from user_adapter.services.change_router import route_changes

        options = _registered(empty_schema, {"usernameLowerCase": False})
        document = UserDocument(schema=empty_schema)

        route_changes({"username": "Alice"}, empty_schema, options).apply_to(document)

        assert document.get("username") == "Alice"
