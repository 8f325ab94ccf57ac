"""
Read-side projection of stored user documents into caller-visible views.
"""
from typing import Any, Mapping, Optional, Sequence, Union

from user_adapter.models.document import UserDocument, to_plain
from user_adapter.models.options import AdapterOptions

IDENTITY_FIELDS = ("_id", "id")

Projectable = Union[UserDocument, Mapping[str, Any]]


def _snapshot(document: Projectable) -> dict[str, Any]:
    if isinstance(document, UserDocument):
        return document.snapshot()
    return to_plain(dict(document))


def _passes(field: str, included: Sequence[str], excluded: Sequence[str]) -> bool:
    """Inclusion list wins, then exclusion list, then everything passes."""
    if included:
        return field in included
    if excluded:
        return field not in excluded
    return True


def _filter(
    values: Mapping[str, Any],
    included: Sequence[str],
    excluded: Sequence[str],
) -> dict[str, Any]:
    return {
        field: value
        for field, value in values.items()
        if _passes(field, included, excluded)
    }


def _project_profile_values(options: AdapterOptions, profile: dict[str, Any]) -> dict[str, Any]:
    if options.profile_projector is not None:
        return options.profile_projector(profile)
    return _filter(profile, options.included_profile_fields, options.excluded_profile_fields)


def project_profile(options: AdapterOptions, document: Projectable) -> Optional[dict[str, Any]]:
    """
    Project the profile sub-document of a user.

    Returns None when the document has no profile mapping.
    """
    profile = _snapshot(document).get(options.profile_field)
    if not isinstance(profile, dict):
        return None
    return _project_profile_values(options, profile)


def project(options: AdapterOptions, document: Projectable) -> dict[str, Any]:
    """
    Project a user document into a plain view.

    The store identity is exposed as ``id`` and is never filtered. The
    remaining top-level fields go through includedFields/excludedFields and
    the profile, when it survives that filter, through the profile rules.

    Args:
        options: Resolved adapter options
        document: Stored document, or an already projected view

    Returns:
        Plain dict safe to hand to callers
    """
    values = _snapshot(document)

    identity = values.get("_id", values.get("id"))
    fields = {
        field: value
        for field, value in values.items()
        if field not in IDENTITY_FIELDS
    }

    view = _filter(fields, options.included_fields, options.excluded_fields)

    profile = view.get(options.profile_field)
    if isinstance(profile, dict):
        view[options.profile_field] = _project_profile_values(options, profile)

    view["id"] = identity
    return view
