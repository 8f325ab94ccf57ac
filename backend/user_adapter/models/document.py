"""
Document interface between the adapter and the store.

Projection and change routing only talk to ``UserDocument``; the store
decides how the underlying mapping is read and persisted.
"""
import copy
from datetime import datetime
from typing import Any, Optional

from bson import ObjectId

from user_adapter.models.schema import UserSchema


def to_plain(value: Any) -> Any:
    """Deep-copy a stored value into plain Python values (ObjectId -> str)."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    if isinstance(value, datetime):
        return value
    return copy.deepcopy(value)


class UserDocument:
    """
    A user document bound to the schema that declares its paths.

    Writes go through the schema setters and are tracked so the store can
    persist only the touched paths.
    """

    def __init__(
        self,
        data: Optional[dict[str, Any]] = None,
        schema: Optional[UserSchema] = None,
        profile_field: Optional[str] = None,
        is_new: bool = True,
    ):
        self._data: dict[str, Any] = copy.deepcopy(data) if data else {}
        self.schema = schema if schema is not None else UserSchema()
        self.profile_field = profile_field
        self.is_new = is_new
        self._modified: list[str] = []

    def __repr__(self) -> str:
        return f"UserDocument(id={self.id!r}, new={self.is_new})"

    @property
    def id(self) -> Optional[str]:
        """Store identity as a string, None until the document is saved."""
        raw_id = self._data.get("_id")
        return str(raw_id) if raw_id is not None else None

    @property
    def raw_id(self) -> Any:
        return self._data.get("_id")

    @property
    def modified_paths(self) -> list[str]:
        """Dotted paths written since the last save."""
        return list(self._modified)

    def get(self, path: str, default: Any = None) -> Any:
        """Read a value by dotted path."""
        value: Any = self._data
        for part in path.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def set(self, path: str, value: Any) -> None:
        """Write a top-level value through its schema setters."""
        self._data[path] = self.schema.cast(path, value)
        self._mark(path)

    def get_profile(self, key: str, default: Any = None) -> Any:
        profile = self._data.get(self._require_profile_field())
        if not isinstance(profile, dict):
            return default
        return profile.get(key, default)

    def set_profile(self, key: str, value: Any) -> None:
        """Write one key of the profile sub-document, keeping its siblings."""
        profile_field = self._require_profile_field()
        profile = self._data.get(profile_field)
        if not isinstance(profile, dict):
            profile = {}
            self._data[profile_field] = profile
        path = f"{profile_field}.{key}"
        profile[key] = self.schema.cast(path, value)
        self._mark(path)

    def profile(self) -> Optional[dict[str, Any]]:
        """Plain copy of the profile sub-document, if any."""
        if not self.profile_field:
            return None
        profile = self._data.get(self.profile_field)
        return to_plain(profile) if isinstance(profile, dict) else None

    def snapshot(self) -> dict[str, Any]:
        """Plain-value copy of the whole document."""
        return to_plain(self._data)

    def to_mongo(self) -> dict[str, Any]:
        """The document as it is written to the collection."""
        return copy.deepcopy(self._data)

    def mark_saved(self, raw_id: Any = None) -> None:
        """Called by the store once the document is persisted."""
        if raw_id is not None:
            self._data["_id"] = raw_id
        self.is_new = False
        self._modified = []

    def _mark(self, path: str) -> None:
        if path not in self._modified:
            self._modified.append(path)

    def _require_profile_field(self) -> str:
        if not self.profile_field:
            raise AttributeError("Document has no profile sub-document configured")
        return self.profile_field
