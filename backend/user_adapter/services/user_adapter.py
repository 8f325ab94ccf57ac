"""
User adapter facade.

Gives applications a uniform, option-driven view of user documents:
writes go through change routing, reads through projection, and
persistence is delegated to the store.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union

from bson import ObjectId

from user_adapter.core.exceptions import MissingConnectionURIError, PlanNotRegisteredError
from user_adapter.core.logging import setup_logging
from user_adapter.database.store import MotorUserStore
from user_adapter.models.document import UserDocument
from user_adapter.models.options import AdapterOptions, SemanticField
from user_adapter.models.plan import SchemaRegistration
from user_adapter.models.schema import UserSchema
from user_adapter.services.change_router import route_changes
from user_adapter.services.options_resolver import resolve_options
from user_adapter.services.projector import project, project_profile
from user_adapter.services.schema_planner import register_schema

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


class UserAdapter:
    """Facade over a user store configured by AdapterOptions."""

    def __init__(
        self,
        store: MotorUserStore,
        options: AdapterOptions,
        registration: Optional[SchemaRegistration] = None,
    ):
        """
        Initialize with a store and the registration of its schema.

        The registration is checked on first use rather than here, so a
        facade can be built before the host wires the schema.
        """
        self.store = store
        self.options = options
        self.registration = registration

    @property
    def schema(self) -> UserSchema:
        return self.store.schema

    @property
    def profile_field(self) -> Optional[str]:
        return self.options.profile_field if self.options.use_profile else None

    def _require_registration(self) -> None:
        registration = self.registration
        if registration is None or not registration.covers(self.store.schema):
            raise PlanNotRegisteredError()
        if registration.options != self.options:
            raise PlanNotRegisteredError(
                "PlanNotRegisteredError: the schema was registered with different options"
            )

    # ==================== Connection ====================

    async def connect(self) -> None:
        """
        Connect the store with the configured mongoURI and mongoOptions.

        Raises:
            MissingConnectionURIError: If no mongoURI is configured
            PlanNotRegisteredError: If the schema was never registered
        """
        self._require_registration()
        if not self.options.mongo_uri:
            raise MissingConnectionURIError()
        await self.store.connect(self.options.mongo_uri, dict(self.options.mongo_options))

    # ==================== Writes ====================

    async def create(self, props: Optional[Mapping[str, Any]]) -> UserDocument:
        """
        Create and persist a new user.

        Props are routed like changes; the signup timestamp is stamped
        unless given.
        """
        self._require_registration()
        patch = route_changes(props, self.schema, self.options)

        user = self.store.new_document(profile_field=self.profile_field)
        patch.apply_to(user)

        signup_field = self.options.signup_field
        if signup_field in self.schema.fields and user.get(signup_field) is None:
            user.set(signup_field, _now_ms())

        return await self.store.save(user)

    async def update(self, user: UserDocument, changes: Optional[Mapping[str, Any]]) -> UserDocument:
        """
        Apply logical changes to a user and persist them.

        Without changes, or when no change key maps to a declared field,
        the user is returned untouched and nothing is written.
        """
        self._require_registration()
        if not changes:
            return user

        patch = route_changes(changes, self.schema, self.options)
        if patch.is_empty:
            return user

        patch.apply_to(user)
        return await self.store.save(user)

    async def update_profile(
        self, user: UserDocument, changes: Optional[Mapping[str, Any]]
    ) -> UserDocument:
        """Alias of update: routing already places profile keys."""
        return await self.update(user, changes)

    # ==================== Lookups ====================

    async def _find_one(self, query: dict[str, Any]) -> Optional[UserDocument]:
        self._require_registration()
        return await self.store.find_one(query, profile_field=self.profile_field)

    async def find_by_id(self, user_id: Union[str, ObjectId, None]) -> Optional[UserDocument]:
        """Get user by id; malformed ids find nothing."""
        self._require_registration()
        if isinstance(user_id, ObjectId):
            object_id = user_id
        elif isinstance(user_id, str) and ObjectId.is_valid(user_id):
            object_id = ObjectId(user_id)
        else:
            return None
        return await self._find_one({"_id": object_id})

    async def find_by_username(self, username: Optional[str]) -> Optional[UserDocument]:
        """
        Get user by username.

        The query value goes through the setters the live schema applies
        to the username on write, so lookups match what was stored.
        """
        path = self.options.document_path(SemanticField.USERNAME)
        return await self._find_one({path: self.schema.cast(path, username)})

    async def find_by_email(self, email: Optional[str]) -> Optional[UserDocument]:
        path = self.options.document_path(SemanticField.EMAIL)
        return await self._find_one({path: self.schema.cast(path, email)})

    async def find_by_external_id(self, field: str, value: Any) -> Optional[UserDocument]:
        """Get user by one identity-provider id, e.g. ("googleId", "1234")."""
        return await self._find_one({self.options.external_id_path(field): value})

    async def find_by_external_ids(self, ids: Mapping[str, Any]) -> Optional[UserDocument]:
        """Get the user matching any of several identity-provider ids."""
        clauses = [
            {self.options.external_id_path(field): value}
            for field, value in ids.items()
            if value is not None
        ]
        if not clauses:
            self._require_registration()
            return None
        return await self._find_one({"$or": clauses})

    async def find_by_reset_password_hash(self, reset_hash: str) -> Optional[UserDocument]:
        return await self._find_one(
            {self.options.document_path(SemanticField.RESET_PASSWORD_HASH): reset_hash}
        )

    # ==================== Views ====================

    def serialize(self, user: UserDocument) -> dict[str, Any]:
        """Caller-visible view of a user."""
        self._require_registration()
        return project(self.options, user)

    def get_profile(self, user: UserDocument) -> Optional[dict[str, Any]]:
        """Caller-visible view of the user's profile, if any."""
        self._require_registration()
        return project_profile(self.options, user)

    # ==================== Field getters ====================

    def _get(self, user: UserDocument, semantic: SemanticField) -> Any:
        self._require_registration()
        return user.get(self.options.document_path(semantic))

    def get_id(self, user: UserDocument) -> Optional[str]:
        return user.id

    def get_salt(self, user: UserDocument) -> Optional[str]:
        return self._get(user, SemanticField.SALT)

    def get_hash(self, user: UserDocument) -> Optional[str]:
        return self._get(user, SemanticField.HASH)

    def get_login_attempts(self, user: UserDocument) -> Optional[int]:
        return self._get(user, SemanticField.LOGIN_ATTEMPTS)

    def get_login_attempt_lock_time(self, user: UserDocument) -> Optional[int]:
        return self._get(user, SemanticField.LOGIN_ATTEMPT_LOCK_TIME)

    def get_last_login(self, user: UserDocument) -> Optional[int]:
        return self._get(user, SemanticField.LAST_LOGIN)

    def get_last_logout(self, user: UserDocument) -> Optional[int]:
        return self._get(user, SemanticField.LAST_LOGOUT)

    def get_reset_password_expiration(self, user: UserDocument) -> Optional[int]:
        return self._get(user, SemanticField.RESET_PASSWORD_EXPIRATION)

    def get_signup(self, user: UserDocument) -> Optional[int]:
        return self._get(user, SemanticField.SIGNUP)


def create_user_adapter(
    store: MotorUserStore,
    user_options: Union[Mapping[str, Any], AdapterOptions, None] = None,
) -> UserAdapter:
    """
    Resolve options, register the adapter fields on the store schema and
    build the facade in one step.
    """
    setup_logging()
    options = resolve_options(user_options)
    registration = register_schema(store.schema, options)
    logger.debug(f"User adapter ready on {store.database_name}.{store.collection_name}")
    return UserAdapter(store, options, registration)
