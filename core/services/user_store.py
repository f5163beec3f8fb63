# =============================================================================
# core/services/user_store.py - In-Memory User Store
# =============================================================================
# Holds the process-wide user collection and the next-id counter.
#
# The store is owned by the FastAPI application (app.state.user_store) and
# injected into route handlers through app.dependencies. Handlers may run
# concurrently (async handlers on the event loop, sync code in the thread
# pool), so every read and write goes through a single lock.
#
# Usage:
#   store = UserStore.with_sample_data()
#   user = store.create_user("Ann", "ann@x.com")
#   store.get_user(user.id)
# =============================================================================

import logging
import threading
from datetime import datetime, timedelta, timezone

from core.models.user import User

logger = logging.getLogger(__name__)


# Seed records loaded at startup: (name, email, age of the record)
SAMPLE_USERS: list[tuple[str, str, timedelta]] = [
    ("John Doe", "john@example.com", timedelta(hours=24)),
    ("Jane Smith", "jane@example.com", timedelta(hours=12)),
]


class UserStore:
    """
    Thread-safe, append-only collection of users.

    Ids are assigned from a monotonic counter that starts at 1, is bumped
    exactly once per successful creation and is never decremented.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._users: list[User] = []
        self._next_id = 1

    @classmethod
    def with_sample_data(cls) -> "UserStore":
        """
        Create a store pre-populated with the two sample users.

        The sample users get ids 1 and 2 and creation times in the past,
        so the first user created through the API gets id 3.
        """
        store = cls()
        now = datetime.now(timezone.utc)
        for name, email, age in SAMPLE_USERS:
            store._append(name, email, created_at=now - age)
        logger.debug(f"Loaded {len(SAMPLE_USERS)} sample users")
        return store

    def list_users(self) -> list[User]:
        """Return a snapshot of all users in insertion order."""
        with self._lock:
            return list(self._users)

    def get_user(self, user_id: int) -> User | None:
        """
        Find a user by id.

        Returns:
            The matching user, or None if no user has that id
        """
        with self._lock:
            for user in self._users:
                if user.id == user_id:
                    return user
        return None

    def create_user(self, name: str, email: str) -> User:
        """
        Append a new user stamped with the current time.

        Callers are responsible for validating name/email beforehand;
        this method always succeeds.
        """
        user = self._append(name, email, created_at=datetime.now(timezone.utc))
        logger.info(f"Created user {user.id}")
        return user

    @property
    def next_id(self) -> int:
        """The id the next created user will receive."""
        with self._lock:
            return self._next_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def _append(self, name: str, email: str, created_at: datetime) -> User:
        # Id allocation and append happen under one lock acquisition
        with self._lock:
            user = User(
                id=self._next_id,
                name=name,
                email=email,
                created_at=created_at,
            )
            self._next_id += 1
            self._users.append(user)
            return user
