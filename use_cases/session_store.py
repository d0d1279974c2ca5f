"""Owned holder of the authenticated identity for one browser session."""

from typing import MutableMapping, Optional

from use_cases.session_models import Identity

AUTH_USER_KEY = "auth_user"


class SessionStore:
    """
    Wraps a session mapping (``st.session_state`` in the app, a dict in tests).
    Writes are full replacements; reads are plain snapshots.
    """

    def __init__(self, state: MutableMapping, key: str = AUTH_USER_KEY):
        self._state = state
        self._key = key
        if key not in state:
            state[key] = None

    def get(self) -> Optional[Identity]:
        return self._state.get(self._key)

    def set(self, identity: Identity) -> None:
        if not isinstance(identity, Identity):
            raise TypeError(f"SessionStore accepts Identity, got {type(identity).__name__}")
        self._state[self._key] = identity

    def clear(self) -> None:
        self._state[self._key] = None
