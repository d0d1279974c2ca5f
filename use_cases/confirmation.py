"""Two-step confirmation for destructive actions."""

from typing import MutableMapping, Optional, Tuple

PENDING_CONFIRMATION_KEY = "pending_confirmation"

PendingAction = Tuple[str, str]


class ConfirmationGate:
    def __init__(self, state: MutableMapping, key: str = PENDING_CONFIRMATION_KEY):
        self._state = state
        self._key = key

    def request(self, kind: str, target_id: str) -> None:
        self._state[self._key] = (kind, str(target_id))

    def pending(self) -> Optional[PendingAction]:
        return self._state.get(self._key)

    def is_pending(self, kind: str, target_id: str) -> bool:
        return self.pending() == (kind, str(target_id))

    def confirm(self) -> Optional[PendingAction]:
        """Return the confirmed action and clear it. None when nothing was requested."""
        action = self.pending()
        self._state[self._key] = None
        return action

    def cancel(self) -> None:
        self._state[self._key] = None
