# PURPOSE: explicit signed-in user state with change subscriptions.
#
# Each client owns its own UserSession; nothing here is module-global.

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .models import UserPublic

logger = logging.getLogger(__name__)

Listener = Callable[[Optional[UserPublic]], None]


class UserSession:
    """Current user + bearer token, notifying listeners on every change."""

    def __init__(self) -> None:
        self._user: Optional[UserPublic] = None
        self._token: Optional[str] = None
        self._listeners: List[Listener] = []

    @property
    def user(self) -> Optional[UserPublic]:
        return self._user

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def user_id(self) -> Optional[str]:
        return self._user.id if self._user else None

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None and self._token is not None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def sign_in(self, user: UserPublic, token: str) -> None:
        self._user = user
        self._token = token
        self._notify()

    def sign_out(self) -> None:
        if self._user is None and self._token is None:
            return
        self._user = None
        self._token = None
        self._notify()

    def _notify(self) -> None:
        # Copy: listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                listener(self._user)
            except Exception:
                logger.exception("session listener failed listener=%r", listener)
