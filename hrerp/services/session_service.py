"""Resolve the authenticated principal into the application ``User``."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from hrerp.models.auth import Principal, User
from hrerp.models.employee import display_name
from hrerp.models.schema import ProfileRow, UserRole

logger = logging.getLogger(__name__)

PrincipalListener = Callable[[Principal | None], Awaitable[None]]


def profile_to_user(profile: ProfileRow, principal: Principal) -> User:
    return User(
        id=profile.id,
        name=display_name(profile.first_name, profile.last_name),
        email=profile.email or principal.email or "",
        role=profile.role or UserRole.EMPLOYEE,
        avatar=profile.avatar_url,
    )


class AuthProvider:
    """Holds the current principal and tells subscribers when it changes."""

    def __init__(self, backend: Any, principal: Principal | None = None) -> None:
        self.backend = backend
        self.principal = principal
        self._listeners: list[PrincipalListener] = []

    def subscribe(self, listener: PrincipalListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def set_principal(self, principal: Principal | None) -> None:
        self.principal = principal
        for listener in list(self._listeners):
            await listener(principal)

    async def sign_out(self) -> None:
        await self.backend.sign_out()
        await self.set_principal(None)


class SessionResolver:
    def __init__(self, backend: Any, auth: AuthProvider) -> None:
        self.backend = backend
        self.auth = auth
        self.user: User | None = None
        self.loading = True
        self._resolved_id: str | None = None
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.auth.principal is not None

    def set_user(self, user: User | None) -> None:
        self.user = user

    def attach(self) -> None:
        """Re-resolve whenever the auth provider reports a different principal."""
        if self._unsubscribe is None:
            self._unsubscribe = self.auth.subscribe(self._on_principal_changed)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def _on_principal_changed(self, principal: Principal | None) -> None:
        new_id = principal.id if principal else None
        if new_id == self._resolved_id and not self.loading:
            return
        await self.refresh()

    async def refresh(self) -> User | None:
        principal = self.auth.principal
        if principal is None:
            self.user = None
        else:
            try:
                raw = await self.backend.select("profiles", filters={"id": principal.id}, single=True)
                self.user = profile_to_user(ProfileRow.model_validate(raw), principal)
            except Exception:
                logger.exception("Error fetching user profile for %s", principal.id)
                self.user = None

        self._resolved_id = principal.id if principal else None
        self.loading = False
        return self.user

    async def logout(self) -> None:
        await self.auth.sign_out()
        self.user = None
