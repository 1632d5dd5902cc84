"""Account operations: login, registration, password and role changes.

Failures come back as ``OperationResult`` errors with a user-facing message.
Credentials are compared as stored; there is no hashing.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from .errors import CONFLICT, FORBIDDEN, INVALID, NOT_FOUND, UNAUTHENTICATED, OperationResult
from .schema.models import User, UserRole
from .store import actions
from .store.reducer import apply
from .store.state import LeagueState

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def find_user_by_email(state: LeagueState, email: str) -> Optional[User]:
    wanted = _normalize_email(email)
    for user in state.users:
        if _normalize_email(user.email) == wanted:
            return user
    return None


def login(state: LeagueState, email: str, password: str) -> OperationResult:
    user = find_user_by_email(state, email)
    if user is None or user.password != password:
        return OperationResult.failure(state, UNAUTHENTICATED, "Invalid credentials")
    return OperationResult(state=state, value=user)


def register(
    state: LeagueState,
    *,
    user_id: str,
    full_name: str,
    email: str,
    password: str,
    fb_link: Optional[str] = None,
) -> OperationResult:
    if not full_name.strip() or not email.strip() or not password:
        return OperationResult.failure(
            state, INVALID, "Full name, email and password are required."
        )
    if find_user_by_email(state, email) is not None:
        return OperationResult.failure(
            state, CONFLICT, "An account with this email already exists."
        )
    if state.get_user(user_id) is not None:
        return OperationResult.failure(
            state, CONFLICT, "An account with this id already exists."
        )

    user = User(
        id=user_id,
        full_name=full_name.strip(),
        email=email.strip(),
        password=password,
        fb_link=fb_link or None,
        role=UserRole.PARTICIPANT,
    )
    logger.info("Registered participant %s", user.id)
    return OperationResult(state=apply(state, actions.AddUser(user)), value=user)


def update_password(
    state: LeagueState, user_id: Optional[str], password: str
) -> OperationResult:
    user = state.get_user(user_id) if user_id else None
    if user is None:
        return OperationResult.failure(state, UNAUTHENTICATED, "Not logged in")
    if not password:
        return OperationResult.failure(state, INVALID, "Password cannot be empty.")
    updated = replace(user, password=password)
    return OperationResult(state=apply(state, actions.UpdateUser(updated)), value=updated)


def change_role(
    state: LeagueState, actor_id: str, user_id: str, role: UserRole
) -> OperationResult:
    actor = state.get_user(actor_id)
    if actor is None or actor.role != UserRole.ADMIN:
        return OperationResult.failure(
            state, FORBIDDEN, "Only administrators can change roles."
        )
    if actor_id == user_id and role != UserRole.ADMIN:
        return OperationResult.failure(state, FORBIDDEN, "You cannot demote yourself!")

    user = state.get_user(user_id)
    if user is None:
        return OperationResult.failure(state, NOT_FOUND, f"User {user_id} not found.")
    if user.role == role:
        return OperationResult(state=state, value=user)

    updated = replace(user, role=role)
    logger.info("Changed role of %s to %s", user_id, role.value)
    return OperationResult(state=apply(state, actions.UpdateUser(updated)), value=updated)
