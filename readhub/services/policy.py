"""Role requirements per endpoint.

``POLICY`` maps an action name to the roles allowed to perform it. ``None``
marks a public action; an empty set means "any authenticated caller".
"""
import logging
from typing import Optional
from fastapi import Depends
from readhub.exceptions import AuthenticationError, AuthorizationError
from readhub.models.enums import Role
from readhub.services.auth import CallerContext, verify_token

logger = logging.getLogger(__name__)

ANY_ROLE = frozenset(Role)
ADMIN_ONLY = frozenset({Role.ADMIN})
BORROWER_ONLY = frozenset({Role.BORROWER})

POLICY = {
    "auth:register": None,
    "auth:login": None,
    "auth:me": ANY_ROLE,
    "profile:read": ANY_ROLE,
    "profile:update": ANY_ROLE,
    "profile:delete": ANY_ROLE,
    "books:list": frozenset(),
    "books:read": frozenset(),
    "books:create": ADMIN_ONLY,
    "books:update": ADMIN_ONLY,
    "books:delete": ADMIN_ONLY,
    "transactions:request": BORROWER_ONLY,
    "transactions:mine": ANY_ROLE,
    "transactions:read": ANY_ROLE,
    "transactions:list": ADMIN_ONLY,
    "transactions:approve": ADMIN_ONLY,
    "transactions:reject": ADMIN_ONLY,
    "transactions:pickup": ADMIN_ONLY,
    "transactions:return": ADMIN_ONLY,
}


def authorize(caller: Optional[CallerContext], action: str) -> Optional[CallerContext]:
    """Check ``caller`` against the policy entry for ``action``."""
    if action not in POLICY:
        raise KeyError(f"No authorization policy for action '{action}'")
    allowed = POLICY[action]
    if allowed is None:
        return caller
    if caller is None:
        raise AuthenticationError("Not authenticated")
    if allowed and caller.role not in allowed:
        logger.warning(f"{caller.email} ({caller.role.value}) denied {action}")
        raise AuthorizationError()
    return caller


def requires(action: str):
    """Route dependency resolving to the authorized caller for ``action``."""
    if action not in POLICY:
        raise KeyError(f"No authorization policy for action '{action}'")

    def dependency(caller: Optional[CallerContext] = Depends(verify_token)) -> Optional[CallerContext]:
        return authorize(caller, action)

    return dependency
