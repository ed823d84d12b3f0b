"""FastAPI dependencies: clock, identity provider, current actor, admin gate."""

from datetime import datetime
from functools import lru_cache

from fastapi import Depends, Request

from .config import settings
from .errors import AuthenticationError, AuthorizationError
from .services.identity import Actor, IdentityProvider
from .services.slots.config import business_now


def get_now() -> datetime:
    return business_now()


@lru_cache
def get_identity_provider() -> IdentityProvider:
    return IdentityProvider(
        base_url=settings.identity_api_url,
        secret_key=settings.identity_secret_key,
        admin_emails=settings.admin_email_set,
        timeout=settings.identity_timeout_seconds,
    )


async def get_current_actor(
    request: Request,
    provider: IdentityProvider = Depends(get_identity_provider),
) -> Actor:
    identity = getattr(request.state, "identity", None)
    if not identity or not identity.get("user_id"):
        raise AuthenticationError("Unauthorized")
    return await provider.fetch_actor(identity["user_id"])


async def require_admin(
    actor: Actor = Depends(get_current_actor),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> Actor:
    if not provider.is_privileged(actor):
        raise AuthorizationError("Forbidden")
    return actor
