"""
Identity provider lookup.

Sessions are verified upstream; the backend only receives a user id.
Email and role come from the provider's user API, and
IdentityProvider.is_privileged() is the one place that decides admin access.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Actor:
    user_id: str
    email: Optional[str] = None
    role: Optional[str] = None


class IdentityProvider:
    """Client for the identity provider's user API."""

    def __init__(
        self,
        base_url: str,
        secret_key: str,
        admin_emails: frozenset[str] = frozenset(),
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.secret_key = secret_key
        self.admin_emails = frozenset(e.lower() for e in admin_emails)
        self.timeout = timeout
        self._transport = transport

    async def fetch_actor(self, user_id: str) -> Actor:
        """
        Resolve email and role for a user id.

        A failed lookup yields an Actor without email or role, which is
        never privileged.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(
                    f"{self.base_url}/v1/users/{user_id}",
                    headers={"Authorization": f"Bearer {self.secret_key}"},
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Identity lookup failed for user_id={user_id}: {e}")
            return Actor(user_id=user_id)

        return Actor(
            user_id=user_id,
            email=_primary_email(data),
            role=_role(data),
        )

    def is_privileged(self, actor: Actor) -> bool:
        if actor.role == ADMIN_ROLE:
            return True
        return bool(actor.email) and actor.email.lower() in self.admin_emails


def _primary_email(data: dict) -> Optional[str]:
    addresses = data.get("email_addresses") or []
    if not addresses:
        return None
    email = addresses[0].get("email_address")
    return email.strip().lower() if email else None


def _role(data: dict) -> Optional[str]:
    roles = [
        (data.get(key) or {}).get("role")
        for key in ("public_metadata", "private_metadata")
    ]
    # admin in either metadata wins over any other role
    if ADMIN_ROLE in roles:
        return ADMIN_ROLE
    return next((role for role in roles if role), None)
