"""Tests for the identity provider client."""

import asyncio

import httpx
import pytest

from rovart.services.identity import Actor, IdentityProvider


def _provider(handler, admin_emails=frozenset()) -> IdentityProvider:
    return IdentityProvider(
        base_url="https://identity.test/",
        secret_key="sk_test_123",
        admin_emails=admin_emails,
        transport=httpx.MockTransport(handler),
    )


def _user(email="jane@x.com", public=None, private=None) -> dict:
    return {
        "id": "user_1",
        "email_addresses": [{"email_address": email}] if email else [],
        "public_metadata": public or {},
        "private_metadata": private or {},
    }


def test_fetch_actor_reads_email_and_role():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=_user(email="Owner@Rovart.test", public={"role": "admin"}))

    actor = asyncio.run(_provider(handler).fetch_actor("user_1"))

    assert seen["url"] == "https://identity.test/v1/users/user_1"
    assert seen["auth"] == "Bearer sk_test_123"
    assert actor == Actor(user_id="user_1", email="owner@rovart.test", role="admin")


def test_private_metadata_role():
    provider = _provider(lambda r: httpx.Response(200, json=_user(private={"role": "admin"})))
    actor = asyncio.run(provider.fetch_actor("user_1"))
    assert provider.is_privileged(actor)


def test_private_admin_role_beats_public_role():
    provider = _provider(lambda r: httpx.Response(
        200, json=_user(public={"role": "customer"}, private={"role": "admin"})
    ))
    actor = asyncio.run(provider.fetch_actor("user_1"))
    assert actor.role == "admin"
    assert provider.is_privileged(actor)


def test_public_role_kept_when_not_admin():
    provider = _provider(lambda r: httpx.Response(
        200, json=_user(public={"role": "customer"}, private={"role": "staff"})
    ))
    actor = asyncio.run(provider.fetch_actor("user_1"))
    assert actor.role == "customer"
    assert not provider.is_privileged(actor)


def test_allow_listed_email():
    provider = _provider(
        lambda r: httpx.Response(200, json=_user(email="staff@rovart.test")),
        admin_emails=frozenset({"Staff@Rovart.test"}),
    )
    actor = asyncio.run(provider.fetch_actor("user_1"))
    assert actor.role is None
    assert provider.is_privileged(actor)


def test_plain_user_is_not_privileged():
    provider = _provider(lambda r: httpx.Response(200, json=_user()))
    assert not provider.is_privileged(asyncio.run(provider.fetch_actor("user_1")))


def test_user_without_email():
    provider = _provider(lambda r: httpx.Response(200, json=_user(email=None)))
    actor = asyncio.run(provider.fetch_actor("user_1"))
    assert actor.email is None
    assert not provider.is_privileged(actor)


@pytest.mark.parametrize("handler", [
    lambda r: httpx.Response(404, json={"errors": []}),
    lambda r: httpx.Response(500),
    lambda r: httpx.Response(200, content=b"not json"),
])
def test_lookup_failure_is_never_privileged(handler):
    provider = _provider(handler, admin_emails=frozenset({"jane@x.com"}))
    actor = asyncio.run(provider.fetch_actor("user_1"))
    assert actor == Actor(user_id="user_1")
    assert not provider.is_privileged(actor)


def test_network_error_is_never_privileged():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    provider = _provider(handler)
    actor = asyncio.run(provider.fetch_actor("user_1"))
    assert not provider.is_privileged(actor)
