"""
HTTP tests for registration, login and the current-account endpoint.
"""

import asyncio

from loyalty.core.security import decode_access_token


class TestRegister:
    async def test_register_starts_with_default_balance(self, client, settings):
        res = await client.post(
            "/api/v1/auth/register",
            json={"name": "Dana", "email": "Dana@Acme.io", "password": "password1"},
        )

        assert res.status_code == 201
        body = res.json()
        assert body["token_type"] == "bearer"
        assert body["account"]["email"] == "dana@acme.io"
        assert body["account"]["balance"] == 500
        token = decode_access_token(body["access_token"], settings)
        assert token.account_id == body["account"]["id"]

    async def test_duplicate_email_is_400(self, client, accounts):
        res = await client.post(
            "/api/v1/auth/register",
            json={"name": "Alice again", "email": "alice@acme.io", "password": "password1"},
        )

        assert res.status_code == 400
        assert res.json()["detail"] == "Email already taken"

    async def test_concurrent_duplicates_yield_one_account(self, client):
        body = {"name": "Gina", "email": "gina@acme.io", "password": "password1"}

        results = await asyncio.gather(
            *(client.post("/api/v1/auth/register", json=body) for _ in range(3))
        )

        assert sorted(res.status_code for res in results) == [201, 400, 400]
        rejected = [res for res in results if res.status_code == 400]
        assert all(res.json()["detail"] == "Email already taken" for res in rejected)
        login = await client.post("/api/v1/auth/login", json={"email": "gina@acme.io", "password": "password1"})
        assert login.status_code == 200

    async def test_weak_password_is_422(self, client):
        res = await client.post(
            "/api/v1/auth/register",
            json={"name": "Eve", "email": "eve@acme.io", "password": "onlyletters"},
        )

        assert res.status_code == 422


class TestLogin:
    async def test_login_then_me(self, client, accounts):
        res = await client.post("/api/v1/auth/login", json={"email": "alice@acme.io", "password": "password1"})

        assert res.status_code == 200
        token = res.json()["access_token"]
        me = await client.get("/api/v1/accounts/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["id"] == accounts["alice"].id
        assert me.json()["balance"] == 500

    async def test_wrong_password_is_401(self, client, accounts):
        res = await client.post("/api/v1/auth/login", json={"email": "alice@acme.io", "password": "nope12345"})

        assert res.status_code == 401

    async def test_register_then_login(self, client):
        await client.post(
            "/api/v1/auth/register",
            json={"name": "Frank", "email": "frank@acme.io", "password": "password9"},
        )

        res = await client.post("/api/v1/auth/login", json={"email": "frank@acme.io", "password": "password9"})

        assert res.status_code == 200
        assert res.json()["account"]["balance"] == 500


class TestHealth:
    async def test_health(self, client):
        res = await client.get("/health")

        assert res.status_code == 200
        assert res.json()["status"] == "ok"
