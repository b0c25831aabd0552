"""Tests for registration, login and JWT cookie handling."""

import pytest
from rest_framework.test import APIClient

from user.models import User

pytestmark = pytest.mark.django_db

PASSWORD = "s3cure-Passw0rd!"


def register(client, email="new@example.com", password=PASSWORD, confirm=None):
    return client.post(
        "/api/v1/auth/register/",
        {"email": email, "name": "New User", "password1": password, "password2": confirm or password},
        format="json",
    )


class TestRegister:
    def test_register(self, api_client):
        response = register(api_client)

        assert response.status_code == 201
        assert response.json()["user"]["email"] == "new@example.com"
        assert User.objects.get(email="new@example.com").check_password(PASSWORD)

    def test_duplicate_email(self, api_client, user):
        response = register(api_client, email=user.email)

        assert response.status_code == 400
        assert "email" in response.json()

    def test_passwords_must_match(self, api_client):
        response = register(api_client, confirm="something-else-123")

        assert response.status_code == 400
        assert "password2" in response.json()

    def test_weak_password(self, api_client):
        response = register(api_client, password="123")

        assert response.status_code == 400
        assert "password1" in response.json()


class TestLogin:
    def test_login_returns_tokens_and_cookies(self, api_client, user):
        response = api_client.post(
            "/api/v1/auth/login/", {"email": user.email, "password": PASSWORD}, format="json"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == user.id
        assert data["access"] and data["refresh"]
        assert response.cookies["access_token"]["httponly"]
        assert response.cookies["access_token"].value == data["access"]

    def test_wrong_password(self, api_client, user):
        response = api_client.post(
            "/api/v1/auth/login/", {"email": user.email, "password": "nope"}, format="json"
        )

        assert response.status_code == 401

    def test_bearer_header(self, api_client, user):
        access = api_client.post(
            "/api/v1/auth/login/", {"email": user.email, "password": PASSWORD}, format="json"
        ).json()["access"]

        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        response = client.get("/api/v1/auth/user/")

        assert response.status_code == 200
        assert response.json()["email"] == user.email

    def test_access_cookie_authenticates(self, api_client, user):
        api_client.post("/api/v1/auth/login/", {"email": user.email, "password": PASSWORD}, format="json")

        # the client keeps the cookie set by the login response
        response = api_client.get("/api/v1/auth/user/")

        assert response.status_code == 200
        assert response.json()["id"] == user.id

    def test_cookie_identity_drives_the_cart(self, api_client, user, make_product):
        api_client.post("/api/v1/auth/login/", {"email": user.email, "password": PASSWORD}, format="json")
        product = make_product()
        api_client.post("/api/v1/cart/", {"product_id": product.id, "quantity": 1}, format="json")

        anonymous = APIClient().get("/api/v1/cart/").json()
        mine = api_client.get("/api/v1/cart/").json()

        assert anonymous["item_count"] == 0
        assert mine["item_count"] == 1


class TestLogout:
    def test_logout_clears_cookies(self, auth_client):
        response = auth_client.post("/api/v1/auth/logout/")

        assert response.status_code == 200
        assert response.cookies["access_token"].value == ""

    def test_current_user_requires_auth(self, api_client):
        assert api_client.get("/api/v1/auth/user/").status_code == 401
