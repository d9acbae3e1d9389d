"""Integration tests for the signed-in user's own profile."""

import pytest
from libs.auth.provider import AuthProviderError
from services.gateway_service.app.main import app
from tests.helpers import create_student, make_user, override_auth


@pytest.mark.asyncio
@pytest.mark.integration
async def test_get_and_update_profile(client, db_session):
    user, student = await create_student(db_session, full_name="Ana Souza")
    original_cpf = student.cpf

    with override_auth(app, user):
        fetched = await client.get("/api/v1/me/profile")
        updated = await client.patch(
            "/api/v1/me/profile",
            json={"full_name": "Ana S. Lima", "phone": "11988887777"},
        )

    assert fetched.status_code == 200
    assert fetched.json()["email"] == user.email
    assert fetched.json()["role"] == "student"
    assert updated.json()["full_name"] == "Ana S. Lima"
    assert updated.json()["phone"] == "11988887777"
    assert updated.json()["cpf"] == original_cpf


@pytest.mark.asyncio
@pytest.mark.integration
async def test_profile_requires_existing_profile(client, db_session):
    with override_auth(app, make_user()):
        response = await client.get("/api/v1/me/profile")

    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_change_password_reauthenticates(client, db_session, auth_provider):
    user, _ = await create_student(db_session)

    with override_auth(app, user):
        response = await client.post(
            "/api/v1/me/password",
            json={"current_password": "123456", "new_password": "n3w-s3cret"},
        )

    assert response.status_code == 204
    auth_provider.sign_in.assert_awaited_once_with(user.email, "123456")
    auth_provider.update_password.assert_awaited_once_with(user.user_id, "n3w-s3cret")


@pytest.mark.asyncio
@pytest.mark.integration
async def test_change_password_wrong_current(client, db_session, auth_provider):
    user, _ = await create_student(db_session)
    auth_provider.sign_in.side_effect = AuthProviderError("Invalid login credentials")

    with override_auth(app, user):
        response = await client.post(
            "/api/v1/me/password",
            json={"current_password": "wrong", "new_password": "n3w-s3cret"},
        )

    assert response.status_code == 400
    assert response.json()["detail"] == "current password is incorrect"
    auth_provider.update_password.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.integration
async def test_change_email(client, db_session, auth_provider):
    user, _ = await create_student(db_session)

    with override_auth(app, user):
        response = await client.post(
            "/api/v1/me/email", json={"new_email": "ana.nova@example.com"}
        )
        invalid = await client.post("/api/v1/me/email", json={"new_email": "nope"})

    assert response.status_code == 204
    auth_provider.update_email.assert_awaited_once_with(
        user.user_id, "ana.nova@example.com"
    )
    assert invalid.status_code == 422
