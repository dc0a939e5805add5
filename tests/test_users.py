"""
유저 / 인증 API 테스트
"""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from main import app

from db.models.user import User
from utils.auth import decode_token, hash_password
from utils.errors import ConflictError, NotFoundError


@pytest.fixture
def mock_user():
    return {
        "username": "u1",
        "firstName": "U1F",
        "lastName": "U1L",
        "email": "user1@user.com",
        "isAdmin": False,
    }


@pytest.fixture
def new_user():
    return {
        "username": "new",
        "firstName": "First",
        "lastName": "Last",
        "password": "password1",
        "email": "new@email.com",
    }


def scalar_result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestAuthToken:
    """POST /auth/token 테스트"""

    def test_works(self, client, db_session):
        db_user = User(
            username="u1", password=hash_password("password1"),
            first_name="U1F", last_name="U1L", email="user1@user.com", is_admin=False,
        )
        db_session.execute.return_value = scalar_result(db_user)

        response = client.post("/auth/token", json={"username": "u1", "password": "password1"})

        assert response.status_code == 200
        payload = decode_token(response.json()["token"])
        assert payload["sub"] == "u1"
        assert payload["is_admin"] is False

    def test_unauth_with_wrong_password(self, client, db_session):
        db_user = User(
            username="u1", password=hash_password("password1"),
            first_name="U1F", last_name="U1L", email="user1@user.com", is_admin=False,
        )
        db_session.execute.return_value = scalar_result(db_user)

        response = client.post("/auth/token", json={"username": "u1", "password": "nope"})
        assert response.status_code == 401

    def test_unauth_with_unknown_user(self, client, db_session):
        db_session.execute.return_value = scalar_result(None)

        response = client.post("/auth/token", json={"username": "no-such-user", "password": "password1"})
        assert response.status_code == 401

    def test_bad_request_with_missing_data(self, client):
        response = client.post("/auth/token", json={"username": "u1"})
        assert response.status_code == 400


class TestAuthRegister:
    """POST /auth/register 테스트"""

    def test_works(self, client, db_session, new_user):
        response = client.post("/auth/register", json=new_user)

        assert response.status_code == 201
        assert decode_token(response.json()["token"])["sub"] == "new"
        saved = db_session.add.call_args.args[0]
        assert saved.first_name == "First"
        assert saved.is_admin is False
        assert saved.password != "password1"
        db_session.commit.assert_awaited_once()

    def test_commit_failure_returns_no_token(self, client, db_session, new_user):
        """commit 실패 시 토큰 없이 500"""
        db_session.commit.side_effect = RuntimeError("commit failed")
        server_error_client = TestClient(app, raise_server_exceptions=False)

        response = server_error_client.post("/auth/register", json=new_user)

        assert response.status_code == 500
        assert "token" not in response.json()

    def test_duplicate_username(self, client, db_session, new_user):
        db_session.flush.side_effect = IntegrityError("INSERT", {}, Exception("duplicate"))

        response = client.post("/auth/register", json=new_user)

        assert response.status_code == 400
        assert response.json()["detail"] == "Duplicate username: new"

    def test_bad_request_with_invalid_email(self, client, new_user):
        response = client.post("/auth/register", json={**new_user, "email": "not-an-email"})
        assert response.status_code == 400

    def test_cannot_register_as_admin(self, client, new_user):
        response = client.post("/auth/register", json={**new_user, "isAdmin": True})
        assert response.status_code == 400


class TestCreateUser:
    """POST /users 테스트"""

    def test_admin_can_create_admin(self, client, db_session, admin_headers, new_user):
        response = client.post("/users", json={**new_user, "isAdmin": True}, headers=admin_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["user"] == {
            "username": "new",
            "firstName": "First",
            "lastName": "Last",
            "email": "new@email.com",
            "isAdmin": True,
        }
        assert decode_token(body["token"])["is_admin"] is True

    def test_unauth_when_not_admin(self, client, u1_headers, new_user):
        response = client.post("/users", json=new_user, headers=u1_headers)
        assert response.status_code == 401


class TestGetUsers:
    """GET /users, GET /users/{username} 테스트"""

    def test_list_for_admin(self, client, admin_headers, mock_user):
        with patch("repositories.users.find_all", new_callable=AsyncMock, return_value=[mock_user]):
            response = client.get("/users", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"users": [mock_user]}

    def test_list_unauth_for_user(self, client, u1_headers):
        response = client.get("/users", headers=u1_headers)
        assert response.status_code == 401

    def test_get_same_user(self, client, u1_headers, mock_user):
        with patch("repositories.users.get", new_callable=AsyncMock, return_value={**mock_user, "jobs": [1]}):
            response = client.get("/users/u1", headers=u1_headers)

        assert response.status_code == 200
        assert response.json() == {"user": {**mock_user, "jobs": [1]}}

    def test_get_same_user_with_padded_username(self, client, u1_headers, mock_user):
        """경로의 공백은 제거된 username 으로 권한 확인"""
        with patch("repositories.users.get", new_callable=AsyncMock,
                   return_value={**mock_user, "jobs": []}) as mock_get:
            response = client.get("/users/%20u1", headers=u1_headers)

        assert response.status_code == 200
        assert mock_get.await_args.args[1] == "u1"

    def test_get_other_user_unauth(self, client, u2_headers):
        response = client.get("/users/u1", headers=u2_headers)
        assert response.status_code == 401

    def test_get_not_found_for_admin(self, client, admin_headers):
        with patch("repositories.users.get", new_callable=AsyncMock, side_effect=NotFoundError("No user: nope")):
            response = client.get("/users/nope", headers=admin_headers)

        assert response.status_code == 404


class TestUpdateUser:
    """PATCH /users/{username} 테스트"""

    def test_works_for_same_user(self, client, u1_headers, mock_user):
        updated = {**mock_user, "firstName": "New"}
        with patch("repositories.users.update", new_callable=AsyncMock, return_value=updated) as mock_update:
            response = client.patch("/users/u1", json={"firstName": "New"}, headers=u1_headers)

        assert response.status_code == 200
        assert response.json() == {"user": updated}
        assert mock_update.await_args.args[1:] == ("u1", {"firstName": "New"})

    def test_user_cannot_make_self_admin(self, client, u1_headers):
        with patch("repositories.users.update", new_callable=AsyncMock) as mock_update:
            response = client.patch("/users/u1", json={"isAdmin": True}, headers=u1_headers)

        assert response.status_code == 401
        mock_update.assert_not_awaited()

    def test_admin_can_grant_admin(self, client, admin_headers, mock_user):
        updated = {**mock_user, "isAdmin": True}
        with patch("repositories.users.update", new_callable=AsyncMock, return_value=updated):
            response = client.patch("/users/u1", json={"isAdmin": True}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["user"]["isAdmin"] is True

    def test_unauth_for_other_user(self, client, u2_headers):
        response = client.patch("/users/u1", json={"firstName": "New"}, headers=u2_headers)
        assert response.status_code == 401

    def test_bad_request_on_empty_body(self, client, u1_headers):
        response = client.patch("/users/u1", json={}, headers=u1_headers)
        assert response.status_code == 400

    def test_bad_request_on_username_change(self, client, u1_headers):
        response = client.patch("/users/u1", json={"username": "u1-new"}, headers=u1_headers)
        assert response.status_code == 400


class TestDeleteUser:
    """DELETE /users/{username} 테스트"""

    def test_works_for_same_user(self, client, u1_headers):
        with patch("repositories.users.remove", new_callable=AsyncMock):
            response = client.delete("/users/u1", headers=u1_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "u1"}

    def test_unauth_for_anon(self, client):
        response = client.delete("/users/u1")
        assert response.status_code == 401


class TestApplyToJob:
    """POST /users/{username}/jobs/{job_id} 테스트"""

    def test_works_for_same_user(self, client, u1_headers):
        with patch("repositories.users.apply_to_job", new_callable=AsyncMock) as mock_apply:
            response = client.post("/users/u1/jobs/1", headers=u1_headers)

        assert response.status_code == 200
        assert response.json() == {"applied": 1}
        assert mock_apply.await_args.args[1:] == ("u1", 1)

    def test_unauth_for_other_user(self, client, u2_headers):
        response = client.post("/users/u1/jobs/1", headers=u2_headers)
        assert response.status_code == 401

    def test_already_applied(self, client, u1_headers):
        with patch("repositories.users.apply_to_job", new_callable=AsyncMock,
                   side_effect=ConflictError("Already applied")):
            response = client.post("/users/u1/jobs/1", headers=u1_headers)

        assert response.status_code == 409
