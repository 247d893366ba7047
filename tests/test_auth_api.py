"""API tests for /api/auth and the bearer-token gate."""

import unittest
from unittest.mock import patch

from api_case import DEFAULT_PASSWORD, USER_ROLE_ID, ApiTestCase

from blog.core.security import create_access_token, create_reset_token, decode_access_token, verify_password
from blog.models import User
from blog.services.email import EmailDeliveryError


class TestRegister(ApiTestCase):
    """POST /api/auth/register."""

    def test_creates_user_with_hashed_password(self) -> None:
        response = self.register("alice", "a@x.com")
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json(), {"message": "User registered successfully"})
        self.assertNotIn("token", response.json())
        with self.Session() as session:
            user = session.query(User).filter(User.email == "a@x.com").one()
            self.assertEqual(user.username, "alice")
            self.assertEqual(user.role_id, USER_ROLE_ID)
            self.assertNotEqual(user.password_hash, DEFAULT_PASSWORD)
            self.assertTrue(verify_password(DEFAULT_PASSWORD, user.password_hash))

    def test_itemizes_validation_errors(self) -> None:
        response = self.client.post(
            "/api/auth/register",
            json={"username": "", "email": "not-an-email", "password": "short1", "roleId": "abc"},
        )
        self.assertEqual(response.status_code, 400)
        fields = {e["field"] for e in response.json()["errors"]}
        self.assertEqual(fields, {"username", "email", "password", "roleId"})

    def test_missing_fields_are_reported(self) -> None:
        response = self.client.post("/api/auth/register", json={})
        self.assertEqual(response.status_code, 400)
        fields = {e["field"] for e in response.json()["errors"]}
        self.assertEqual(fields, {"username", "email", "password", "roleId"})

    def test_password_without_uppercase_is_rejected(self) -> None:
        response = self.register("alice", "a@x.com", password="alllowercase1")
        self.assertEqual(response.status_code, 400)
        messages = [e["message"] for e in response.json()["errors"]]
        self.assertIn("Password must contain at least one uppercase letter", messages)

    def test_duplicate_email_does_not_create_second_row(self) -> None:
        self.assertEqual(self.register("alice", "a@x.com").status_code, 201)
        response = self.register("alice2", "a@x.com")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "User already exists"})
        with self.Session() as session:
            self.assertEqual(session.query(User).filter(User.email == "a@x.com").count(), 1)

    def test_duplicate_username_is_rejected(self) -> None:
        self.register("alice", "a@x.com")
        response = self.register("alice", "other@x.com")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Username already taken"})

    def test_unknown_role_is_rejected(self) -> None:
        response = self.register("alice", "a@x.com", role_id=99)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Invalid role"})
        with self.Session() as session:
            self.assertEqual(session.query(User).count(), 0)

    def test_boolean_role_id_is_rejected(self) -> None:
        response = self.client.post(
            "/api/auth/register",
            json={"username": "x", "email": "x@x.com", "password": "Password1", "roleId": True},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(),
            {"errors": [{"field": "roleId", "message": "Valid role ID is required"}]},
        )
        with self.Session() as session:
            self.assertEqual(session.query(User).count(), 0)

    def test_numeric_string_role_id_is_accepted(self) -> None:
        response = self.client.post(
            "/api/auth/register",
            json={"username": "x", "email": "x@x.com", "password": "Password1", "roleId": "2"},
        )
        self.assertEqual(response.status_code, 201)

    def test_out_of_range_role_id_is_a_validation_error(self) -> None:
        response = self.register("alice", "a@x.com", role_id=10**20)
        self.assertEqual(response.status_code, 400)
        self.assertEqual([e["field"] for e in response.json()["errors"]], ["roleId"])


class TestLogin(ApiTestCase):
    """POST /api/auth/login."""

    def setUp(self) -> None:
        super().setUp()
        self.assertEqual(self.register("alice", "a@x.com").status_code, 201)

    def test_returns_token_and_public_user(self) -> None:
        response = self.login("a@x.com")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["message"], "User logged in successfully")
        self.assertEqual(set(body["user"]), {"id", "username", "email", "role"})
        self.assertEqual(body["user"]["username"], "alice")
        self.assertEqual(body["user"]["role"], USER_ROLE_ID)
        payload = decode_access_token(body["token"])
        self.assertEqual(payload["sub"], str(body["user"]["id"]))
        self.assertEqual(payload["role"], USER_ROLE_ID)

    def test_unknown_email_is_not_found(self) -> None:
        response = self.login("nobody@x.com")
        self.assertEqual(response.status_code, 404)

    def test_wrong_password_is_unauthorized(self) -> None:
        response = self.login("a@x.com", password="WrongPass1")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "Invalid credentials"})

    def test_validation_runs_before_lookup(self) -> None:
        response = self.client.post("/api/auth/login", json={"email": "bad", "password": ""})
        self.assertEqual(response.status_code, 400)
        fields = {e["field"] for e in response.json()["errors"]}
        self.assertEqual(fields, {"email", "password"})


class TestAuthenticationGate(ApiTestCase):
    """get_current_user states, observed through GET /api/auth/me."""

    def test_no_token(self) -> None:
        response = self.client.get("/api/auth/me")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "Access denied. No token provided."})

    def test_non_bearer_scheme_counts_as_no_token(self) -> None:
        response = self.client.get("/api/auth/me", headers={"Authorization": "Basic abc"})
        self.assertEqual(response.status_code, 401)

    def test_invalid_token(self) -> None:
        response = self.client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Invalid token."})

    def test_reset_token_is_not_accepted_as_bearer(self) -> None:
        user_id, _ = self.signup("alice", "a@x.com")
        headers = {"Authorization": f"Bearer {create_reset_token(user_id)}"}
        response = self.client.get("/api/auth/me", headers=headers)
        self.assertEqual(response.status_code, 400)

    def test_subject_beyond_id_range_is_invalid_token(self) -> None:
        headers = {"Authorization": f"Bearer {create_access_token(sub=10**20)}"}
        response = self.client.get("/api/auth/me", headers=headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Invalid token."})

    def test_user_not_found(self) -> None:
        headers = {"Authorization": f"Bearer {create_access_token(sub=999)}"}
        response = self.client.get("/api/auth/me", headers=headers)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "User not found."})

    def test_valid_token_resolves_user(self) -> None:
        user_id, headers = self.signup("alice", "a@x.com")
        response = self.client.get("/api/auth/me", headers=headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"id": user_id, "username": "alice", "email": "a@x.com", "role": USER_ROLE_ID},
        )


class TestPasswordReset(ApiTestCase):
    """POST /api/auth/forgot-password and /api/auth/reset-password."""

    def setUp(self) -> None:
        super().setUp()
        self.user_id, _ = self.signup("alice", "a@x.com")

    def _request_reset_token(self) -> str:
        with patch("blog.api.auth.send_password_reset_email") as send:
            response = self.client.post("/api/auth/forgot-password", json={"email": "a@x.com"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"message": "Password reset email sent"})
        send.assert_called_once()
        to, token, _settings = send.call_args.args
        self.assertEqual(to, "a@x.com")
        return token

    def test_full_reset_flow(self) -> None:
        token = self._request_reset_token()
        response = self.client.post(
            "/api/auth/reset-password",
            json={"token": token, "newPassword": "NewSecret9"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"message": "Password has been reset successfully"})
        self.assertEqual(self.login("a@x.com").status_code, 401)
        self.assertEqual(self.login("a@x.com", password="NewSecret9").status_code, 200)

    def test_forgot_password_unknown_email(self) -> None:
        response = self.client.post("/api/auth/forgot-password", json={"email": "nobody@x.com"})
        self.assertEqual(response.status_code, 404)

    def test_forgot_password_delivery_failure_is_internal_error(self) -> None:
        with patch(
            "blog.api.auth.send_password_reset_email",
            side_effect=EmailDeliveryError("smtp down"),
        ):
            response = self.client.post("/api/auth/forgot-password", json={"email": "a@x.com"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"message": "Error sending password reset email"})

    def test_weak_new_password_is_rejected(self) -> None:
        token = self._request_reset_token()
        response = self.client.post(
            "/api/auth/reset-password",
            json={"token": token, "newPassword": "weak"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual([e["field"] for e in response.json()["errors"]], ["newPassword"])

    def test_invalid_token_is_rejected(self) -> None:
        response = self.client.post(
            "/api/auth/reset-password",
            json={"token": "garbage", "newPassword": "NewSecret9"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Invalid token."})

    def test_access_token_cannot_reset_password(self) -> None:
        response = self.client.post(
            "/api/auth/reset-password",
            json={"token": create_access_token(sub=self.user_id), "newPassword": "NewSecret9"},
        )
        self.assertEqual(response.status_code, 400)

    def test_reset_for_missing_user(self) -> None:
        response = self.client.post(
            "/api/auth/reset-password",
            json={"token": create_reset_token(999), "newPassword": "NewSecret9"},
        )
        self.assertEqual(response.status_code, 404)


class TestRootAndHealth(ApiTestCase):
    def test_root(self) -> None:
        self.assertEqual(self.client.get("/").json(), {"message": "Welcome to the Blog API"})

    def test_health_reports_database(self) -> None:
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["database"], "connected")

    def test_openapi_documents_validation_error_body(self) -> None:
        schema = self.client.get("/openapi.json").json()
        self.assertIn("ValidationErrorResponse", schema["components"]["schemas"])
        responses = schema["paths"]["/api/auth/register"]["post"]["responses"]
        self.assertEqual(
            responses["400"]["content"]["application/json"]["schema"]["$ref"],
            "#/components/schemas/ValidationErrorResponse",
        )


if __name__ == "__main__":
    unittest.main()
