"""Tests for /api/profile routes."""

import unittest
from datetime import datetime

from api.main import app
from api.tests.support import bearer, build_client


class TestProfileRoutes(unittest.TestCase):

    def setUp(self):
        self.client, self.repo = build_client()
        registered = self.client.post(
            "/api/auth/register",
            json={"email": "a@x.com", "password": "secret1", "firstName": "Anna", "phone": "600100200"},
        ).json()
        self.user = registered["user"]
        self.headers = bearer(registered["token"])

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_get_profile(self):
        response = self.client.get("/api/profile", headers=self.headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), self.user)

    def test_update_single_field(self):
        response = self.client.put("/api/profile", headers=self.headers, json={"city": "Poznań"})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["city"], "Poznań")
        self.assertEqual(data["firstName"], "Anna")
        self.assertEqual(data["phone"], "600100200")
        self.assertEqual(data["email"], "a@x.com")
        self.assertEqual(data["createdAt"], self.user["createdAt"])
        self.assertGreater(
            datetime.fromisoformat(data["updatedAt"]),
            datetime.fromisoformat(self.user["updatedAt"]),
        )

        stored = self.repo.get_by_id(self.user["id"])
        self.assertEqual(stored.city, "Poznań")

    def test_email_and_password_cannot_be_changed(self):
        before = self.repo.get_by_id(self.user["id"])

        response = self.client.put(
            "/api/profile",
            headers=self.headers,
            json={"email": "b@x.com", "password": "hacked1", "city": "Gdańsk"},
        )

        self.assertEqual(response.status_code, 200)
        after = self.repo.get_by_id(self.user["id"])
        self.assertEqual(after.email, "a@x.com")
        self.assertEqual(after.password_hash, before.password_hash)
        self.assertEqual(after.city, "Gdańsk")

    def test_explicit_null_is_400(self):
        response = self.client.put("/api/profile", headers=self.headers, json={"phone": None})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"], [{"field": "phone", "message": "Field cannot be null"}])
        self.assertEqual(self.repo.get_by_id(self.user["id"]).phone, "600100200")

    def test_null_on_defaulted_field_is_400(self):
        response = self.client.put("/api/profile", headers=self.headers, json={"loyaltyPoints": None})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"][0]["field"], "loyaltyPoints")
        self.assertEqual(response.json()["errors"][0]["message"], "Field cannot be null")

    def test_wrong_type_is_400(self):
        response = self.client.put("/api/profile", headers=self.headers, json={"city": 42})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"][0]["field"], "city")

    def test_profile_requires_token(self):
        self.assertEqual(self.client.get("/api/profile").status_code, 401)
        self.assertEqual(self.client.put("/api/profile", json={"city": "Poznań"}).status_code, 401)

    def test_update_for_deleted_user_is_404(self):
        self.repo.store.clear()

        response = self.client.put("/api/profile", headers=self.headers, json={"city": "Poznań"})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "User not found"})


class TestRegisterProfileScenario(unittest.TestCase):
    """Register, read the profile, update the city, then hit /me without a token."""

    def setUp(self):
        self.client, _ = build_client()

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_scenario(self):
        registered = self.client.post("/api/auth/register", json={"email": "a@x.com", "password": "secret1"})
        self.assertEqual(registered.status_code, 201)
        t1 = registered.json()["token"]

        profile = self.client.get("/api/profile", headers=bearer(t1))
        self.assertEqual(profile.status_code, 200)
        self.assertIsNone(profile.json()["city"])

        updated = self.client.put("/api/profile", headers=bearer(t1), json={"city": "Poznań"})
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["city"], "Poznań")
        self.assertEqual(updated.json()["email"], "a@x.com")

        self.assertEqual(self.client.get("/api/auth/me").status_code, 401)


if __name__ == '__main__':
    unittest.main()
