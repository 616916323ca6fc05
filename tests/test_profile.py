"""Tests for profile and notification preference endpoints."""


class TestProfile:
    """Tests for GET/PUT /profile."""

    async def test_get_profile(self, client, landlord, headers_for):
        response = await client.get("/profile", headers=headers_for(landlord))

        assert response.status_code == 200
        profile = response.json()["profile"]
        assert profile["id"] == str(landlord.id)
        assert profile["role"] == "landlord"
        assert profile["avatar"] == "https://img.example.com/larry.png"
        assert "hashedPassword" not in profile

    async def test_update_profile(self, client, tenant, headers_for):
        response = await client.put(
            "/profile",
            json={"name": "Tina T.", "phone": "+442083661177"},
            headers=headers_for(tenant),
        )

        assert response.status_code == 200
        profile = response.json()["profile"]
        assert profile["name"] == "Tina T."
        assert profile["phone"] == "+442083661177"
        assert profile["email"] == tenant.email

        again = await client.get("/profile", headers=headers_for(tenant))
        assert again.json()["profile"]["name"] == "Tina T."

    async def test_blank_name_keeps_current(self, client, tenant, headers_for):
        response = await client.put(
            "/profile", json={"name": "   "}, headers=headers_for(tenant)
        )

        assert response.status_code == 200
        assert response.json()["profile"]["name"] == "Tina Tenant"

    async def test_invalid_phone(self, client, tenant, headers_for):
        response = await client.put(
            "/profile", json={"phone": "call me"}, headers=headers_for(tenant)
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid value for phone")


class TestNotificationPreferences:
    """Tests for GET/PUT /profile/notifications."""

    async def test_defaults_all_enabled(self, client, tenant, headers_for):
        response = await client.get(
            "/profile/notifications", headers=headers_for(tenant)
        )

        assert response.status_code == 200
        assert response.json() == {
            "preferences": {
                "applicationUpdates": True,
                "newMessages": True,
                "propertyRecommendations": True,
                "newsletter": True,
            }
        }

    async def test_partial_update_persists(self, client, tenant, headers_for):
        response = await client.put(
            "/profile/notifications",
            json={"newsletter": False, "newMessages": False},
            headers=headers_for(tenant),
        )

        assert response.status_code == 200
        prefs = response.json()["preferences"]
        assert prefs["newsletter"] is False
        assert prefs["newMessages"] is False
        assert prefs["applicationUpdates"] is True

        again = await client.get("/profile/notifications", headers=headers_for(tenant))
        assert again.json() == response.json()
