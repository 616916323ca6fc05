"""Tests for rental application submission and review."""
import uuid

from models.enums import PropertyStatus


class TestSubmitApplication:
    """Tests for POST /applications."""

    async def test_tenant_applies(
        self, client, tenant, landlord, headers_for, make_property, application_payload
    ):
        prop = await make_property(landlord)

        response = await client.post(
            "/applications",
            json=application_payload(prop.id),
            headers=headers_for(tenant),
        )

        assert response.status_code == 201
        application = response.json()["application"]
        assert application["status"] == "pending"
        assert application["applicantId"] == str(tenant.id)
        assert application["propertyId"] == str(prop.id)
        assert application["personalInfo"]["phoneNumber"] == "+442083661177"
        assert application["employment"]["duration"] == "3 years"
        assert application["rentalHistory"]["monthlyRent"] == 1200
        assert application["property"]["title"] == prop.title
        assert application["applicant"]["email"] == tenant.email

    async def test_ssn_is_never_echoed(
        self, client, tenant, landlord, headers_for, make_property, application_payload
    ):
        prop = await make_property(landlord)

        response = await client.post(
            "/applications",
            json=application_payload(prop.id),
            headers=headers_for(tenant),
        )

        body = response.text
        assert "ssn" not in body.lower()
        assert "123-45-6789" not in body

    async def test_duplicate_application(
        self, client, tenant, landlord, headers_for, make_property, application_payload
    ):
        prop = await make_property(landlord)
        payload = application_payload(prop.id)
        await client.post("/applications", json=payload, headers=headers_for(tenant))

        response = await client.post(
            "/applications", json=payload, headers=headers_for(tenant)
        )

        assert response.status_code == 400
        assert response.json() == {"error": "You have already applied for this property"}

    async def test_unavailable_property(
        self, client, tenant, landlord, headers_for, make_property, application_payload
    ):
        prop = await make_property(landlord, status=PropertyStatus.RENTED)

        response = await client.post(
            "/applications",
            json=application_payload(prop.id),
            headers=headers_for(tenant),
        )

        assert response.status_code == 400
        assert response.json() == {"error": "This property is no longer available"}

    async def test_unknown_property(self, client, tenant, headers_for, application_payload):
        response = await client.post(
            "/applications",
            json=application_payload(uuid.uuid4()),
            headers=headers_for(tenant),
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Property not found"}

    async def test_landlord_cannot_apply(
        self, client, landlord, headers_for, make_property, application_payload
    ):
        prop = await make_property(landlord)

        response = await client.post(
            "/applications",
            json=application_payload(prop.id),
            headers=headers_for(landlord),
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Only tenants can submit applications"}

    async def test_invalid_phone_number(
        self, client, tenant, landlord, headers_for, make_property, application_payload
    ):
        prop = await make_property(landlord)
        payload = application_payload(prop.id)
        payload["personalInfo"]["phoneNumber"] = "12345"

        response = await client.post(
            "/applications", json=payload, headers=headers_for(tenant)
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith(
            "Invalid value for personalInfo.phoneNumber"
        )


class TestListApplications:
    """Tests for GET /applications."""

    async def test_scoping_by_role(
        self,
        client,
        tenant,
        other_tenant,
        landlord,
        manager,
        headers_for,
        make_property,
        application_payload,
    ):
        mine = await make_property(landlord, title="Landlord flat")
        theirs = await make_property(manager, title="Managed flat")
        await client.post(
            "/applications", json=application_payload(mine.id), headers=headers_for(tenant)
        )
        await client.post(
            "/applications",
            json=application_payload(theirs.id),
            headers=headers_for(other_tenant),
        )

        tenant_view = await client.get("/applications", headers=headers_for(tenant))
        landlord_view = await client.get("/applications", headers=headers_for(landlord))

        assert [a["propertyId"] for a in tenant_view.json()["applications"]] == [
            str(mine.id)
        ]
        assert [a["applicantId"] for a in landlord_view.json()["applications"]] == [
            str(tenant.id)
        ]

    async def test_owner_without_listings_sees_nothing(self, client, manager, headers_for):
        response = await client.get("/applications", headers=headers_for(manager))

        assert response.status_code == 200
        assert response.json() == {"applications": []}

    async def test_filters(
        self,
        client,
        tenant,
        other_tenant,
        landlord,
        headers_for,
        make_property,
        application_payload,
    ):
        first = await make_property(landlord, title="First")
        second = await make_property(landlord, title="Second")
        await client.post(
            "/applications", json=application_payload(first.id), headers=headers_for(tenant)
        )
        submitted = await client.post(
            "/applications",
            json=application_payload(second.id),
            headers=headers_for(other_tenant),
        )
        await client.patch(
            f"/applications/{submitted.json()['application']['id']}",
            json={"status": "under_review"},
            headers=headers_for(landlord),
        )

        by_property = await client.get(
            "/applications",
            params={"propertyId": str(first.id)},
            headers=headers_for(landlord),
        )
        by_status = await client.get(
            "/applications",
            params={"status": "under_review"},
            headers=headers_for(landlord),
        )

        assert [a["propertyId"] for a in by_property.json()["applications"]] == [
            str(first.id)
        ]
        assert [a["propertyId"] for a in by_status.json()["applications"]] == [
            str(second.id)
        ]

    async def test_invalid_status_filter(self, client, tenant, headers_for):
        response = await client.get(
            "/applications", params={"status": "lost"}, headers=headers_for(tenant)
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid status"}

    async def test_status_filter_is_case_sensitive(self, client, tenant, headers_for):
        response = await client.get(
            "/applications", params={"status": "PENDING"}, headers=headers_for(tenant)
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid status"}


class TestGetApplication:
    """Tests for GET /applications/{id}."""

    async def test_visible_to_applicant_and_owner_only(
        self,
        client,
        tenant,
        other_tenant,
        landlord,
        headers_for,
        make_property,
        application_payload,
    ):
        prop = await make_property(landlord)
        submitted = await client.post(
            "/applications", json=application_payload(prop.id), headers=headers_for(tenant)
        )
        application_id = submitted.json()["application"]["id"]

        as_applicant = await client.get(
            f"/applications/{application_id}", headers=headers_for(tenant)
        )
        as_owner = await client.get(
            f"/applications/{application_id}", headers=headers_for(landlord)
        )
        as_stranger = await client.get(
            f"/applications/{application_id}", headers=headers_for(other_tenant)
        )

        assert as_applicant.status_code == 200
        assert as_owner.status_code == 200
        assert as_stranger.status_code == 403
        assert as_stranger.json() == {"error": "Not authorized"}

    async def test_unknown_application(self, client, tenant, headers_for):
        response = await client.get(
            f"/applications/{uuid.uuid4()}", headers=headers_for(tenant)
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Application not found"}


class TestUpdateApplicationStatus:
    """Tests for PATCH /applications/{id}."""

    async def _submit(self, client, tenant, prop, headers_for, application_payload):
        response = await client.post(
            "/applications", json=application_payload(prop.id), headers=headers_for(tenant)
        )
        return response.json()["application"]["id"]

    async def test_approval_marks_property_pending(
        self, client, tenant, landlord, headers_for, make_property, application_payload
    ):
        prop = await make_property(landlord)
        application_id = await self._submit(
            client, tenant, prop, headers_for, application_payload
        )

        response = await client.patch(
            f"/applications/{application_id}",
            json={"status": "approved"},
            headers=headers_for(landlord),
        )

        assert response.status_code == 200
        assert response.json()["application"]["status"] == "approved"
        detail = await client.get(f"/properties/{prop.id}")
        assert detail.json()["property"]["status"] == "pending"
        listing = await client.get("/properties")
        assert listing.json()["properties"] == []

    async def test_rejection_leaves_property_available(
        self, client, tenant, landlord, headers_for, make_property, application_payload
    ):
        prop = await make_property(landlord)
        application_id = await self._submit(
            client, tenant, prop, headers_for, application_payload
        )

        response = await client.patch(
            f"/applications/{application_id}",
            json={"status": "rejected"},
            headers=headers_for(landlord),
        )

        assert response.json()["application"]["status"] == "rejected"
        detail = await client.get(f"/properties/{prop.id}")
        assert detail.json()["property"]["status"] == "available"

    async def test_invalid_status(
        self, client, tenant, landlord, headers_for, make_property, application_payload
    ):
        prop = await make_property(landlord)
        application_id = await self._submit(
            client, tenant, prop, headers_for, application_payload
        )

        missing = await client.patch(
            f"/applications/{application_id}", json={}, headers=headers_for(landlord)
        )
        bogus = await client.patch(
            f"/applications/{application_id}",
            json={"status": "archived"},
            headers=headers_for(landlord),
        )

        assert missing.status_code == 400
        assert missing.json() == {"error": "Invalid status"}
        assert bogus.status_code == 400

    async def test_status_must_match_exactly(
        self, client, tenant, landlord, headers_for, make_property, application_payload
    ):
        prop = await make_property(landlord)
        application_id = await self._submit(
            client, tenant, prop, headers_for, application_payload
        )

        for status in ("APPROVED", " approved ", "Approved"):
            response = await client.patch(
                f"/applications/{application_id}",
                json={"status": status},
                headers=headers_for(landlord),
            )
            assert response.status_code == 400
            assert response.json() == {"error": "Invalid status"}

        detail = await client.get(f"/properties/{prop.id}")
        assert detail.json()["property"]["status"] == "available"
        application = await client.get(
            f"/applications/{application_id}", headers=headers_for(tenant)
        )
        assert application.json()["application"]["status"] == "pending"

    async def test_only_owner_can_review(
        self, client, tenant, landlord, headers_for, make_property, application_payload
    ):
        prop = await make_property(landlord)
        application_id = await self._submit(
            client, tenant, prop, headers_for, application_payload
        )

        response = await client.patch(
            f"/applications/{application_id}",
            json={"status": "approved"},
            headers=headers_for(tenant),
        )

        assert response.status_code == 403
        assert response.json() == {
            "error": "Only the property owner can update application status"
        }
