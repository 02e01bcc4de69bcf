"""
Test suite for company endpoints.

Tests cover:
- Company creation (admin only)
- Listing and filtering
- Retrieval with jobs
- Partial update and deletion (admin only)
"""

import pytest

from app.models import Company


class TestCompanyCreation:
    """Tests for POST /companies"""

    def test_create_company_as_admin(self, client, admin_headers, sample_company_data):
        response = client.post("/companies", json=sample_company_data, headers=admin_headers)

        assert response.status_code == 201
        assert response.json() == {"company": sample_company_data}

    def test_create_company_as_user(self, client, user_headers, sample_company_data):
        response = client.post("/companies", json=sample_company_data, headers=user_headers)
        assert response.status_code == 401

    def test_create_company_anon(self, client, sample_company_data):
        response = client.post("/companies", json=sample_company_data)
        assert response.status_code == 401

    def test_create_company_missing_data(self, client, admin_headers):
        response = client.post("/companies", json={"handle": "new", "numEmployees": 10}, headers=admin_headers)
        assert response.status_code == 400

    def test_create_company_invalid_data(self, client, admin_headers, sample_company_data):
        sample_company_data["logoUrl"] = "not-a-url"
        response = client.post("/companies", json=sample_company_data, headers=admin_headers)

        assert response.status_code == 400
        assert any("logoUrl" in message for message in response.json()["detail"])

    def test_create_company_duplicate(self, client, admin_headers, sample_company_data):
        sample_company_data["handle"] = "c1"
        response = client.post("/companies", json=sample_company_data, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Duplicate company: c1"


class TestCompanyListing:
    """Tests for GET /companies"""

    def test_list_companies_anon(self, client):
        response = client.get("/companies")

        assert response.status_code == 200
        assert response.json() == {
            "companies": [
                {"handle": "c1", "name": "C1", "description": "Desc1", "numEmployees": 1, "logoUrl": "http://c1.img"},
                {"handle": "c2", "name": "C2", "description": "Desc2", "numEmployees": 2, "logoUrl": "http://c2.img"},
                {"handle": "c3", "name": "C3", "description": "Desc3", "numEmployees": 3, "logoUrl": "http://c3.img"},
            ]
        }

    @pytest.mark.parametrize("params,expected", [
        ({"name": "1"}, ["c1"]),
        ({"name": "c", "minEmployees": 2}, ["c2", "c3"]),
        ({"maxEmployees": 1}, ["c1"]),
        ({"minEmployees": 2, "maxEmployees": 2}, ["c2"]),
        ({"name": "nope"}, []),
    ])
    def test_filter_companies(self, client, params, expected):
        response = client.get("/companies", params=params)

        assert response.status_code == 200
        assert [c["handle"] for c in response.json()["companies"]] == expected

    def test_filter_empty_name_lists_all(self, client, db_session):
        db_session.add(Company(handle="c4", name="C4", description="Desc4"))
        db_session.commit()

        response = client.get("/companies", params={"name": ""})

        assert response.status_code == 200
        assert [c["handle"] for c in response.json()["companies"]] == ["c1", "c2", "c3", "c4"]

    def test_filter_min_greater_than_max(self, client):
        response = client.get("/companies", params={"minEmployees": 5, "maxEmployees": 2})
        assert response.status_code == 400

    def test_filter_unknown_parameter(self, client):
        response = client.get("/companies", params={"fake": "blah"})

        assert response.status_code == 400
        assert "fake" in response.json()["detail"]

    def test_filter_invalid_number(self, client):
        response = client.get("/companies", params={"minEmployees": "lots"})
        assert response.status_code == 400


class TestCompanyRetrieval:
    """Tests for GET /companies/{handle}"""

    def test_get_company_with_jobs(self, client):
        response = client.get("/companies/c1")

        assert response.status_code == 200
        company = response.json()["company"]
        assert company["handle"] == "c1"
        assert company["numEmployees"] == 1
        assert [job["title"] for job in company["jobs"]] == ["job1", "job2"]
        assert company["jobs"][0]["equity"] == "0.25"
        assert company["jobs"][0]["companyHandle"] == "c1"

    def test_get_company_without_jobs(self, client, admin_headers, sample_company_data):
        client.post("/companies", json=sample_company_data, headers=admin_headers)

        response = client.get("/companies/new")
        assert response.json()["company"]["jobs"] == []

    def test_get_nonexistent_company(self, client):
        response = client.get("/companies/nope")

        assert response.status_code == 404
        assert response.json()["detail"] == "No company: nope"


class TestCompanyUpdate:
    """Tests for PATCH /companies/{handle}"""

    def test_update_as_admin(self, client, admin_headers):
        response = client.patch("/companies/c1", json={"name": "C1-new"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            "company": {
                "handle": "c1",
                "name": "C1-new",
                "description": "Desc1",
                "numEmployees": 1,
                "logoUrl": "http://c1.img",
            }
        }

    def test_update_renamed_fields(self, client, admin_headers):
        response = client.patch(
            "/companies/c1",
            json={"numEmployees": 50, "logoUrl": None},
            headers=admin_headers,
        )

        company = response.json()["company"]
        assert company["numEmployees"] == 50
        assert company["logoUrl"] is None

    def test_update_as_user(self, client, user_headers):
        response = client.patch("/companies/c1", json={"name": "C1-new"}, headers=user_headers)
        assert response.status_code == 401

    def test_update_anon(self, client):
        response = client.patch("/companies/c1", json={"name": "C1-new"})
        assert response.status_code == 401

    def test_update_nonexistent_company(self, client, admin_headers):
        response = client.patch("/companies/nope", json={"name": "new nope"}, headers=admin_headers)
        assert response.status_code == 404

    def test_update_handle_change(self, client, admin_headers):
        response = client.patch("/companies/c1", json={"handle": "c1-new"}, headers=admin_headers)
        assert response.status_code == 400

    def test_update_invalid_data(self, client, admin_headers):
        response = client.patch("/companies/c1", json={"numEmployees": "many"}, headers=admin_headers)
        assert response.status_code == 400

    def test_update_null_name(self, client, admin_headers):
        response = client.patch("/companies/c1", json={"name": None}, headers=admin_headers)
        assert response.status_code == 400

    def test_update_empty_body(self, client, admin_headers):
        response = client.patch("/companies/c1", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "No data"


class TestCompanyDeletion:
    """Tests for DELETE /companies/{handle}"""

    def test_delete_as_admin(self, client, admin_headers):
        response = client.delete("/companies/c1", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "c1"}
        assert client.get("/companies/c1").status_code == 404

    def test_delete_as_user(self, client, user_headers):
        response = client.delete("/companies/c1", headers=user_headers)
        assert response.status_code == 401

    def test_delete_anon(self, client):
        response = client.delete("/companies/c1")
        assert response.status_code == 401

    def test_delete_nonexistent_company(self, client, admin_headers):
        response = client.delete("/companies/nope", headers=admin_headers)
        assert response.status_code == 404
