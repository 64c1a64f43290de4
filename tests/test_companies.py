"""
Test suite for companies.

Tests cover:
- Repository operations (create, list with filters, get, update, delete)
- Company endpoints and their authorization
"""

import pytest

from jobly.core.exceptions import BadRangeError, BadRequestError, EmptyUpdateError, NotFoundError
from jobly.crud import company as company_crud
from jobly.schemas.company import CompanyCreateRequest

C1 = {"handle": "c1", "name": "C1", "description": "Desc1", "num_employees": 1, "logo_url": "http://c1.img"}
C2 = {"handle": "c2", "name": "C2", "description": "Desc2", "num_employees": 2, "logo_url": "http://c2.img"}
C3 = {"handle": "c3", "name": "C3", "description": "Desc3", "num_employees": 3, "logo_url": "http://c3.img"}


@pytest.fixture
def new_company_data():
    return {
        "handle": "new",
        "name": "New",
        "description": "New Description",
        "numEmployees": 1,
        "logoUrl": "http://new.img",
    }


class TestCompanyRepository:
    """Tests for jobly.crud.company"""

    def test_create(self, seeded_db, new_company_data):
        """Test creating a company"""
        company = company_crud.create(seeded_db, CompanyCreateRequest(**new_company_data))

        assert company == {
            "handle": "new",
            "name": "New",
            "description": "New Description",
            "num_employees": 1,
            "logo_url": "http://new.img",
        }

    def test_create_duplicate(self, seeded_db, new_company_data):
        """Test that a duplicate handle is rejected"""
        company_crud.create(seeded_db, CompanyCreateRequest(**new_company_data))

        with pytest.raises(BadRequestError):
            company_crud.create(seeded_db, CompanyCreateRequest(**new_company_data))

    def test_get_multi_no_filter(self, seeded_db):
        """Test listing all companies"""
        assert company_crud.get_multi(seeded_db, {}) == [C1, C2, C3]

    @pytest.mark.parametrize("filters, expected", [
        ({"nameLike": "2"}, [C2]),
        ({"nameLike": "c2"}, [C2]),
        ({"minEmployees": 2}, [C2, C3]),
        ({"maxEmployees": 1}, [C1]),
        ({"nameLike": "c", "minEmployees": 3, "maxEmployees": 10}, [C3]),
        ({"handle": "c1"}, [C1, C2, C3]),
    ])
    def test_get_multi_filters(self, seeded_db, filters, expected):
        """Test filtering companies"""
        assert company_crud.get_multi(seeded_db, filters) == expected

    def test_get_multi_bad_range(self, seeded_db):
        """Test that minEmployees > maxEmployees is rejected"""
        with pytest.raises(BadRangeError):
            company_crud.get_multi(seeded_db, {"minEmployees": 9, "maxEmployees": 1})

    def test_get_with_jobs(self, seeded_db):
        """Test that a company comes with its jobs"""
        company = company_crud.get_by_handle(seeded_db, "c1")

        assert company == {
            **C1,
            "jobs": [
                {"id": 1, "title": "j1", "salary": 0, "equity": 1.0},
                {"id": 2, "title": "j2", "salary": 100, "equity": 0.5},
            ],
        }

    def test_get_without_jobs(self, seeded_db):
        assert company_crud.get_by_handle(seeded_db, "c3") == {**C3, "jobs": []}

    def test_get_not_found(self, seeded_db):
        with pytest.raises(NotFoundError):
            company_crud.get_by_handle(seeded_db, "nope")

    def test_update(self, seeded_db):
        """Test a full update through the field translation"""
        company = company_crud.update(seeded_db, "c1", {
            "name": "New",
            "description": "New Description",
            "numEmployees": 10,
            "logoUrl": "http://new.img",
        })

        assert company == {
            "handle": "c1",
            "name": "New",
            "description": "New Description",
            "num_employees": 10,
            "logo_url": "http://new.img",
        }

    def test_update_null_fields(self, seeded_db):
        """Test that None sets nullable columns to NULL"""
        company = company_crud.update(seeded_db, "c1", {"numEmployees": None, "logoUrl": None})

        assert company["num_employees"] is None
        assert company["logo_url"] is None
        assert company["name"] == "C1"

    def test_update_not_found(self, seeded_db):
        with pytest.raises(NotFoundError):
            company_crud.update(seeded_db, "nope", {"name": "New"})

    def test_update_no_data(self, seeded_db):
        with pytest.raises(EmptyUpdateError):
            company_crud.update(seeded_db, "c1", {})

    def test_update_duplicate_name(self, seeded_db):
        with pytest.raises(BadRequestError):
            company_crud.update(seeded_db, "c1", {"name": "C2"})

    def test_delete(self, seeded_db):
        """Test that deleting a company also deletes its jobs"""
        company_crud.delete(seeded_db, "c1")

        assert [c["handle"] for c in company_crud.get_multi(seeded_db)] == ["c2", "c3"]
        with pytest.raises(NotFoundError):
            company_crud.get_by_handle(seeded_db, "c1")

    def test_delete_not_found(self, seeded_db):
        with pytest.raises(NotFoundError):
            company_crud.delete(seeded_db, "nope")


class TestCompanyEndpoints:
    """Tests for /companies"""

    def test_create_as_admin(self, client, seeded_db, admin_headers, new_company_data):
        response = client.post("/api/v1/companies/", json=new_company_data, headers=admin_headers)

        assert response.status_code == 201
        assert response.json() == {"company": new_company_data}

    def test_create_forbidden_for_non_admin(self, client, seeded_db, user_headers, new_company_data):
        response = client.post("/api/v1/companies/", json=new_company_data, headers=user_headers)
        assert response.status_code == 403

    def test_create_unauthorized_for_anon(self, client, seeded_db, new_company_data):
        response = client.post("/api/v1/companies/", json=new_company_data)
        assert response.status_code == 401

    def test_create_missing_data(self, client, seeded_db, admin_headers):
        response = client.post("/api/v1/companies/", json={"handle": "new"}, headers=admin_headers)
        assert response.status_code == 422

    def test_list_for_anon(self, client, seeded_db):
        response = client.get("/api/v1/companies/")

        assert response.status_code == 200
        assert [c["handle"] for c in response.json()["companies"]] == ["c1", "c2", "c3"]
        assert response.json()["companies"][0]["numEmployees"] == 1

    def test_list_with_filters(self, client, seeded_db):
        response = client.get("/api/v1/companies/?nameLike=c&minEmployees=2&maxEmployees=2")

        assert response.status_code == 200
        assert [c["handle"] for c in response.json()["companies"]] == ["c2"]

    def test_list_min_employees_zero(self, client, seeded_db):
        """Test that minEmployees=0 is accepted and does not filter"""
        response = client.get("/api/v1/companies/?minEmployees=0")

        assert response.status_code == 200
        assert len(response.json()["companies"]) == 3

    def test_list_bad_range(self, client, seeded_db):
        response = client.get("/api/v1/companies/?minEmployees=3&maxEmployees=1")
        assert response.status_code == 400

    def test_list_bad_range_zero_max(self, client, seeded_db):
        response = client.get("/api/v1/companies/?minEmployees=5&maxEmployees=0")
        assert response.status_code == 400

    def test_get(self, client, seeded_db):
        response = client.get("/api/v1/companies/c2")

        assert response.status_code == 200
        company = response.json()["company"]
        assert company["logoUrl"] == "http://c2.img"
        assert company["jobs"] == [{"id": 3, "title": "j3", "salary": 1000, "equity": 0.0}]

    def test_get_not_found(self, client, seeded_db):
        response = client.get("/api/v1/companies/nope")

        assert response.status_code == 404
        assert "no company" in response.json()["detail"].lower()

    def test_update_as_admin(self, client, seeded_db, admin_headers):
        response = client.patch("/api/v1/companies/c1", json={"name": "C1-new"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["company"]["name"] == "C1-new"

    def test_update_forbidden_for_non_admin(self, client, seeded_db, user_headers):
        response = client.patch("/api/v1/companies/c1", json={"name": "C1-new"}, headers=user_headers)
        assert response.status_code == 403

    def test_update_handle_not_allowed(self, client, seeded_db, admin_headers):
        response = client.patch("/api/v1/companies/c1", json={"handle": "c1-new"}, headers=admin_headers)
        assert response.status_code == 422

    def test_update_no_data(self, client, seeded_db, admin_headers):
        response = client.patch("/api/v1/companies/c1", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "No data"

    def test_update_not_found(self, client, seeded_db, admin_headers):
        response = client.patch("/api/v1/companies/nope", json={"name": "New"}, headers=admin_headers)
        assert response.status_code == 404

    def test_delete_as_admin(self, client, seeded_db, admin_headers):
        response = client.delete("/api/v1/companies/c1", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "c1"}

    def test_delete_forbidden_for_non_admin(self, client, seeded_db, user_headers):
        response = client.delete("/api/v1/companies/c1", headers=user_headers)
        assert response.status_code == 403

    def test_delete_not_found(self, client, seeded_db, admin_headers):
        response = client.delete("/api/v1/companies/nope", headers=admin_headers)
        assert response.status_code == 404
