"""Tests for company APIs."""

from careerstudio.schemas.job import JobType
from careerstudio.services.companies import generate_slug


class TestSlugs:
    """Tests for slug generation."""

    def test_generate_slug(self):
        assert generate_slug("  Acme Corp!  ") == "acme-corp"
        assert generate_slug("Café & Co.") == "caf-co"
        assert generate_slug("!!!") == "company"


class TestCreateCompany:
    """Test POST /api/companies."""

    def test_create_company(self, client, auth_headers):
        response = client.post("/api/companies", json={"name": "Acme Corp"}, headers=auth_headers)
        assert response.status_code == 201
        company = response.json()["company"]
        assert company["slug"] == "acme-corp"
        assert company["version"] == 1
        assert [s["id"] for s in company["sections"]] == ["hero-1", "about-1", "culture-1", "jobs-1"]
        assert company["theme"]["primaryColor"] == "#3B82F6"

    def test_create_with_theme(self, client, auth_headers):
        response = client.post(
            "/api/companies",
            json={"name": "Acme", "theme": {"primaryColor": "#ff0000"}},
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["company"]["theme"]["primaryColor"] == "#FF0000"

    def test_one_company_per_recruiter(self, client, auth_headers, company):
        response = client.post("/api/companies", json={"name": "Second"}, headers=auth_headers)
        assert response.status_code == 409
        assert response.json()["error"] == "COMPANY_ALREADY_EXISTS"

    def test_slug_collision_suffix(self, client, company, other_auth_headers):
        response = client.post("/api/companies", json={"name": "ACME corp"}, headers=other_auth_headers)
        assert response.status_code == 201
        assert response.json()["company"]["slug"] == "acme-corp-2"

    def test_invalid_sections_rejected(self, client, auth_headers):
        response = client.post(
            "/api/companies",
            json={"name": "Acme", "sections": [{"id": "x", "type": "carousel", "order": 0}]},
            headers=auth_headers,
        )
        assert response.status_code == 422
        assert response.json()["error"] == "INVALID_KIND"

    def test_empty_sections_rejected(self, client, auth_headers):
        response = client.post(
            "/api/companies", json={"name": "Acme", "sections": []}, headers=auth_headers
        )
        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"
        assert client.get("/api/companies/me", headers=auth_headers).status_code == 404

    def test_requires_auth(self, client):
        response = client.post("/api/companies", json={"name": "Acme"})
        assert response.status_code == 401


class TestMyCompany:
    """Test GET/PATCH /api/companies/me."""

    def test_get_my_company(self, client, auth_headers, company):
        response = client.get("/api/companies/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["company"]["name"] == "Acme Corp"

    def test_no_company(self, client, auth_headers):
        response = client.get("/api/companies/me", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "COMPANY_NOT_FOUND"

    def test_theme_is_merged(self, client, auth_headers, company):
        response = client.patch(
            "/api/companies/me",
            json={"theme": {"accentColor": "#000000"}},
            headers=auth_headers,
        )
        assert response.status_code == 200
        theme = response.json()["company"]["theme"]
        assert theme["accentColor"] == "#000000"
        assert theme["primaryColor"] == "#3B82F6"

    def test_invalid_color_rejected(self, client, auth_headers, company):
        response = client.patch(
            "/api/companies/me", json={"theme": {"accentColor": "green"}}, headers=auth_headers
        )
        assert response.status_code == 422

    def test_rename_regenerates_slug(self, client, auth_headers, company):
        response = client.patch("/api/companies/me", json={"name": "Globex"}, headers=auth_headers)
        assert response.json()["company"]["slug"] == "globex"

    def test_content_and_branding(self, client, auth_headers, company):
        response = client.patch(
            "/api/companies/me",
            json={
                "content": {"heroTitle": "Build with us"},
                "logoUrl": "/uploads/x/logo.png",
                "socialLinks": {"linkedin": "https://linkedin.com/company/acme"},
            },
            headers=auth_headers,
        )
        company_json = response.json()["company"]
        assert company_json["content"]["heroTitle"] == "Build with us"
        assert company_json["content"]["heroSubtitle"] == "Build the future with us"
        assert company_json["logoUrl"] == "/uploads/x/logo.png"
        assert company_json["socialLinks"]["linkedin"] == "https://linkedin.com/company/acme"

    def test_unknown_social_platform(self, client, auth_headers, company):
        response = client.patch(
            "/api/companies/me", json={"socialLinks": {"myspace": "x"}}, headers=auth_headers
        )
        assert response.status_code == 422

    def test_sections_replaced(self, client, auth_headers, company):
        response = client.patch(
            "/api/companies/me",
            json={"sections": [{"id": "only", "type": "cta", "order": 0}]},
            headers=auth_headers,
        )
        assert [s["id"] for s in response.json()["company"]["sections"]] == ["only"]

    def test_duplicate_section_ids_rejected(self, client, auth_headers, company):
        response = client.patch(
            "/api/companies/me",
            json={
                "sections": [
                    {"id": "a", "type": "cta", "order": 0},
                    {"id": "a", "type": "text", "order": 1},
                ]
            },
            headers=auth_headers,
        )
        assert response.status_code == 422
        assert response.json()["error"] == "DUPLICATE_ID"

    def test_empty_sections_rejected(self, client, auth_headers, company):
        response = client.patch("/api/companies/me", json={"sections": []}, headers=auth_headers)
        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

        stored = client.get("/api/companies/me", headers=auth_headers).json()["company"]
        assert len(stored["sections"]) == 4
        assert stored["version"] == 1

    def test_unhashable_section_type_rejected(self, client, auth_headers, company):
        response = client.patch(
            "/api/companies/me",
            json={"sections": [{"id": "a", "type": ["hero"], "order": 0}]},
            headers=auth_headers,
        )
        assert response.status_code == 422
        assert response.json()["error"] == "INVALID_KIND"

    def test_non_string_section_id_rejected(self, client, auth_headers, company):
        response = client.patch(
            "/api/companies/me",
            json={"sections": [{"id": {"x": 1}, "type": "cta", "order": 0}]},
            headers=auth_headers,
        )
        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_version_conflict(self, client, auth_headers, company):
        first = client.patch(
            "/api/companies/me", json={"description": "One", "version": 1}, headers=auth_headers
        )
        assert first.status_code == 200
        assert first.json()["company"]["version"] == 2

        stale = client.patch(
            "/api/companies/me", json={"description": "Two", "version": 1}, headers=auth_headers
        )
        assert stale.status_code == 409
        assert stale.json()["error"] == "VERSION_CONFLICT"

    def test_apply_preset(self, client, auth_headers, company):
        response = client.post("/api/companies/me/theme/preset/vibrant", headers=auth_headers)
        theme = response.json()["company"]["theme"]
        assert theme["preset"] == "vibrant"
        assert theme["buttonStyle"] == "pill"

    def test_unknown_preset(self, client, auth_headers, company):
        response = client.post("/api/companies/me/theme/preset/neon", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "UNKNOWN_PRESET"

    def test_list_presets(self, client):
        response = client.get("/api/companies/presets")
        assert len(response.json()["presets"]) == 6


class TestPublicCompanies:
    """Test the public company directory."""

    def test_only_companies_with_jobs(self, client, test_db_session, company, company_jobs, other_auth_headers):
        client.post("/api/companies", json={"name": "Empty Inc"}, headers=other_auth_headers)

        response = client.get("/api/companies/public")
        assert response.status_code == 200
        companies = response.json()["companies"]
        assert [c["slug"] for c in companies] == ["acme-corp"]
        assert companies[0]["jobCount"] == 5
        assert companies[0]["primaryColor"] == "#3B82F6"

    def test_get_by_slug(self, client, company):
        response = client.get("/api/companies/public/acme-corp")
        assert response.status_code == 200
        assert response.json()["company"]["name"] == "Acme Corp"

    def test_unknown_slug(self, client):
        response = client.get("/api/companies/public/nope")
        assert response.status_code == 404


class TestPreview:
    """Test POST /api/companies/me/preview."""

    def test_preview_draft_without_saving(self, client, auth_headers, company):
        response = client.post(
            "/api/companies/me/preview",
            json={
                "name": "Draft Name",
                "sections": [{"id": "c", "type": "cta", "title": "Apply today", "order": 0}],
            },
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert "Apply today" in data["html"]
        assert "Draft Name. All rights reserved." in data["html"]
        assert [s["id"] for s in data["sections"]] == ["c"]

        stored = client.get("/api/companies/me", headers=auth_headers).json()["company"]
        assert stored["name"] == "Acme Corp"
        assert len(stored["sections"]) == 4

    def test_preview_with_job_filters(self, client, auth_headers, add_jobs, company):
        add_jobs(
            company,
            [("Backend Engineer", "Berlin", JobType.FULL_TIME), ("Designer", "Paris", JobType.CONTRACT)],
        )
        response = client.post(
            "/api/companies/me/preview", json={"jobType": "Contract"}, headers=auth_headers
        )
        html = response.json()["html"]
        assert "Designer" in html
        assert "Backend Engineer" not in html
        assert 'data-job-filters="client"' in html
