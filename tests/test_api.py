"""Tests for the HTTP query surface."""
import pytest
from fastapi.testclient import TestClient

from main import app, get_registry
from sponsorcheck.index_builder import BuildMetadata
from sponsorcheck.sponsor import SponsorRegistry


@pytest.fixture
def metadata():
    return BuildMetadata(
        source="Test register",
        generated_at_utc="2026-10-01T09:30:00.000Z",
        organisation_name_column="Organisation Name",
        rows_parsed=7,
        unique_normalized_keys=4,
    )


@pytest.fixture
def client(sponsor_index, metadata):
    registry = SponsorRegistry.from_index(sponsor_index, metadata)
    app.dependency_overrides[get_registry] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client(tmp_path):
    registry = SponsorRegistry(str(tmp_path / "missing.json"), str(tmp_path / "missing_meta.json"))
    app.dependency_overrides[get_registry] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHome:

    def test_lists_endpoints(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "GET /sponsor/check" in response.json()["endpoints"]

    def test_unknown_route(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json()["success"] is False


class TestSponsorCheck:

    def test_exact(self, client):
        response = client.get("/sponsor/check", params={"company": "Tesco Stores Ltd"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["params"] == {"company": "Tesco Stores Ltd"}
        assert body["match"] == {"matched": True, "type": "exact", "name": "Tesco Stores Limited"}
        assert body["verdict"] == "✅ Sponsor: Tesco Stores Limited"
        assert "suggestions" not in body

    def test_token_overlap(self, client):
        body = client.get("/sponsor/check", params={"company": "Northwest Health Services"}).json()

        assert body["match"]["type"] == "token"
        assert body["match"]["overlap"] == 2
        assert body["verdict"].startswith("⚠️ Sponsor (likely match)")

    def test_no_match_with_suggestions(self, client):
        body = client.get("/sponsor/check", params={"company": "Zebra Logistics"}).json()

        assert body["match"] == {"matched": False}
        assert body["verdict"] == "❌ Not found in sponsor list (may be name mismatch)"
        assert body["suggestions"] == []

    def test_company_required(self, client):
        assert client.get("/sponsor/check").status_code == 422

    def test_index_unavailable(self, broken_client):
        response = broken_client.get("/sponsor/check", params={"company": "Tesco"})

        assert response.status_code == 503


class TestMetadata:

    def test_returns_metadata(self, client, metadata):
        body = client.get("/sponsor/metadata").json()
        assert body["metadata"] == metadata.to_dict()

    def test_missing_metadata(self, broken_client):
        response = broken_client.get("/sponsor/metadata")

        assert response.status_code == 404
        assert response.json()["detail"] == "Sponsor metadata not found"


class TestPhraseScan:

    def test_refusal(self, client):
        body = client.post("/phrases/scan", json={"text": "Sorry, we do not sponsor work visas."}).json()

        assert body["labels"] == ["Explicit no sponsorship"]
        assert body["refusals"] == ["Explicit no sponsorship"]
        assert body["warnings"] == []

    def test_nothing_found(self, client):
        body = client.post("/phrases/scan", json={"text": "Flexible hours."}).json()

        assert body["labels"] == []
        assert body["summary"] == "No obvious refusal language found"

    def test_only_sample_scanned(self, client):
        text = "x" * 6000 + " we do not sponsor"
        body = client.post("/phrases/scan", json={"text": text}).json()

        assert body["labels"] == []


class TestListingCheck:

    def test_company_and_text(self, client):
        response = client.post("/listing/check", json={
            "company": "Barclays Bank UK PLC International Division",
            "text_sample": "Candidates must have the right to work in the UK.",
        })
        body = response.json()

        assert body["sponsor"]["match"]["type"] == "contains"
        assert body["sponsor"]["verdict"] == "⚠️ Sponsor (likely match): Barclays Bank"
        assert body["cos"]["warnings"] == ["Right to work required (warning)"]

    def test_blank_company(self, client):
        body = client.post("/listing/check", json={"company": "  ", "text_sample": ""}).json()

        assert body["params"] == {"company": None}
        assert body["sponsor"]["verdict"] == "—"
        assert body["cos"]["summary"] == "No obvious refusal language found"
