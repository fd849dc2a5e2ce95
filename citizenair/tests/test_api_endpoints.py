"""
Unit tests for API endpoints.

Tests the FastAPI endpoints of the crowdsourcing feature with the idea service
replaced by a mock, so no database is needed.
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from citizenair.api.endpoints.crowdsource import get_idea_service, get_word_frequency_extractor
from citizenair.api.main import app
from citizenair.core.idea_service import IdeaValidationError
from citizenair.models.dtos import (
    DistrictIdeaDTO,
    DistrictIdeasResponse,
    DistrictSummaryDTO,
    WordWeight,
)

CREATED_AT = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_idea_service():
    service = MagicMock()
    service.submit_idea = AsyncMock()
    service.get_district_ideas = AsyncMock()
    service.list_districts = AsyncMock()
    return service


@pytest.fixture
def client(mock_idea_service, extractor):
    app.dependency_overrides[get_idea_service] = lambda: mock_idea_service
    app.dependency_overrides[get_word_frequency_extractor] = lambda: extractor
    # Host must be one of the trusted hosts
    yield TestClient(app, base_url="http://localhost")
    app.dependency_overrides.clear()


def make_idea(idea_id: int, idea: str) -> DistrictIdeaDTO:
    return DistrictIdeaDTO(
        id=idea_id,
        district="แม่ริม",
        province="เชียงใหม่",
        idea=idea,
        author="ชุมชนแม่ริม",
        created_at=CREATED_AT,
        approved=True,
    )


class TestSubmitIdeaEndpoint:
    """Test cases for POST /api/crowdsource/ideas."""

    def test_submit_idea_success(self, client, mock_idea_service):
        mock_idea_service.submit_idea.return_value = make_idea(7, "ปลูกไผ่รอบบ้าน")

        response = client.post(
            "/api/crowdsource/ideas",
            json={"district": "แม่ริม", "province": "เชียงใหม่", "idea": "ปลูกไผ่รอบบ้าน"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["id"] == 7
        assert body["message"] == "ความคิดเห็นถูกส่งเรียบร้อยแล้ว"

        submitted = mock_idea_service.submit_idea.call_args.args[0]
        assert submitted.district == "แม่ริม"
        assert submitted.author is None

    def test_submit_idea_missing_fields(self, client, mock_idea_service):
        mock_idea_service.submit_idea.side_effect = IdeaValidationError("District and idea are required")

        response = client.post("/api/crowdsource/ideas", json={"district": "แม่ริม"})

        assert response.status_code == 400
        assert response.json()["detail"] == "District and idea are required"

    def test_submit_idea_database_error(self, client, mock_idea_service):
        mock_idea_service.submit_idea.side_effect = SQLAlchemyError("connection refused")

        response = client.post("/api/crowdsource/ideas", json={"district": "แม่ริม", "idea": "ปลูกไผ่"})

        assert response.status_code == 500
        assert "Failed to submit idea" in response.json()["detail"]


class TestDistrictIdeasEndpoint:
    """Test cases for GET /api/crowdsource/ideas/{district}."""

    def test_get_district_ideas(self, client, mock_idea_service):
        mock_idea_service.get_district_ideas.return_value = DistrictIdeasResponse(
            district="แม่ริม",
            count=2,
            ideas=[make_idea(2, "ปลูกไผ่"), make_idea(1, "ปลูกต้นไม้")],
            word_cloud_data=[WordWeight(term="ปลูก", weight=10)],
        )

        response = client.get("/api/crowdsource/ideas/แม่ริม")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["district"] == "แม่ริม"
        assert body["count"] == 2
        assert [idea["id"] for idea in body["ideas"]] == [2, 1]
        assert body["word_cloud_data"] == [{"term": "ปลูก", "weight": 10}]
        mock_idea_service.get_district_ideas.assert_awaited_once_with("แม่ริม")

    def test_get_district_ideas_database_error(self, client, mock_idea_service):
        mock_idea_service.get_district_ideas.side_effect = SQLAlchemyError("timeout")

        response = client.get("/api/crowdsource/ideas/แม่ริม")

        assert response.status_code == 500
        assert "Failed to fetch ideas" in response.json()["detail"]

    def test_get_district_ideas_blank_district(self, client, mock_idea_service):
        mock_idea_service.get_district_ideas.side_effect = IdeaValidationError("District parameter is required")

        response = client.get("/api/crowdsource/ideas/%20")

        assert response.status_code == 400


class TestDistrictsEndpoint:
    """Test cases for GET /api/crowdsource/districts."""

    def test_list_districts(self, client, mock_idea_service):
        mock_idea_service.list_districts.return_value = [
            DistrictSummaryDTO(district="แม่ริม", province="เชียงใหม่", idea_count=5, last_updated=CREATED_AT),
            DistrictSummaryDTO(district="ห้วยขวาง", province="กรุงเทพฯ", idea_count=1),
        ]

        response = client.get("/api/crowdsource/districts")

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert body["districts"][0]["district"] == "แม่ริม"
        assert body["districts"][0]["idea_count"] == 5
        assert body["districts"][1]["last_updated"] is None

    def test_list_districts_database_error(self, client, mock_idea_service):
        mock_idea_service.list_districts.side_effect = SQLAlchemyError("boom")

        response = client.get("/api/crowdsource/districts")

        assert response.status_code == 500


class TestWordCloudEndpoint:
    """Test cases for POST /api/crowdsource/wordcloud."""

    def test_word_cloud_from_texts(self, client):
        response = client.post(
            "/api/crowdsource/wordcloud",
            json={"texts": ["ฝุ่นควัน ฝุ่นควัน", "ปลูกไผ่", None, ""]},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "word_cloud_data": [
                {"term": "ฝุ่นควัน", "weight": 10},
                {"term": "ปลูก", "weight": 10},
            ],
        }

    def test_word_cloud_empty(self, client):
        response = client.post("/api/crowdsource/wordcloud", json={"texts": []})

        assert response.status_code == 200
        assert response.json()["word_cloud_data"] == []


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == "CitizenAirService"


def test_unknown_route_returns_404(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
