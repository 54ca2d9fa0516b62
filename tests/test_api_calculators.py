"""Tests for calculator catalog and scoring endpoints."""

import pytest
from httpx import AsyncClient


class TestCatalogEndpoints:
    """Test calculator listing and detail."""

    @pytest.mark.asyncio
    async def test_list_calculators(self, client: AsyncClient) -> None:
        """Test every calculator is listed."""
        response = await client.get("/calculators")
        assert response.status_code == 200
        types = {item["type"] for item in response.json()}
        assert {"audit", "epds", "score2", "westleycroupscore"} <= types
        assert len(types) == 10

    @pytest.mark.asyncio
    async def test_get_calculator(self, client: AsyncClient) -> None:
        """Test calculator detail includes fields and steps."""
        response = await client.get("/calculators/ipss")
        data = response.json()
        assert response.status_code == 200
        assert data["allowed_genders"] == ["male"]
        assert data["min_age"] == 40
        assert len(data["fields"]) == 8
        assert data["steps"][0]["id"] == "questions"

    @pytest.mark.asyncio
    async def test_unknown_calculator_404(self, client: AsyncClient) -> None:
        """Test unknown calculators return 404."""
        response = await client.get("/calculators/nope")
        assert response.status_code == 404


class TestScoreEndpoint:
    """Test stateless scoring."""

    @pytest.mark.asyncio
    async def test_score_audit(self, client: AsyncClient) -> None:
        """Test scoring a complete AUDIT."""
        answers = {f"question{i}": 1 for i in range(1, 11)}
        response = await client.post("/calculators/audit/score", json={"answers": answers})
        data = response.json()
        assert response.status_code == 200
        assert data["calculator_type"] == "audit"
        assert data["result"]["score"] == 10
        assert data["result"]["risk_level"] == "high"

    @pytest.mark.asyncio
    async def test_missing_answers_422(self, client: AsyncClient) -> None:
        """Test missing required answers return violations."""
        response = await client.post("/calculators/audit/score", json={"answers": {"question1": 1}})
        assert response.status_code == 422
        violations = response.json()["detail"]["violations"]
        assert len(violations) == 9
        assert violations[0]["code"] == "missing"

    @pytest.mark.asyncio
    async def test_out_of_range_422(self, client: AsyncClient) -> None:
        """Test out-of-range answers return violations."""
        answers = {"nausea": 9, "vomiting": 1, "retching": 1}
        response = await client.post("/calculators/puqe/score", json={"answers": answers})
        assert response.status_code == 422
        assert response.json()["detail"]["violations"][0]["field"] == "nausea"

    @pytest.mark.asyncio
    async def test_gender_restriction_422(self, client: AsyncClient) -> None:
        """Test ineligible patients are rejected."""
        answers = {"nausea": 2, "vomiting": 2, "retching": 2}
        response = await client.post(
            "/calculators/puqe/score",
            json={"answers": answers, "patient": {"gender": "male", "age": 30}},
        )
        assert response.status_code == 422
        assert response.json()["detail"]["violations"][0]["field"] == "gender"

    @pytest.mark.asyncio
    async def test_score2_uses_default_targets(self, client: AsyncClient) -> None:
        """Test SCORE2 scoring fills targets from defaults."""
        response = await client.post(
            "/calculators/score2/score",
            json={
                "answers": {"systolic_bp": 150, "ldl": 4.5, "smoking": 1},
                "patient": {"gender": "male", "age": 60},
            },
        )
        data = response.json()
        assert response.status_code == 200
        assert data["result"]["details"]["target_risk"] < data["result"]["details"]["current_risk"]

    @pytest.mark.asyncio
    async def test_score2_without_gender_422(self, client: AsyncClient) -> None:
        """Test SCORE2 scoring rejects an unset sex."""
        response = await client.post(
            "/calculators/score2/score",
            json={"answers": {"systolic_bp": 150, "ldl": 4.5, "smoking": 1}, "patient": {"age": 60}},
        )
        assert response.status_code == 422
        assert response.json()["detail"]["violations"][0]["field"] == "gender"

    @pytest.mark.asyncio
    async def test_score_unknown_404(self, client: AsyncClient) -> None:
        """Test scoring an unknown calculator returns 404."""
        response = await client.post("/calculators/nope/score", json={"answers": {}})
        assert response.status_code == 404


class TestScore2Endpoint:
    """Test the SCORE2 risk assessment endpoint."""

    @pytest.mark.asyncio
    async def test_assess(self, client: AsyncClient) -> None:
        """Test a full assessment."""
        response = await client.post(
            "/score2/assess",
            json={"gender": "male", "age": 65, "smoking": True, "systolic_bp": 170, "ldl": 5.8},
        )
        data = response.json()
        assert response.status_code == 200
        assert data["risk_level"] == "very_high"
        assert data["absolute_risk_reduction"] == data["current_risk"] - data["target_risk"]
        assert set(data["attribution"]) == {"blood_pressure", "ldl", "smoking"}
        assert data["ldl_reference_range"] == [2.0, 5.3]

    @pytest.mark.asyncio
    async def test_assess_requires_measurements(self, client: AsyncClient) -> None:
        """Test missing measurements fail request validation."""
        response = await client.post("/score2/assess", json={"gender": "female"})
        assert response.status_code == 422
