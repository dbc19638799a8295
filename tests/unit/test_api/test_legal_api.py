"""Tests for the legal reference endpoints."""

from httpx import AsyncClient


class TestLegalOverview:
    async def test_ingests_curated_acts_on_first_read(self, client: AsyncClient) -> None:
        response = await client.get("/api/legal")

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data["acts"]) == 9
        assert data["cases"] == []

    async def test_second_read_does_not_duplicate(self, client: AsyncClient) -> None:
        await client.get("/api/legal")

        data = (await client.get("/api/legal")).json()["data"]
        assert len(data["acts"]) == 9


class TestLegalSearch:
    async def test_blank_query_returns_nothing(self, client: AsyncClient) -> None:
        data = (await client.get("/api/legal/search")).json()["data"]

        assert data == {"query": "", "totalResults": 0, "results": []}

    async def test_finds_acts(self, client: AsyncClient) -> None:
        await client.get("/api/legal")

        data = (await client.get("/api/legal/search", params={"q": "cannabis"})).json()["data"]

        assert data["totalResults"] == 1
        assert data["results"][0]["title"] == "Cannabis Act"
        assert data["results"][0]["type"] == "legal_act"


class TestActsAndCriminalCode:
    async def test_acts_filters(self, client: AsyncClient) -> None:
        await client.get("/api/legal")

        everything = (await client.get("/api/legal/acts", params={"category": "all"})).json()["data"]
        cannabis = (await client.get("/api/legal/acts", params={"search": "cannabis"})).json()["data"]

        assert len(everything) == 9
        assert [a["title"] for a in cannabis] == ["Cannabis Act"]

    async def test_criminal_code_seeded_on_first_use(self, client: AsyncClient) -> None:
        sections = (await client.get("/api/legal/criminal-code")).json()["data"]
        matched = (await client.get("/api/legal/criminal-code", params={"search": "83.01"})).json()["data"]

        assert len(sections) == 8
        assert [s["sectionNumber"] for s in matched] == ["83.01"]


class TestLegalStats:
    async def test_counts(self, client: AsyncClient) -> None:
        await client.get("/api/legal")
        await client.get("/api/legal/criminal-code")

        data = (await client.get("/api/legal/stats")).json()["data"]

        assert data == {"acts": 9, "cases": 0, "criminalCodeSections": 8}
