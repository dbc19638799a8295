"""Tests for the politician endpoints."""

import uuid
from collections.abc import Callable

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from civicos.core.security import PERMISSION_DATA_MANAGE
from civicos.models.politician import ParliamentMember, Politician
from civicos.models.user import User


async def _seed(session: AsyncSession, count: int) -> list[Politician]:
    politicians = [
        Politician(name=f"Member {i:02d}", level="federal", jurisdiction="Canada", riding=f"Riding {i}")
        for i in range(count)
    ]
    session.add_all(politicians)
    await session.commit()
    return politicians


@pytest.fixture
async def freeland(async_session: AsyncSession) -> Politician:
    politician = Politician(
        name="Chrystia Freeland",
        level="federal",
        jurisdiction="Canada",
        party="Liberal",
        riding="University—Rosedale",
        trust_score=67,
    )
    async_session.add(politician)
    await async_session.commit()
    return politician


class TestIngestAuthorization:
    """POST /api/politicians/ingest requires admin.data.manage."""

    async def test_anonymous_is_401(self, client: AsyncClient) -> None:
        response = await client.post("/api/politicians/ingest")
        assert response.status_code == 401

    async def test_citizen_is_403(
        self, client: AsyncClient, citizen_user: User, auth_headers: Callable[..., dict[str, str]]
    ) -> None:
        response = await client.post("/api/politicians/ingest", headers=auth_headers(citizen_user))

        assert response.status_code == 403
        assert PERMISSION_DATA_MANAGE in response.json()["message"]

    async def test_data_manager_runs_ingestion(
        self, client: AsyncClient, data_manager: User, auth_headers: Callable[..., dict[str, str]]
    ) -> None:
        response = await client.post("/api/politicians/ingest", headers=auth_headers(data_manager))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["inserted"] == 6
        assert data["scored"] == 6
        assert {source["kind"] for source in data["sources"]} == {"fallback"}

    async def test_admin_role_implies_permission(
        self, client: AsyncClient, citizen_user: User, make_token: Callable[..., str]
    ) -> None:
        citizen_user.role = "admin"
        token = make_token(citizen_user, [])
        response = await client.post("/api/politicians/ingest", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200


class TestListPoliticians:
    async def test_second_page(self, client: AsyncClient, async_session: AsyncSession) -> None:
        await _seed(async_session, 25)

        response = await client.get("/api/politicians", params={"limit": 10, "page": 2})

        assert response.status_code == 200
        body = response.json()
        assert [p["name"] for p in body["data"]] == [f"Member {i:02d}" for i in range(10, 20)]
        assert body["pagination"] == {
            "page": 2,
            "limit": 10,
            "total": 25,
            "totalPages": 3,
            "hasNext": True,
            "hasPrev": True,
        }

    async def test_limit_clamped(self, client: AsyncClient, async_session: AsyncSession) -> None:
        await _seed(async_session, 3)

        response = await client.get("/api/politicians", params={"limit": 1000})
        assert response.json()["pagination"]["limit"] == 100

    async def test_zero_limit_rejected(self, client: AsyncClient) -> None:
        response = await client.get("/api/politicians", params={"limit": 0})

        assert response.status_code == 400
        assert response.json()["message"].startswith("limit")

    async def test_page_beyond_bound_rejected(self, client: AsyncClient) -> None:
        response = await client.get("/api/politicians", params={"page": 10**19})

        assert response.status_code == 400
        assert response.json()["message"].startswith("page")

    async def test_last_allowed_page_is_empty(self, client: AsyncClient, async_session: AsyncSession) -> None:
        await _seed(async_session, 3)

        response = await client.get("/api/politicians", params={"page": 10_000})
        assert response.status_code == 200
        assert response.json()["data"] == []

    async def test_filters_apply_to_total(self, client: AsyncClient, async_session: AsyncSession) -> None:
        await _seed(async_session, 12)

        response = await client.get("/api/politicians", params={"search": "Member 0"})
        assert response.json()["pagination"]["total"] == 10


class TestSearchAndStats:
    async def test_blank_search_is_400(self, client: AsyncClient) -> None:
        response = await client.get("/api/politicians/search", params={"q": " "})

        assert response.status_code == 400
        assert response.json()["message"] == "Search query is required"

    async def test_search(self, client: AsyncClient, freeland: Politician) -> None:
        response = await client.get("/api/politicians/search", params={"q": "liberal"})
        assert [p["name"] for p in response.json()["data"]] == ["Chrystia Freeland"]

    async def test_stats(self, client: AsyncClient, freeland: Politician) -> None:
        data = (await client.get("/api/politicians/stats")).json()["data"]

        assert data["total"] == 1
        assert data["byLevel"] == {"federal": 1}
        assert data["averageTrustScore"] == 67.0


class TestPoliticianDetail:
    async def test_detail(self, client: AsyncClient, freeland: Politician) -> None:
        response = await client.get(f"/api/politicians/{freeland.id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Chrystia Freeland"
        assert data["trustScore"] == 67
        assert data["stats"] == {"statements": 0, "positions": 0}
        assert data["campaignFinance"] == []
        assert data["truthTracking"] is None
        assert data["parliamentMember"] is None

    async def test_detail_includes_commons_entry(self, client: AsyncClient, async_session: AsyncSession) -> None:
        async_session.add(
            ParliamentMember(member_id="25524", name="Pierre Poilievre", party="Conservative", constituency="Carleton")
        )
        await async_session.commit()
        politician = Politician(
            name="Pierre Poilievre", level="federal", jurisdiction="Canada", parliament_member_id="25524"
        )
        async_session.add(politician)
        await async_session.commit()

        data = (await client.get(f"/api/politicians/{politician.id}")).json()["data"]

        assert data["parliamentMemberId"] == "25524"
        assert data["parliamentMember"]["constituency"] == "Carleton"
        assert data["parliamentMember"]["active"] is True

    async def test_unknown_is_404(self, client: AsyncClient) -> None:
        response = await client.get(f"/api/politicians/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["message"] == "Politician not found"

    async def test_malformed_id_is_400(self, client: AsyncClient) -> None:
        response = await client.get("/api/politicians/not-a-uuid")
        assert response.status_code == 400


class TestUpdatePolitician:
    async def test_requires_permission(
        self,
        client: AsyncClient,
        freeland: Politician,
        citizen_user: User,
        auth_headers: Callable[..., dict[str, str]],
    ) -> None:
        response = await client.put(
            f"/api/politicians/{freeland.id}", json={"bio": "x"}, headers=auth_headers(citizen_user)
        )
        assert response.status_code == 403

    async def test_updates(
        self,
        client: AsyncClient,
        freeland: Politician,
        data_manager: User,
        auth_headers: Callable[..., dict[str, str]],
    ) -> None:
        response = await client.put(
            f"/api/politicians/{freeland.id}",
            json={"bio": "Former Minister of Finance", "committees": ["Finance"]},
            headers=auth_headers(data_manager),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["bio"] == "Former Minister of Finance"
        assert data["committees"] == ["Finance"]

    async def test_vote_tally_and_expenses_stored(
        self,
        client: AsyncClient,
        freeland: Politician,
        data_manager: User,
        auth_headers: Callable[..., dict[str, str]],
    ) -> None:
        response = await client.put(
            f"/api/politicians/{freeland.id}",
            json={"votingRecord": {"yes": 40, "no": 3}, "expenses": {"total": 12000, "year": 2024}},
            headers=auth_headers(data_manager),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["votingRecord"] == {"yes": 40, "no": 3}
        assert data["expenses"] == {"total": 12000.0, "year": 2024}

    @pytest.mark.parametrize(
        "payload",
        [
            {"votingRecord": {"yes": 10**400}},
            {"votingRecord": {"yes": -1}},
            {"expenses": {"total": "1e999"}},
            {"expenses": {"total": "nan"}},
            {"expenses": {"total": 5e9}},
        ],
    )
    async def test_out_of_range_tallies_rejected(
        self,
        client: AsyncClient,
        freeland: Politician,
        data_manager: User,
        auth_headers: Callable[..., dict[str, str]],
        payload: dict,
    ) -> None:
        response = await client.put(
            f"/api/politicians/{freeland.id}", json=payload, headers=auth_headers(data_manager)
        )

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestStatements:
    async def test_add_and_list(
        self,
        client: AsyncClient,
        freeland: Politician,
        citizen_user: User,
        auth_headers: Callable[..., dict[str, str]],
    ) -> None:
        created = await client.post(
            f"/api/politicians/{freeland.id}/statements",
            json={"statement": "The budget is balanced."},
            headers=auth_headers(citizen_user),
        )
        assert created.status_code == 201

        listed = await client.get(f"/api/politicians/{freeland.id}/statements")
        assert [s["statement"] for s in listed.json()["data"]] == ["The budget is balanced."]

    async def test_requires_authentication(self, client: AsyncClient, freeland: Politician) -> None:
        response = await client.post(f"/api/politicians/{freeland.id}/statements", json={"statement": "Hi"})
        assert response.status_code == 401

    async def test_unknown_politician_is_404(
        self, client: AsyncClient, citizen_user: User, auth_headers: Callable[..., dict[str, str]]
    ) -> None:
        response = await client.post(
            f"/api/politicians/{uuid.uuid4()}/statements",
            json={"statement": "Hello"},
            headers=auth_headers(citizen_user),
        )
        assert response.status_code == 404
