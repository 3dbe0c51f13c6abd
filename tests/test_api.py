"""HTTP-level tests: routing, payloads and the plain-text 500 contract."""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import async_sessionmaker

from skillswap import main
from skillswap.exceptions import StoreFailure
from skillswap.services.match_service import MatchService


def _pair(a, b):
    return {"from_user": a, "to_user": b}


class TestMatchEndpoints:

    @pytest.mark.asyncio
    async def test_like_promote_and_list_flow(self, api_client):
        resp = await api_client.post("/match/add_like", json=_pair(1, 2))
        assert resp.status_code == 200
        assert resp.json() == "Like registrado com sucesso"

        resp = await api_client.get("/match/buscar_likes/2")
        assert resp.status_code == 200
        assert resp.json() == [{
            "user_id": 1,
            "name": "Ana",
            "is_mutual": False,
            "sub_skill_id": 4,
            "skill_description": "Introdução a Python",
            "skill_value": 80.0,
        }]

        resp = await api_client.get("/match/buscar_meus_likes/1")
        assert [item["user_id"] for item in resp.json()] == [2]

        resp = await api_client.put("/match", json=_pair(1, 2))
        assert resp.status_code == 200
        assert resp.json() == "Match confirmado com sucesso"

        assert (await api_client.get("/match/2")).json() == [1]
        assert (await api_client.get("/match/1")).json() == []
        assert (await api_client.get("/match/mutual/1")).json() == [2]

        resp = await api_client.get("/match/all/2")
        assert resp.status_code == 200
        assert resp.json()[0]["own_sub_skill_id"] == 3

    @pytest.mark.asyncio
    async def test_repeated_like_and_reversed_promotion_are_200(self, api_client):
        await api_client.post("/match/add_like", json=_pair(1, 2))

        resp = await api_client.post("/match/add_like", json=_pair(1, 2))
        assert resp.status_code == 200
        assert resp.json() == "Like já registrado"

        resp = await api_client.put("/match", json=_pair(2, 1))
        assert resp.status_code == 200
        assert resp.json() == "Nenhum like pendente para confirmar"

    @pytest.mark.asyncio
    async def test_delete_with_reversed_body(self, api_client):
        await api_client.post("/match/add_like", json=_pair(1, 2))
        await api_client.put("/match", json=_pair(1, 2))

        resp = await api_client.request("DELETE", "/match/delete", json=_pair(2, 1))

        assert resp.status_code == 200
        assert (await api_client.get("/match/2")).json() == []

    @pytest.mark.asyncio
    async def test_exclude_history_query_param(self, api_client):
        await api_client.post("/match/add_like", json=_pair(1, 2))
        await api_client.post("/historico/add", json={"first_user": 1, "second_user": 2})

        plain = await api_client.get("/match/buscar_likes/2")
        filtered = await api_client.get("/match/buscar_likes/2", params={"exclude_history": "true"})

        assert len(plain.json()) == 1
        assert filtered.json() == []

    @pytest.mark.asyncio
    async def test_exclude_history_on_given_likes(self, api_client):
        await api_client.post("/match/add_like", json=_pair(1, 2))
        await api_client.post("/historico/add", json={"first_user": 2, "second_user": 1})

        plain = await api_client.get("/match/buscar_meus_likes/1")
        filtered = await api_client.get("/match/buscar_meus_likes/1", params={"exclude_history": "true"})

        assert [item["user_id"] for item in plain.json()] == [2]
        assert filtered.json() == []


class TestHistoryEndpoints:

    @pytest.mark.asyncio
    async def test_archive_list_forget(self, api_client):
        resp = await api_client.post("/historico/add", json={"first_user": 5, "second_user": 9})
        assert resp.status_code == 200

        assert (await api_client.get("/historico/5")).json() == [9]
        assert (await api_client.get("/historico/9")).json() == []
        assert (await api_client.get("/historico/all/9")).json() == [5]

        resp = await api_client.request(
            "DELETE", "/historico/delete", json={"first_user": 9, "second_user": 5}
        )
        assert resp.status_code == 200
        assert (await api_client.get("/historico/5")).json() == []


class TestSkillOfferEndpoints:

    @pytest.mark.asyncio
    async def test_offer_crud(self, api_client):
        payload = {"id_users": 3, "id_sub_habilidade": 6, "descricao": "Reparo de bicicletas", "valor": 30.0}
        resp = await api_client.post("/inserir", json=payload)
        assert resp.status_code == 200
        assert resp.json() == "Dados inseridos com sucesso"

        resp = await api_client.get("/obter/3")
        assert resp.json() == [{
            "id_users": 3,
            "id_sub_habilidade": 6,
            "descricao": "Reparo de bicicletas",
            "valor": 30.0,
            "created_at": resp.json()[0]["created_at"],
        }]

        payload["valor"] = 42.0
        resp = await api_client.put("/atualizar", json=payload)
        assert resp.status_code == 200
        assert (await api_client.get("/obter/3")).json()[0]["valor"] == 42.0

        resp = await api_client.delete("/deletar/3")
        assert resp.status_code == 200
        assert (await api_client.get("/obter/3")).json() == []

        resp = await api_client.get("/obter_tudo")
        assert len(resp.json()) == 4

    @pytest.mark.asyncio
    async def test_english_field_names_accepted(self, api_client):
        payload = {"user_id": 9, "sub_skill_id": 2, "description": "Fotografia", "value": 25.0}

        resp = await api_client.post("/inserir", json=payload)

        assert resp.status_code == 200
        assert [o["id_sub_habilidade"] for o in (await api_client.get("/obter/9")).json()] == [2]


class TestErrorContract:
    """Store failures are a plain-text 500, whatever the cause."""

    @pytest.mark.asyncio
    async def test_constraint_violation_is_plain_500(self, api_client):
        resp = await api_client.post("/match/add_like", json=_pair(3, 3))

        assert resp.status_code == 500
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text == "Erro ao executar a operação 'record_like'"

    @pytest.mark.asyncio
    async def test_connectivity_failure_is_plain_500(self, api_client):
        with patch.object(
            MatchService,
            "list_matches",
            AsyncMock(side_effect=StoreFailure("list_matches")),
        ):
            resp = await api_client.get("/match/2")

        assert resp.status_code == 500
        assert resp.headers["content-type"].startswith("text/plain")

    @pytest.mark.asyncio
    async def test_liveness(self, api_client):
        resp = await api_client.get("/health")
        assert resp.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_deep_health_reports_database(self, api_client, db_engine):
        with patch.object(main, "async_session_factory", async_sessionmaker(db_engine)):
            resp = await api_client.get("/health/deep")

        assert resp.json() == {"status": "healthy", "database": "connected"}

    @pytest.mark.asyncio
    async def test_deep_health_degraded_when_database_down(self, api_client):
        down = MagicMock(side_effect=OperationalError("SELECT 1", {}, Exception("refused")))
        with patch.object(main, "async_session_factory", down):
            resp = await api_client.get("/health/deep")

        assert resp.status_code == 200
        assert resp.json()["status"] == "degraded"
        assert resp.json()["database"].startswith("error:")


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_checks_pool_and_shutdown_drains(self, db_engine):
        with patch.object(main, "engine", db_engine), \
                patch.object(main, "_drain_active_requests", AsyncMock()) as drain:
            async with main.lifespan(main.app):
                drain.assert_not_awaited()

        drain.assert_awaited_once()
