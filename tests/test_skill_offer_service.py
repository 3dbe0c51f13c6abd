"""Unit tests for SkillOfferService — user sub-skill offers."""
import pytest

from skillswap.exceptions import StoreFailure
from skillswap.services.skill_offer_service import SkillOfferService


@pytest.fixture
def offer_service():
    return SkillOfferService()


class TestSkillOffers:

    @pytest.mark.asyncio
    async def test_list_offers_ordered_by_sub_skill(self, offer_service, db_session, seeded_users):
        offers = await offer_service.list_offers(1, db_session)
        assert [o["sub_skill_id"] for o in offers] == [4, 7]
        assert offers[0]["description"] == "Introdução a Python"

    @pytest.mark.asyncio
    async def test_create_and_list_all(self, offer_service, db_session, seeded_users):
        await offer_service.create_offer(3, 8, "Planilhas financeiras", 45.5, db_session)

        offers = await offer_service.list_all_offers(db_session)

        assert (3, 8) in {(o["user_id"], o["sub_skill_id"]) for o in offers}
        assert len(offers) == 5

    @pytest.mark.asyncio
    async def test_duplicate_offer_fails(self, offer_service, db_session, seeded_users):
        with pytest.raises(StoreFailure):
            await offer_service.create_offer(2, 3, "Outra descrição", 10.0, db_session)

    @pytest.mark.asyncio
    async def test_update_offer(self, offer_service, db_session, seeded_users):
        assert await offer_service.update_offer(2, 3, "Inglês avançado", 75.0, db_session) is True
        assert await offer_service.update_offer(2, 99, "Inexistente", 1.0, db_session) is False

        offers = await offer_service.list_offers(2, db_session)
        assert offers[0]["description"] == "Inglês avançado"
        assert offers[0]["value"] == 75.0

    @pytest.mark.asyncio
    async def test_delete_offers(self, offer_service, db_session, seeded_users):
        assert await offer_service.delete_offers(1, db_session) == 2
        assert await offer_service.list_offers(1, db_session) == []
