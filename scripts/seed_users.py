"""Seed demo users and their sub-skill offers.

Users are normally owned by the account service; this only exists so a local
database has profiles for the like / match listings to join against.
Usage: python -m scripts.seed_users [--count 20]
"""
import argparse
import asyncio
import random
import sys
sys.path.insert(0, ".")

from sqlalchemy import select
from skillswap.database import async_session_factory
from skillswap.models import SkillOffer, User


FIRST_NAMES = [
    "Ana", "Bruno", "Carla", "Diego", "Elisa", "Felipe", "Gabriela", "Heitor",
    "Isabela", "João", "Larissa", "Marcos", "Natália", "Otávio", "Paula", "Rafael",
]

SUB_SKILLS = [
    (1, "Aulas de violão para iniciantes"),
    (2, "Revisão de textos acadêmicos"),
    (3, "Conversação em inglês"),
    (4, "Introdução a Python"),
    (5, "Fotografia de retrato"),
    (6, "Reparo de bicicletas"),
    (7, "Receitas veganas"),
    (8, "Planilhas financeiras"),
]


async def seed(count: int):
    async with async_session_factory() as session:
        for i in range(1, count + 1):
            email = f"demo{i}@skillswap.local"
            existing = await session.execute(select(User).where(User.email == email))
            if existing.scalar_one_or_none() is not None:
                print(f"  User {email} already exists, skipping.")
                continue

            user = User(name=random.choice(FIRST_NAMES), email=email)
            for sub_skill_id, description in random.sample(SUB_SKILLS, k=random.randint(1, 3)):
                user.skill_offers.append(
                    SkillOffer(
                        sub_skill_id=sub_skill_id,
                        description=description,
                        value=round(random.uniform(20, 150), 2),
                    )
                )
            session.add(user)
            print(f"  Seeded {email} with {len(user.skill_offers)} offers")
        await session.commit()
    print("Done seeding users.")


def main():
    parser = argparse.ArgumentParser(description="Seed SkillSwap demo users")
    parser.add_argument("--count", type=int, default=20, help="Number of users to create")
    args = parser.parse_args()
    asyncio.run(seed(args.count))


if __name__ == "__main__":
    main()
