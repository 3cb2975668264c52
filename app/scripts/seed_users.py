import asyncio

from sqlalchemy import select

from app.db.models import User
from app.db.session import SessionLocal

# Default accounts to seed; adjust to your needs.
USERS = [
    "alice@example.com",
    "bob@example.com",
    "carol@example.com",
    "dave@example.com",
]


async def main():
    async with SessionLocal() as db:
        for email in USERS:
            existing = await db.scalar(select(User).where(User.email == email))
            if existing:
                print(f"Skipped existing user {email}")
                continue

            db.add(User(email=email))
            print(f"Inserted user {email}")

        await db.commit()
    print("Done.")


if __name__ == "__main__":
    asyncio.run(main())

    # to run:
    # python -m app.scripts.seed_users
