# scripts/create_tables.py
import asyncio

from catalog.db.base import Base, import_models
from catalog.db.session import engine

# Every model must be imported so SQLAlchemy registers it in Base.metadata
import_models()


async def create_all_tables() -> None:
    print("Creating database tables...")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        print("Database tables created successfully")
    except Exception as e:
        print(f"Failed to create database tables: {e}")
        raise

if __name__ == "__main__":
    asyncio.run(create_all_tables())
