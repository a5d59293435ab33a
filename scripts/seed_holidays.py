"""
Script to seed the recurring Brazilian national holidays
"""
import asyncio
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from backend.db import AsyncSessionLocal, engine
from backend.services.seed import run_seed_holidays


async def seed_holidays():
    """Seed national holidays that are not registered yet"""
    async with AsyncSessionLocal() as session:
        try:
            created = await run_seed_holidays(session)
            await session.commit()
            if created:
                print(f"✅ Created {created} national holidays")
            else:
                print("📋 National holidays already registered. Nothing to do.")
        except Exception as e:
            await session.rollback()
            print(f"❌ Error seeding holidays: {e}")
            raise
    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(seed_holidays())
