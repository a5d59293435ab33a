"""
Script to create database tables using SQLAlchemy
Run this once to initialize the database schema
"""
import asyncio
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from backend.db import init_db, engine, ensure_database_exists


async def create_tables():
    """Create all database tables"""
    print("🔄 Creating database tables...")
    try:
        await ensure_database_exists()
        await init_db()
        print("Database tables created successfully!")
        print("\nTables created:")
        print("  - holidays")
        print("  - deadlines")
        print("  - deadline_suspensions")
        print("  - job_logs")
        print("  - audit_logs")
    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        raise
    finally:
        await engine.dispose()

if __name__ == "__main__":
    asyncio.run(create_tables())
