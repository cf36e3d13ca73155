"""
create_tables.py — idempotent table creation script.
The app also creates tables at startup; run this to prepare a database
ahead of the first deploy or after schema changes.

Usage:
    python scripts/create_tables.py
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Ensure the project root is on the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from muu.database import engine
from muu.models import Base  # noqa: F401 — triggers model registration


async def main() -> None:
    """Create all tables."""
    print("Creating tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    for name in sorted(Base.metadata.tables):
        print(f"  ✓ {name}")

    print("\nDone. Start the service with `uvicorn muu.main:app`.")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
