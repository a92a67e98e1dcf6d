"""Example demonstrating the SQL-based packet store, shared by several allocators."""

import asyncio
import logging
import os

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

try:
    from redpacket.sql import SqlPacketStore, upgrade_database
    SQL_AVAILABLE = True
except ImportError:
    logger.error("SQL dependencies not available. Install with: pip install redpacket[sql]")
    SQL_AVAILABLE = False

from redpacket.claim_allocator import ClaimAllocator


async def grab(database_url: str, packet_id, worker: int, claimants: int):
    """One worker, with its own store and connection pool, claiming for its users"""
    store = SqlPacketStore(database_url=database_url, create_tables=False)
    async with ClaimAllocator(store=store) as allocator:
        return await asyncio.gather(
            *[
                allocator.claim(packet_id, f"worker-{worker}-user-{i}")
                for i in range(claimants)
            ]
        )


async def demonstrate_sql_packet_store():
    """Demonstrate several allocators sharing one database."""
    if not SQL_AVAILABLE:
        return

    logger.info("=== SqlPacketStore Demo ===")

    database_file = "./example_redpacket.db"
    database_url = f"sqlite+aiosqlite:///{database_file}"

    # Ensure database schema is up to date
    upgrade_database(database_url)
    logger.info("Database schema updated")

    async with ClaimAllocator(
        store=SqlPacketStore(database_url=database_url, create_tables=False)
    ) as allocator:
        packet_id = await allocator.create_packet("50.00", 10, "Team bonus", "boss")

    batches = await asyncio.gather(
        *[grab(database_url, packet_id, worker, 5) for worker in range(3)]
    )
    results = [result for batch in batches for result in batch]
    granted = [r for r in results if r.granted]
    logger.info(f"{len(granted)} of {len(results)} claimants got a share")

    async with ClaimAllocator(
        store=SqlPacketStore(database_url=database_url, create_tables=False)
    ) as allocator:
        status = await allocator.status(packet_id)
    for claim in sorted(status.claims, key=lambda c: c.amount, reverse=True):
        best = " (best)" if claim.is_best_share else ""
        logger.info(f"{claim.claimant_id}: {claim.amount_decimal}{best}")

    os.remove(database_file)


if __name__ == "__main__":
    asyncio.run(demonstrate_sql_packet_store())
