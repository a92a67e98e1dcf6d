#!/usr/bin/env python3
"""
Example script demonstrating a lucky money packet being grabbed in a group chat.

This script:
1. Creates a packet of 100.00 split into 8 shares
2. Lets 12 group members grab at the same moment
3. Shows who got what, and who got the best share
"""
import asyncio
import logging

from redpacket.claim import ClaimantInfo
from redpacket.claim_allocator import ClaimAllocator
from redpacket.mem.memory_packet_store import MemoryPacketStore

MEMBERS = [
    "Ah Ming", "Mei Ling", "Jun", "Xiao Hong", "Wei", "Li Na",
    "Grandpa", "Auntie Fang", "Hao", "Yan", "Bao", "Lan",
]


async def main():
    """Create a packet and race the group against it"""
    async with ClaimAllocator(store=MemoryPacketStore()) as allocator:
        packet_id = await allocator.create_packet(
            "100.00", 8, "恭喜发财 Happy new year!", "grandma"
        )
        print(f"🧧 Grandma sent packet {packet_id}")
        print()

        results = await asyncio.gather(
            *[
                allocator.claim(packet_id, f"member-{i}", ClaimantInfo(name=name))
                for i, name in enumerate(MEMBERS)
            ]
        )
        for name, result in zip(MEMBERS, results):
            if result.granted:
                print(f"   {name} grabbed {result.claim.amount_decimal}")
            else:
                print(f"   {name} was too late ({result.status.value})")
        print()

        status = await allocator.status(packet_id)
        for claim in status.best_shares:
            print(f"👑 Best share: {claim.claimant_info.name} with {claim.amount_decimal}")
        print(f"   {len(status.claims)} of {status.share_count} shares claimed, {status.state.value}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
