#!/usr/bin/env python3
"""
Command line entry point for creating, claiming and inspecting packets.

Usage:
    python -m redpacket create FUND SHARES [--message MESSAGE] [--creator CREATOR]
    python -m redpacket claim PACKET_ID CLAIMANT [--name NAME]
    python -m redpacket status PACKET_ID
    python -m redpacket simulate FUND SHARES CLAIMANTS

The store is chosen from the environment (see redpacket.constants); by default
packets are kept under ./redpacket_data, so successive invocations share state.
"""

import argparse
import asyncio
import logging
import sys

from redpacket.claim import ClaimantInfo
from redpacket.claim_allocator import ClaimAllocator
from redpacket.claim_status import ClaimStatus
from redpacket.money import from_cents
from redpacket.packet_status import PacketStatus
from redpacket.packet_store import PacketStore, get_default_packet_store
from redpacket.redpacket_error import RedPacketError


def _print_status(status: PacketStatus) -> None:
    print(f"🧧 Packet {status.id} ({status.state.value})")
    print(f"   {from_cents(status.fund)} in {status.share_count} shares, {status.shares_left} left")
    if status.message:
        print(f"   \"{status.message}\"")
    for claim in sorted(status.claims, key=lambda c: c.amount, reverse=True):
        best = " 👑" if claim.is_best_share else ""
        print(f"   {claim.claimant_id}: {from_cents(claim.amount)}{best}")


async def _run(args: argparse.Namespace, store: PacketStore) -> int:
    async with ClaimAllocator(store=store) as allocator:
        if args.command == "create":
            packet_id = await allocator.create_packet(
                args.fund, args.shares, args.message, args.creator
            )
            print(packet_id)

        elif args.command == "claim":
            info = ClaimantInfo(name=args.name) if args.name else None
            result = await allocator.claim(args.packet_id, args.claimant, info)
            if result.claim is None:
                print(result.status.value)
            else:
                print(f"{result.status.value} {from_cents(result.claim.amount)}")

        elif args.command == "status":
            _print_status(await allocator.status(args.packet_id))

        elif args.command == "simulate":
            packet_id = await allocator.create_packet(
                args.fund, args.shares, args.message, args.creator
            )
            results = await asyncio.gather(
                *[
                    allocator.claim(packet_id, f"grabber-{i}")
                    for i in range(args.claimants)
                ]
            )
            granted = sum(1 for r in results if r.status == ClaimStatus.GRANTED)
            print(f"{granted} granted, {len(results) - granted} too late")
            _print_status(await allocator.status(packet_id))
    return 0


def main(argv: list[str] | None = None, store: PacketStore | None = None) -> int:
    parser = argparse.ArgumentParser(description="Lucky money packets")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Create a packet")
    simulate = subparsers.add_parser(
        "simulate", help="Create a packet and race claimants against it"
    )
    for subparser in (create, simulate):
        subparser.add_argument("fund", help="Total amount, e.g. 10.00")
        subparser.add_argument("shares", type=int, help="Number of shares")
        subparser.add_argument("--message", default="", help="Wishing message")
        subparser.add_argument("--creator", default="cli", help="Creator id")
    simulate.add_argument("claimants", type=int, help="Number of concurrent claimants")

    claim = subparsers.add_parser("claim", help="Claim a share of a packet")
    claim.add_argument("packet_id")
    claim.add_argument("claimant")
    claim.add_argument("--name", default=None, help="Display name")

    status = subparsers.add_parser("status", help="Show a packet")
    status.add_argument("packet_id")

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    try:
        return asyncio.run(_run(args, store or get_default_packet_store()))
    except RedPacketError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
