"""
redpacket - Lucky money packets: split a fund into random shares and allocate them
to concurrent claimants, at most one share each.

This package provides the partition generator, the claim allocator, and pluggable
packet stores supporting atomic conditional updates.
"""

# Core
from redpacket.claim import Claim, ClaimantInfo
from redpacket.claim_allocator import ClaimAllocator
from redpacket.claim_result import ClaimResult
from redpacket.claim_status import ClaimStatus
from redpacket.packet import Packet, PacketState
from redpacket.packet_status import PacketStatus
from redpacket.packet_store import PacketStore, get_default_packet_store
from redpacket.partition import generate, generate_cents
from redpacket.redpacket_error import (
    InvalidConfiguration,
    InvariantViolation,
    PacketNotFound,
    RedPacketError,
    TransientStoreFailure,
)

# Memory implementation
from redpacket.mem import MemoryPacketStore

__all__ = [
    # Core
    'Claim',
    'ClaimantInfo',
    'ClaimAllocator',
    'ClaimResult',
    'ClaimStatus',
    'Packet',
    'PacketState',
    'PacketStatus',
    'PacketStore',
    'get_default_packet_store',
    'generate',
    'generate_cents',

    # Errors
    'RedPacketError',
    'InvalidConfiguration',
    'InvariantViolation',
    'PacketNotFound',
    'TransientStoreFailure',

    # Memory implementation
    'MemoryPacketStore',
]
