from enum import Enum


class ClaimStatus(Enum):
    """Outcome of a claim attempt"""

    GRANTED = "GRANTED"
    ALREADY_CLAIMED = "ALREADY_CLAIMED"
    EXHAUSTED = "EXHAUSTED"
