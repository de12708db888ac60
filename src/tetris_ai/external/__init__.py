"""Client side of the external move advisor."""

from .protocol import AdvisorError, AdvisorRequest, OpMove, parse_move
from .client import AdvisorClient
from .planner import AdvisorPlanner

__all__ = [
    "AdvisorError",
    "AdvisorRequest",
    "OpMove",
    "parse_move",
    "AdvisorClient",
    "AdvisorPlanner",
]
