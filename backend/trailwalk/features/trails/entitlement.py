"""
Trail entitlement.

Decides whether the current user may walk a trail. Subscription state
itself is external; the engine only asks `is_entitled(trail_id)`.
"""

from typing import Iterable, Protocol

from trailwalk.shared.errors import NotEntitledError


class EntitlementGate(Protocol):
    def is_entitled(self, trail_id: str) -> bool:
        ...


class TierEntitlement:
    """
    Free/premium tier gate.

    Premium users may walk every trail; free users only the listed ones.
    """

    def __init__(self, free_trail_ids: Iterable[str], premium: bool = False):
        self.free_trail_ids = frozenset(free_trail_ids)
        self.premium = premium

    def is_entitled(self, trail_id: str) -> bool:
        return self.premium or trail_id in self.free_trail_ids


class AllowAll:
    """Gate that grants every trail."""

    def is_entitled(self, trail_id: str) -> bool:
        return True


def ensure_entitled(gate: EntitlementGate, trail_id: str) -> None:
    """Raise NotEntitledError unless the gate grants the trail."""
    if not gate.is_entitled(trail_id):
        raise NotEntitledError(trail_id)
