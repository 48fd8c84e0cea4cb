from __future__ import annotations

from ..models.enums import RejectionKind


class Rejection(Exception):
    """A proposal or command that breaks the rules; never fatal, never mutates state."""

    kind: RejectionKind

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class MalformedProposal(Rejection):
    kind = RejectionKind.MALFORMED_PROPOSAL


class TurnViolation(Rejection):
    kind = RejectionKind.TURN_VIOLATION


class UnknownUnit(Rejection):
    kind = RejectionKind.UNKNOWN_UNIT


class InvariantViolation(Rejection):
    kind = RejectionKind.INVARIANT_VIOLATION


class OccupancyConflict(Rejection):
    kind = RejectionKind.OCCUPANCY_CONFLICT


class UnsubstantiatedAttack(Rejection):
    kind = RejectionKind.UNSUBSTANTIATED_ATTACK
