from enum import Enum

Coord = tuple[int, int]  # (x, y)


class Team(str, Enum):
    A = "A"
    B = "B"

    @property
    def opponent(self) -> "Team":
        return Team.B if self is Team.A else Team.A


class RejectionKind(str, Enum):
    MALFORMED_PROPOSAL = "malformed_proposal"
    TURN_VIOLATION = "turn_violation"
    UNKNOWN_UNIT = "unknown_unit"
    INVARIANT_VIOLATION = "invariant_violation"
    OCCUPANCY_CONFLICT = "occupancy_conflict"
    UNSUBSTANTIATED_ATTACK = "unsubstantiated_attack"


class MatchEventKind(str, Enum):
    MATCH_STARTED = "match_started"
    UPDATE = "update"
    END_TURN = "end_turn"
    SURRENDER = "surrender"
    FORFEIT = "forfeit"


class ActionLogResult(str, Enum):
    APPLIED = "applied"
    REJECTED = "rejected"


class GameOverReason(str, Enum):
    SURRENDER = "surrender"
    OPPONENT_DISCONNECTED = "opponentDisconnected"
