"""Submission state machine transitions enforced by the payments service."""

RECEIVED = "RECEIVED"
VALIDATED = "VALIDATED"
REJECTED_AT_VALIDATION = "REJECTED_AT_VALIDATION"
AUTHORIZED = "AUTHORIZED"
DECLINED = "DECLINED"
REJECTED = "REJECTED"
FAILED = "FAILED"
STORED = "STORED"
RETURNED = "RETURNED"

ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    RECEIVED: {VALIDATED, REJECTED_AT_VALIDATION},
    VALIDATED: {AUTHORIZED, DECLINED, REJECTED, FAILED},
    AUTHORIZED: {STORED},
    DECLINED: {STORED},
    REJECTED: {STORED},
    STORED: {RETURNED},
    REJECTED_AT_VALIDATION: set(),
    FAILED: set(),
    RETURNED: set(),
}

TERMINAL_STATES = frozenset(state for state, targets in ALLOWED_TRANSITIONS.items() if not targets)


def validate_transition(current: str, new: str) -> None:
    """Raise when a transition is not allowed by the state machine."""

    if new not in ALLOWED_TRANSITIONS.get(current, set()):
        raise ValueError(f"Invalid transition: {current} -> {new}")
