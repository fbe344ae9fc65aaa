from app.utils.constants import PLATFORM_STATES, REVIEW_STATES

PLATFORM_TRANSITIONS = {
    "PENDING": ["APPROVED", "DELETED"],
    "APPROVED": ["DELETED"],
    "DELETED": [],
}

REVIEW_TRANSITIONS = {
    "VISIBLE": ["FLAGGED"],
    "FLAGGED": ["APPROVED", "REJECTED"],
    "APPROVED": ["FLAGGED"],   # users may report an approved review again
    "REJECTED": [],
}

_MACHINES = {
    "platform": (PLATFORM_STATES, PLATFORM_TRANSITIONS),
    "review": (REVIEW_STATES, REVIEW_TRANSITIONS),
}


def platform_state(approved: bool) -> str:
    return "APPROVED" if approved else "PENDING"


def review_state(flagged: bool, reviewed: bool) -> str:
    if flagged:
        return "REJECTED" if reviewed else "FLAGGED"
    return "APPROVED" if reviewed else "VISIBLE"


def ensure_transition(kind: str, current: str, target: str) -> None:
    if kind not in _MACHINES:
        raise ValueError(f"Unknown state machine: {kind}")
    states, allowed_map = _MACHINES[kind]

    if current not in states:
        raise ValueError(f"Unknown state: {current}")
    if target not in states:
        raise ValueError(f"Unknown target state: {target}")

    allowed = allowed_map.get(current, [])
    if target not in allowed:
        raise ValueError(f"Invalid transition: {current} -> {target}")
