"""Callback page state machine: one transition out of `processing`, then frozen."""

PROCESSING = "processing"
SUCCEEDED = "succeeded"
FAILED = "failed"

ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    PROCESSING: {SUCCEEDED, FAILED},
    SUCCEEDED: set(),
    FAILED: set(),
}


def validate_transition(current: str, new: str) -> None:
    """Raise when a transition is not allowed by the state machine."""

    if new not in ALLOWED_TRANSITIONS.get(current, set()):
        raise ValueError(f"Invalid transition: {current} -> {new}")


def is_terminal(state: str) -> bool:
    return state in ALLOWED_TRANSITIONS and not ALLOWED_TRANSITIONS[state]
