"""
Agent state record and the status snapshot published to observers.
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

MESSAGE_NEED_USERNAME = "Open a /with_replies page to detect your username."
MESSAGE_WRONG_VIEW = "Auto delete becomes available on /with_replies."
MESSAGE_OTHER_PROFILE = "Auto delete works on your own /with_replies page."
MESSAGE_DELETING = "Deleting a flagged reply..."
MESSAGE_SCANNING = "Scanning flagged replies..."
MESSAGE_READY = "Ready to delete flagged replies."

REASON_NO_USERNAME = "Open your profile's /with_replies page to capture the username."
REASON_NOT_WITH_REPLIES = "Auto delete is only available on the /with_replies view."
REASON_NOT_OWN_PROFILE = "Navigate to your own /with_replies page to enable auto delete."


@dataclass
class AgentState:
    """Mutable state owned by a single DeletionAgent."""

    running: bool = False
    busy: bool = False
    deleted_count: int = 0
    last_error: Optional[str] = None


@dataclass(frozen=True)
class StatusSnapshot:
    running: bool
    deleting: bool
    deleted_count: int
    username: Optional[str]
    can_run: bool
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def compose_message(
    username: str,
    on_with_replies: bool,
    deleting: bool,
    running: bool,
    own_profile: bool = True,
) -> str:
    """
    Derive the human-readable status line from agent state.

    Args:
        username: Normalized username (empty when unknown)
        on_with_replies: Whether the page shows a with_replies timeline
        deleting: Whether a deletion is in flight
        running: Whether the agent is scanning
        own_profile: Whether the with_replies page belongs to the user

    Returns:
        Status message
    """
    if not username:
        return MESSAGE_NEED_USERNAME
    if not on_with_replies:
        return MESSAGE_WRONG_VIEW
    if not own_profile:
        return MESSAGE_OTHER_PROFILE
    if deleting:
        return MESSAGE_DELETING
    if running:
        return MESSAGE_SCANNING
    return MESSAGE_READY


def unavailable_reason(username: str, on_with_replies: bool) -> str:
    """
    Explain why the agent cannot operate right now.

    Args:
        username: Normalized username (empty when unknown)
        on_with_replies: Whether the page shows a with_replies timeline

    Returns:
        Reason string
    """
    if not username:
        return REASON_NO_USERNAME
    if not on_with_replies:
        return REASON_NOT_WITH_REPLIES
    return REASON_NOT_OWN_PROFILE
