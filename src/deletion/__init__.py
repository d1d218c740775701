"""
Flagged reply deletion: target selection, interaction workflow and agent lifecycle.
"""
from src.deletion.agent_config import AgentConfig
from src.deletion.deletion_agent import DeletionAgent
from src.deletion.document import PageDocument
from src.deletion.scheduler import PollScheduler
from src.deletion.status import AgentState, StatusSnapshot, compose_message, unavailable_reason
from src.deletion.target_selector import TargetSelector
from src.deletion.workflow import DeletionWorkflow, InteractionStep

__all__ = [
    "AgentConfig",
    "AgentState",
    "DeletionAgent",
    "DeletionWorkflow",
    "InteractionStep",
    "PageDocument",
    "PollScheduler",
    "StatusSnapshot",
    "TargetSelector",
    "compose_message",
    "unavailable_reason",
]
