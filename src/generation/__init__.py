"""Generation module - conversation handling and grounded answering."""
from .conversation import ConversationTurn, normalize_conversation
from .grounded_answer import GroundedAnswerer, NO_EVIDENCE_TEMPLATE

__all__ = [
    "ConversationTurn",
    "normalize_conversation",
    "GroundedAnswerer",
    "NO_EVIDENCE_TEMPLATE",
]
