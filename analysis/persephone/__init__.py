"""
PERSEPHONE - Conversational Responders

"I choose to see what you believe."

Speaks for the scanner. Chooses, in order, between an external agent
runtime, the live opportunity board and plain keyword rules.
"""

from .responders import (
    AgentRuntimeResponder,
    ChatReply,
    KeywordResponder,
    OpportunityResponder,
    ResponderChain,
    ResponderStrategy,
    build_default_chain,
)

__all__ = [
    "ChatReply",
    "ResponderStrategy",
    "AgentRuntimeResponder",
    "OpportunityResponder",
    "KeywordResponder",
    "ResponderChain",
    "build_default_chain",
]
