"""Request-to-provider relay.

Responsibilities:
    - Request body validation
    - Conversation flattening and prompt template rendering
    - Per-variant provider, template and context configuration
    - Streaming fragments back with an explicit end-of-stream signal
"""

from relaychat.relay.intake import parse_chat_request
from relaychat.relay.prompt import Conversation, PromptTemplate, split_conversation
from relaychat.relay.service import RelayService
from relaychat.relay.stream import SSEEncoder, TextEncoder, prime_stream, relay_stream
from relaychat.relay.variants import VARIANTS, ContextSource, RelayVariant

__all__ = [
    "VARIANTS",
    "ContextSource",
    "Conversation",
    "PromptTemplate",
    "RelayService",
    "RelayVariant",
    "SSEEncoder",
    "TextEncoder",
    "parse_chat_request",
    "prime_stream",
    "relay_stream",
    "split_conversation",
]
