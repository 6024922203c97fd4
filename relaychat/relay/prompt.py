"""Prompt templates and conversation flattening."""

import re
from collections.abc import Mapping, Sequence
from typing import NamedTuple

from relaychat.errors import BadRequest
from relaychat.models.schemas import ChatMessage

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


class PromptTemplate:
    """Fixed text with ``{name}`` placeholders.

    Substitution is a single pass over the template, so braces inside the
    substituted values are left as they are.
    """

    def __init__(self, template: str) -> None:
        self._template = template
        self.placeholders = frozenset(_PLACEHOLDER.findall(template))

    @property
    def template(self) -> str:
        return self._template

    def render(self, values: Mapping[str, str]) -> str:
        """Fill every placeholder from ``values``.

        Raises:
            ValueError: If a placeholder has no value.
        """
        missing = self.placeholders - values.keys()
        if missing:
            raise ValueError(f"Missing template values: {', '.join(sorted(missing))}")
        return _PLACEHOLDER.sub(lambda m: values[m.group(1)], self._template)

    def __repr__(self) -> str:
        return f"PromptTemplate({self._template!r})"


class Conversation(NamedTuple):
    """A message sequence split into prior history and the current turn."""

    history: str
    current: str


def format_message(message: ChatMessage) -> str:
    return f"{message.role}: {message.content}"


def split_conversation(messages: Sequence[ChatMessage]) -> Conversation:
    """Separate the last message from the ones before it.

    Args:
        messages: Conversation, oldest first.

    Returns:
        History rendered one ``role: content`` line per message, and the
        content of the last message.

    Raises:
        BadRequest: If there are no messages.
    """
    if not messages:
        raise BadRequest("messages must contain at least one message")

    history = "\n".join(format_message(m) for m in messages[:-1])
    return Conversation(history=history, current=messages[-1].content)
