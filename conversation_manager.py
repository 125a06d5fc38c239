"""
Conversation Management Module

Keeps the tutor chat transcript for a learning session and tracks whether a
tutor reply is still outstanding.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List

logger = logging.getLogger(__name__)


class ChatRole(str, Enum):
    USER = "user"
    TUTOR = "tutor"


@dataclass(frozen=True)
class ChatTurn:
    """One message in the transcript"""
    role: ChatRole
    text: str


@dataclass
class ConversationContext:
    """Data class representing conversation state"""
    turns: List[ChatTurn] = field(default_factory=list)
    waiting_for_tutor: bool = False


class ConversationManager:
    """Manages the session transcript.

    There is one transcript per session; it is not separated by course.
    Turns are only ever appended.
    """

    def __init__(self):
        self.context = ConversationContext()

    @property
    def turns(self) -> List[ChatTurn]:
        return list(self.context.turns)

    @property
    def is_waiting(self) -> bool:
        return self.context.waiting_for_tutor

    def add_user_turn(self, text: str) -> ChatTurn:
        turn = ChatTurn(ChatRole.USER, text)
        self.context.turns.append(turn)
        return turn

    def add_tutor_turn(self, text: str) -> ChatTurn:
        turn = ChatTurn(ChatRole.TUTOR, text)
        self.context.turns.append(turn)
        return turn

    def begin_waiting(self) -> bool:
        """Mark a tutor request as outstanding; False if one already is"""
        if self.context.waiting_for_tutor:
            logger.info("Tutor request already outstanding; suppressing duplicate submission")
            return False
        self.context.waiting_for_tutor = True
        return True

    def end_waiting(self):
        self.context.waiting_for_tutor = False

    def get_context_summary(self) -> dict:
        """Get a summary of the current conversation"""
        return {
            "turn_count": len(self.context.turns),
            "questions_asked": sum(1 for t in self.context.turns if t.role == ChatRole.USER),
            "waiting_for_tutor": self.context.waiting_for_tutor,
        }
