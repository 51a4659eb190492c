from stocksage.models.message import ChatMessage, Role
from stocksage.models.share import SharedConversation, SharedMessage, SharedRecord, ShareLink

__all__ = [
    "ChatMessage",
    "Role",
    "SharedConversation",
    "SharedMessage",
    "SharedRecord",
    "ShareLink",
]
