"""
Doğrudan mesajlaşma - iki kullanıcı arasındaki konuşmayı çıkarır.
"""
from __future__ import annotations

from typing import Optional

from models.shop import Message


def _in_thread(m: Message, user_id: str, other_id: str) -> bool:
    return (
        (m.sender_id == user_id and m.recipient_id == other_id)
        or (m.sender_id == other_id and m.recipient_id == user_id)
    )


def conversation(messages: list[Message], user_id: str, other_id: str) -> list[Message]:
    """İki yönlü konuşma, eskiden yeniye."""
    thread = [m for m in messages if _in_thread(m, user_id, other_id)]
    return sorted(thread, key=lambda m: m.timestamp)


def last_message(messages: list[Message], user_id: str, other_id: str) -> Optional[Message]:
    thread = conversation(messages, user_id, other_id)
    return thread[-1] if thread else None
