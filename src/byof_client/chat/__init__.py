"""
Chat client - sends the conversation to the generation endpoint.
"""

from byof_client.chat.client import send_chat

__all__ = ["send_chat"]
