"""
Save client - persist, load and list generated UIs.
"""

from byof_client.save.client import join_endpoint, list_saved_uis, load_ui, save_ui

__all__ = [
    "join_endpoint",
    "list_saved_uis",
    "load_ui",
    "save_ui",
]
