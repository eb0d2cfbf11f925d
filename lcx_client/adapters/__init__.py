"""
Exchange adapters for the LCX client.

Contains the REST and WebSocket client implementations for LCX.
"""

__all__: list[str] = []
