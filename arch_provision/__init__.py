"""Arch Linux provisioning (Python-first, state-driven).

Core design goals:
- Resumable after partial failure
- Idempotent steps keyed by name
- Secrets never persisted
- State handed off from the live ISO into the installed system
- Centralized logging
"""

__all__ = []
