"""AuthRelay Package — session-refresh-and-retry wrapper for async request operations.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
