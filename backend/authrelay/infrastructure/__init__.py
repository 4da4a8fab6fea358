"""Infrastructure Layer — async shell around the pure core, plus cross-cutting concerns.

Invariants:
    - Infrastructure never decides retry policy itself; it asks core/enforce_retry.py
    - All collaborator calls are awaited in strict sequence per invocation

Design Decisions:
    - Resilient wrappers over raw collaborators (single responsibility)
"""
