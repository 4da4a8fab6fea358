"""Pydantic Schemas — payload and response shapes for the stub feed endpoints.

Invariants:
    - Schemas validate at system boundary (API responses)

Design Decisions:
    - Post/Comment stay minimal: their data model is an external concern,
      only the list shape flows through the invoker
"""
