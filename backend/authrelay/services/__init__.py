"""Services Layer — endpoints wired to the refresh-and-retry invoker.

Invariants:
    - Services never sequence refresh/retry by hand except the one inline
      wrapper kept alongside the generic path in feed_service.py

Design Decisions:
    - One service per resource family; routes stay thin
"""
