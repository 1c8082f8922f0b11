"""Infrastructure Layer — persistence and cross-cutting concerns.

Invariants:
    - Infrastructure implements core protocols; core never imports from here
    - Driver exceptions never cross this layer: they become StorageError

Design Decisions:
    - Repositories own their sessions: each call is its own unit of work
"""
