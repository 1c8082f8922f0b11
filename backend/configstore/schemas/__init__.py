"""Pydantic Schemas — plugin payload contracts and API response shapes.

Invariants:
    - Schemas validate at system boundary (plugin payloads, API responses)
    - Resource entities live in core/resources.py; schemas only describe payloads

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
