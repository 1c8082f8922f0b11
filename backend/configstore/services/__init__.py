"""Services Layer — datasource lifecycle orchestration and schema validation.

Invariants:
    - Services translate StorageError into the caller-facing error taxonomy
    - Collaborators are injected at construction (no module-level singletons)

Design Decisions:
    - One class per concern: DatasourceService orchestrates, SchemaRegistry validates
"""
