"""
SVGboard Backend
=================

Storage backend for a drawing board UI: projects (named boards) and their
snapshot history of shape data.

Layers:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← invariants, error kinds
    ├─────────────────────────────────────┤
    │        Crud (Storage Adapter)       │  ← queries, no commits
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async sessions, transactions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
