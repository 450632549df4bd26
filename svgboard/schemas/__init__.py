"""
SVGboard Backend — Pydantic Request/Response Schemas
======================================================

What:  The API contract between the drawing UI and the backend.
How:   FastAPI validates request bodies and serializes responses with these
       models. Field names are snake_case in Python and camelCase on the wire
       (`lastShapesData`, `projectId`, `createdAt`, ...).

Schemas are separate from the SQLAlchemy models so the API only ever exposes
the fields listed here.
"""
