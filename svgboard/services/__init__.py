"""
SVGboard Backend — Services Layer
===================================

What:  Business rules between routes (HTTP) and the crud layer (persistence).

Service Inventory:
    - ProjectService:  project lifecycle and the latest-project composite read
    - SnapshotService: snapshot lifecycle, the project/snapshot ownership
                       guard, and the last_shapes_data side effect

Services are stateless singletons. They receive the request's AsyncSession
on every call, raise application exceptions (svgboard.exceptions) for
not-found, validation and conflict cases, and return response schemas.
"""
