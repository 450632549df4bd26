"""
SVGboard Backend — API Routes Package
=======================================

Route Inventory:
    - projects.py:   GET/POST   /projects
                     GET        /projects/latest
                     GET/PATCH/DELETE /projects/{id}
    - snapshots.py:  GET/POST/DELETE /projects/{projectId}/snapshots
                     GET/DELETE      /projects/{projectId}/snapshots/{snapshotId}
    - health.py:     GET /health

Routes are thin: they extract path/body data, call a service, and pick the
status code. Errors raised by services are turned into responses by the
handlers registered in svgboard.main.
"""
