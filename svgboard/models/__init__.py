from svgboard.models.project import Project
from svgboard.models.snapshot import Snapshot

__all__ = ["Project", "Snapshot"]
