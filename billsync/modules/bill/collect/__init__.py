from .base import DependencyCollector, ParentResolver
from .graph_file import GraphDocument, GraphFileCollector

__all__ = ["DependencyCollector", "GraphDocument", "GraphFileCollector", "ParentResolver"]
