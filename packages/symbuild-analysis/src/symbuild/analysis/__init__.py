from .resolver import DependencyResolver
from .graph import GraphBuilder

__all__ = ["DependencyResolver", "GraphBuilder"]
