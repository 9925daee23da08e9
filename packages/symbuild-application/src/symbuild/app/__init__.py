from .core import SymbuildApp
from .workspace import Workspace

__all__ = ["SymbuildApp", "Workspace"]
