from .loader import PackageLoader
from .linker import LinkInvoker, binary_path_for

__all__ = ["PackageLoader", "LinkInvoker", "binary_path_for"]
