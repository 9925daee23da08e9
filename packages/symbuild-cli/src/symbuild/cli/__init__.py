__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .main import app

__all__ = ["app"]
