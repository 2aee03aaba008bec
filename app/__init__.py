"""Panel API package.

Exposes `__version__` from the installed distribution metadata.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("panel-api")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
