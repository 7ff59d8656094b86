"""minigql: a small selection-query engine for embedding in Python applications."""

from .core import *  # noqa: F401,F403
from .core import __all__

__version__ = "0.1.0"
