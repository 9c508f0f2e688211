"""freightcheck - cross-border compliance and landed-cost estimates for freight quotes."""

from . import compliance
from .version import __version__

__all__ = [
    "compliance",
    "__version__",
]
