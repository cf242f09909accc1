"""
Thoughtboard Backend
GraphQL API for sharing short thoughts, reactions and friendships
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
