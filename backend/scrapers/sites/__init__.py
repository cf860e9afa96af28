"""Per-site search resolvers and page schemas."""

from .bing import BingResolver
from .zillow import ZillowSchema

__all__ = ['BingResolver', 'ZillowSchema']
