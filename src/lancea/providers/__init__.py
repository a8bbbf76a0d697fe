from .base import GuardedProvider, Provider, guard_provider, make_key, split_key
from .emoji import EmojiProvider
from .apps import AppsProvider

__all__ = [
    "Provider",
    "GuardedProvider",
    "guard_provider",
    "make_key",
    "split_key",
    "EmojiProvider",
    "AppsProvider",
]
