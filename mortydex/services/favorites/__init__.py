"""Favorites store contract and its adapters.

* :class:`FavoritesStore` is the protocol consumed by the synchronization
  engine and the HTTP routes.
* :class:`SqlAlchemyFavoritesStore` reads and writes the row store directly.
* :class:`HttpFavoritesStore` reaches the same store through the API.
"""

from .http_store import HttpFavoritesStore
from .persistence import SqlAlchemyFavoritesStore
from .store import FavoriteAlreadyExists, FavoritesStore

__all__ = [
    "FavoriteAlreadyExists",
    "FavoritesStore",
    "HttpFavoritesStore",
    "SqlAlchemyFavoritesStore",
]
