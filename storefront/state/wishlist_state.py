import logging
from typing import List, Optional

from storefront.events import AuthEvent, EventBus
from storefront.exceptions import AlreadyInWishlist
from storefront.schemas.book_schemas import Book
from storefront.services.local_storage import LocalStorage

logger = logging.getLogger(__name__)

WISHLIST_KEY = "wishlist"


class WishlistState:
    """Local-only set of books, persisted to durable storage on every change."""

    def __init__(self, storage: LocalStorage, events: Optional[EventBus] = None):
        self.storage = storage
        self.events = events
        self.items: List[Book] = self._load()

        if self.events is not None:
            self.events.on(AuthEvent.LOGOUT, self._on_logout)

    def close(self) -> None:
        if self.events is not None:
            self.events.off(AuthEvent.LOGOUT, self._on_logout)

    def _load(self) -> List[Book]:
        stored = self.storage.get_json(WISHLIST_KEY, [])
        books = []
        for raw in stored:
            try:
                books.append(Book.model_validate(raw))
            except ValueError:
                logger.warning(f"Dropping unreadable wishlist entry: {raw!r}")
        return books

    def _persist(self) -> None:
        self.storage.set_json(
            WISHLIST_KEY,
            [book.model_dump(by_alias=True, mode="json") for book in self.items],
        )

    def _on_logout(self, _data=None) -> None:
        self.items = []
        self.storage.remove_item(WISHLIST_KEY)

    @property
    def item_count(self) -> int:
        return len(self.items)

    def is_in_wishlist(self, book_id: str) -> bool:
        return any(book.id == book_id for book in self.items)

    def add_to_wishlist(self, book: Book) -> None:
        if self.is_in_wishlist(book.id):
            raise AlreadyInWishlist("Book is already in your wishlist")

        self.items = self.items + [book]
        self._persist()
        logger.info(f"{book.title} added to wishlist!")

    def remove_from_wishlist(self, book_id: str) -> None:
        self.items = [book for book in self.items if book.id != book_id]
        self._persist()
        logger.info("Book removed from wishlist")

    def clear_wishlist(self) -> None:
        self.items = []
        self._persist()
        logger.info("Wishlist cleared")
