import pytest

from storefront.events import AuthEvent, EventBus
from storefront.exceptions import AlreadyInWishlist, ValidationFailed
from storefront.state.wishlist_state import WISHLIST_KEY, WishlistState


def test_add_and_query(storage, books):
    wishlist = WishlistState(storage)
    wishlist.add_to_wishlist(books["b1"])

    assert wishlist.is_in_wishlist("b1")
    assert not wishlist.is_in_wishlist("b2")
    assert wishlist.item_count == 1


def test_duplicate_add_is_rejected(storage, books):
    wishlist = WishlistState(storage)
    wishlist.add_to_wishlist(books["b1"])

    with pytest.raises(AlreadyInWishlist, match="already in your wishlist"):
        wishlist.add_to_wishlist(books["b1"])

    assert wishlist.item_count == 1


def test_duplicate_is_a_validation_failure(storage, books):
    wishlist = WishlistState(storage)
    wishlist.add_to_wishlist(books["b2"])

    with pytest.raises(ValidationFailed):
        wishlist.add_to_wishlist(books["b2"])


def test_survives_restart(storage, books):
    first = WishlistState(storage)
    first.add_to_wishlist(books["b1"])
    first.add_to_wishlist(books["b3"])

    second = WishlistState(storage)

    assert [book.id for book in second.items] == ["b1", "b3"]
    assert second.items[1].price == 1999


def test_remove_absent_id_is_a_no_op(storage, books):
    wishlist = WishlistState(storage)
    wishlist.add_to_wishlist(books["b1"])

    wishlist.remove_from_wishlist("missing")

    assert [book.id for book in wishlist.items] == ["b1"]


def test_remove_persists(storage, books):
    wishlist = WishlistState(storage)
    wishlist.add_to_wishlist(books["b1"])
    wishlist.add_to_wishlist(books["b2"])
    wishlist.remove_from_wishlist("b1")

    assert [book.id for book in WishlistState(storage).items] == ["b2"]


def test_clear_wishlist(storage, books):
    wishlist = WishlistState(storage)
    wishlist.add_to_wishlist(books["b1"])
    wishlist.clear_wishlist()

    assert wishlist.items == []
    assert WishlistState(storage).items == []


def test_logout_clears_memory_and_storage(storage, books):
    events = EventBus()
    wishlist = WishlistState(storage, events)
    wishlist.add_to_wishlist(books["b1"])

    events.emit(AuthEvent.LOGOUT)

    assert wishlist.items == []
    assert storage.get_item(WISHLIST_KEY) is None


def test_unreadable_entries_are_dropped(storage, books):
    storage.set_json(WISHLIST_KEY, [{"title": "no id"}, books["b1"].model_dump(by_alias=True)])

    wishlist = WishlistState(storage)

    assert [book.id for book in wishlist.items] == ["b1"]


def test_corrupt_storage_starts_empty(storage):
    storage.set_item(WISHLIST_KEY, "{not json")

    assert WishlistState(storage).items == []
