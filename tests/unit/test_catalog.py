"""Unit tests for restaurant browsing, menu management and merchant stats."""
import pytest

from marketplace.core.errors import AuthorizationError, NotFoundError, ValidationError
from marketplace.scripts.seed import load_seed_data
from marketplace.services.catalog.models import MenuItemRequest, RestaurantUpdateRequest
from marketplace.services.catalog.service import CatalogService
from marketplace.services.catalog.stats import merchant_statistics
from marketplace.services.identity.base import Identity, Role


@pytest.fixture
async def seeded_catalog(memory_store):
    """Store loaded from the bundled Fresh Fusion seed file."""
    await load_seed_data(memory_store)
    return memory_store


@pytest.fixture
def owner():
    """Owner of the seeded restaurant."""
    return Identity(id="fresh-fusion-owner", role=Role.MERCHANT)


@pytest.fixture
def stranger():
    """Merchant who owns nothing in the seed data."""
    return Identity(id="someone-else", role=Role.MERCHANT)


class TestBrowsing:
    """Test the public restaurant and menu reads."""

    async def test_list_restaurants_skips_inactive(self, seeded_catalog):
        """Test only active restaurants are listed."""
        await seeded_catalog.insert("restaurants", {"id": "closed", "name": "Closed", "is_active": False})

        restaurants = await CatalogService(seeded_catalog).list_restaurants()

        assert [restaurant.id for restaurant in restaurants] == ["fresh-fusion"]
        assert restaurants[0].cuisine_type == "Japanese Sushi"

    async def test_get_restaurant(self, seeded_catalog):
        """Test lookup by id and the missing case."""
        catalog = CatalogService(seeded_catalog)

        assert (await catalog.get_restaurant("fresh-fusion")).name == "Fresh Fusion"
        with pytest.raises(NotFoundError):
            await catalog.get_restaurant("nope")

    async def test_menu_lists_available_items(self, seeded_catalog):
        """Test the public menu hides unavailable items."""
        await seeded_catalog.update("menuItems", "a3", {"available": False})

        menu = await CatalogService(seeded_catalog).get_menu("fresh-fusion")

        assert {item.id for item in menu} == {"a1", "a2", "a4", "a5"}
        salmon = next(item for item in menu if item.id == "a1")
        assert salmon.price == 8.99
        assert salmon.restaurant_id == "fresh-fusion"

    async def test_menu_of_missing_restaurant(self, seeded_catalog):
        """Test a menu request for an unknown restaurant is a 404."""
        with pytest.raises(NotFoundError):
            await CatalogService(seeded_catalog).get_menu("nope")


class TestMerchantCatalog:
    """Test an owner managing their restaurant and menu."""

    async def test_update_restaurant(self, seeded_catalog, owner):
        """Test only supplied fields change."""
        catalog = CatalogService(seeded_catalog)

        updated = await catalog.update_merchant_restaurant(
            owner, RestaurantUpdateRequest(phone="+1 000-0000")
        )

        assert updated.phone == "+1 000-0000"
        assert updated.name == "Fresh Fusion"
        assert (await seeded_catalog.get("restaurants", "fresh-fusion"))["phone"] == "+1 000-0000"

    async def test_update_restaurant_rejects_blank_name(self, seeded_catalog, owner):
        """Test the name cannot be blanked."""
        with pytest.raises(ValidationError):
            await CatalogService(seeded_catalog).update_merchant_restaurant(
                owner, RestaurantUpdateRequest(name="  ")
            )

    async def test_merchant_without_restaurant(self, seeded_catalog, stranger):
        """Test a merchant owning nothing gets NotFoundError."""
        with pytest.raises(NotFoundError):
            await CatalogService(seeded_catalog).get_merchant_restaurant(stranger)

    async def test_add_menu_item(self, seeded_catalog, owner):
        """Test defaults for a new item."""
        catalog = CatalogService(seeded_catalog)

        item = await catalog.add_menu_item(owner, MenuItemRequest(name="Miso Soup", price=3.5))

        assert item.restaurant_id == "fresh-fusion"
        assert item.category == "Other"
        assert item.available is True
        assert len(await catalog.list_merchant_menu(owner)) == 6

    @pytest.mark.parametrize("request_", [MenuItemRequest(name="Soup"), MenuItemRequest(price=2.0)])
    async def test_add_menu_item_requires_name_and_price(self, seeded_catalog, owner, request_):
        """Test name and price are required."""
        with pytest.raises(ValidationError, match="Name and price are required"):
            await CatalogService(seeded_catalog).add_menu_item(owner, request_)

    async def test_update_menu_item(self, seeded_catalog, owner):
        """Test a partial update keeps other fields."""
        item = await CatalogService(seeded_catalog).update_menu_item(
            owner, "a1", MenuItemRequest(price=9.49, available=False)
        )

        assert item.price == 9.49
        assert item.available is False
        assert item.name == "Salmon Nigiri"

    async def test_menu_item_ownership(self, seeded_catalog, stranger):
        """Test another merchant can neither edit nor delete the item."""
        catalog = CatalogService(seeded_catalog)

        with pytest.raises(AuthorizationError, match="update"):
            await catalog.update_menu_item(stranger, "a1", MenuItemRequest(price=1.0))
        with pytest.raises(AuthorizationError, match="delete"):
            await catalog.delete_menu_item(stranger, "a1")
        with pytest.raises(NotFoundError):
            await catalog.delete_menu_item(stranger, "missing")

        assert await seeded_catalog.get("menuItems", "a1") is not None

    async def test_delete_menu_item(self, seeded_catalog, owner):
        """Test the owner can remove an item."""
        await CatalogService(seeded_catalog).delete_menu_item(owner, "a5")

        assert await seeded_catalog.get("menuItems", "a5") is None


class TestMerchantStatistics:
    """Test the merchant dashboard figures."""

    async def test_statistics(self, seeded_catalog, owner, order_doc):
        """Test counts by status, revenue and review average."""
        await seeded_catalog.insert("orders", order_doc("o1", status="pending"))
        await seeded_catalog.insert("orders", order_doc("o2", status="delivered"))
        await seeded_catalog.insert("orders", order_doc("o3", status="completed"))
        for rating in (4, 5):
            await seeded_catalog.insert("reviews", {
                "order_id": "o2", "restaurant_id": "fresh-fusion", "user_id": "customer-1",
                "user_name": "Test Customer", "rating": rating,
            })

        stats = await merchant_statistics(seeded_catalog, owner)

        assert stats.total_orders == 3
        assert stats.pending_orders == 1
        assert stats.completed_orders == 2
        assert stats.total_revenue == 74.91
        assert stats.menu_items == 5
        assert stats.orders_by_status == {"pending": 1, "delivered": 1, "completed": 1}
        assert stats.average_rating == 4.5
        assert stats.review_count == 2

    async def test_statistics_without_reviews(self, seeded_catalog, owner):
        """Test the restaurant's listed rating is reported before any review."""
        stats = await merchant_statistics(seeded_catalog, owner)

        assert stats.total_orders == 0
        assert stats.total_revenue == 0
        assert stats.average_rating == 4.8
        assert stats.review_count == 328

    async def test_statistics_without_restaurant(self, seeded_catalog, stranger):
        """Test a merchant owning nothing gets NotFoundError."""
        with pytest.raises(NotFoundError):
            await merchant_statistics(seeded_catalog, stranger)
