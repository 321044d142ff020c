"""Unit tests for the seed loader."""
from marketplace.scripts.seed import load_seed_data
from marketplace.services.identity.accounts import AccountService


class TestSeed:
    """Test loading the bundled seed file."""

    async def test_load_seed_data(self, memory_store):
        """Test the Fresh Fusion restaurant, owner and menu are created."""
        inserted = await load_seed_data(memory_store)

        assert inserted == {"users": 2, "restaurants": 1, "menuItems": 5}
        restaurant = await memory_store.get("restaurants", "fresh-fusion")
        assert restaurant["owner_id"] == "fresh-fusion-owner"
        assert await memory_store.count("menuItems", "restaurant_id", "fresh-fusion") == 5

    async def test_seeded_users_can_log_in(self, memory_store):
        """Test seeded passwords are hashed and usable."""
        await load_seed_data(memory_store)

        owner = await AccountService(memory_store).authenticate("owner@freshfusion.com", "password123")

        assert owner["role"] == "merchant"
        assert "password" not in owner

    async def test_seed_is_idempotent(self, sql_store):
        """Test a second load inserts nothing."""
        await load_seed_data(sql_store)

        inserted = await load_seed_data(sql_store)

        assert inserted == {"users": 0, "restaurants": 0, "menuItems": 0}
