"""Service composition — the SQL backend wired end to end on SQLite."""

from chorehub.config import Settings
from chorehub.services.composition import build_services


async def test_sql_backend_end_to_end():
    settings = Settings(
        event_store_backend="sql",
        database_url="sqlite+aiosqlite:///:memory:",
        pin_hash_time_cost=1,
        pin_hash_memory_cost=8,
    )
    services = build_services(settings)
    await services.db.create_all()
    try:
        household = await services.households.create("Smiths", 1234)
        assert await services.households.access(household.household_id, 1234) == "Smiths"

        chore_id = await services.chores.add(household.household_id, "Dishes", "")
        [chore] = await services.chores.list_chores(household.household_id)
        assert chore.chore_id == chore_id

        live = await services.activities.get_activities(household.household_id)
        assert [a.text for a in live] == ["New chore: Dishes", "Smiths was created"]

        assert await services.activities.rebuild(household.household_id) == 2
        items = await services.activities.get_activities(household.household_id)
        assert items[0].text == "New chore: Dishes"
        assert await services.db.health_check()
    finally:
        await services.close()


def test_postgres_urls_are_coerced_to_asyncpg():
    settings = Settings(database_url="postgresql://u:p@host/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host/db"
