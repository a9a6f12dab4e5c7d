from lumenplan.database.catalog import DEFAULT_FIXTURES, FixtureCatalog, FixtureRecord, default_catalog

__all__ = ["DEFAULT_FIXTURES", "FixtureCatalog", "FixtureRecord", "default_catalog"]
