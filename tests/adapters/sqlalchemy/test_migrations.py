from __future__ import annotations

from pathlib import Path  # noqa: TC003

from sqlalchemy import create_engine, inspect

from pimtrans.adapters.sqlalchemy.migrations import MIGRATIONS_PATH, build_config, upgrade_head


def test_build_config_points_at_packaged_scripts() -> None:
    config = build_config(database_uri="sqlite+pysqlite:///example.db")

    assert config.get_main_option("script_location") == str(MIGRATIONS_PATH)
    assert config.get_main_option("sqlalchemy.url") == "sqlite+pysqlite:///example.db"
    assert (MIGRATIONS_PATH / "versions").is_dir()


def test_upgrade_head_creates_schema_from_uri(tmp_path: Path) -> None:
    uri = f"sqlite+pysqlite:///{tmp_path / 'pimtrans.db'}"

    upgrade_head(database_uri=uri)
    upgrade_head(database_uri=uri)

    engine = create_engine(uri)
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    assert {"channel", "catalog_item", "translation", "alembic_version"} <= tables
