from alembic import command
from sqlalchemy import create_engine, inspect

from app.db.init_db import get_alembic_config


def test_upgrade_and_downgrade(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrations.db'}"
    config = get_alembic_config(url)

    command.upgrade(config, "head")

    engine = create_engine(url)
    tables = set(inspect(engine).get_table_names())
    assert {
        "users", "posts", "comments", "post_reactions", "comment_reactions",
        "friend_requests", "notifications", "orders",
    } <= tables

    command.downgrade(config, "base")

    assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
    engine.dispose()
