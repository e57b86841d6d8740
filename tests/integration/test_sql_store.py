"""
Integration tests for the SQLAlchemy store, against SQLite files.
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.pool import NullPool, QueuePool

from crudserver.store import SQLUserStore, StoreError, StoreUnavailable, create_store_engine
from crudserver.users import User


class TestSchema:

    def test_creates_users_table(self, sql_store):
        columns = [c["name"] for c in inspect(sql_store.engine).get_columns("users")]
        assert columns == ["id", "name", "email"]

    def test_init_schema_is_idempotent(self, sql_store):
        sql_store.create(User(name="Alice", email="a@x.com"))
        sql_store.init_schema()

        assert len(sql_store.get_all()) == 1

    def test_unreachable_database(self, tmp_path):
        store = SQLUserStore.from_url(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'users.db'}")

        with pytest.raises(StoreUnavailable):
            store.init_schema()

    def test_unavailable_is_a_store_error(self):
        assert issubclass(StoreUnavailable, StoreError)


class TestEngine:

    def test_pool_none(self):
        engine = create_store_engine("sqlite:///x.db", pool="none")
        assert isinstance(engine.pool, NullPool)

    def test_pool_queue(self, tmp_path):
        engine = create_store_engine(f"sqlite:///{tmp_path / 'q.db'}", pool="queue")
        assert isinstance(engine.pool, QueuePool)

    def test_unknown_pool(self):
        with pytest.raises(ValueError):
            create_store_engine("sqlite://", pool="threads")


class TestCrud:

    def test_create_assigns_increasing_ids(self, sql_store):
        first = sql_store.create(User(name="A", email="a"))
        second = sql_store.create(User(name="B", email="b"))

        assert second > first

    def test_create_ignores_supplied_id(self, sql_store):
        user_id = sql_store.create(User(id=500, name="A", email="a"))

        assert user_id != 500
        assert sql_store.get_by_id(500) is None

    def test_get_by_id(self, sql_store):
        user_id = sql_store.create(User(name="Alice", email="a@x.com"))

        assert sql_store.get_by_id(user_id) == User(id=user_id, name="Alice", email="a@x.com")

    def test_get_missing(self, sql_store):
        assert sql_store.get_by_id(1) is None

    def test_get_all_ordered_by_id(self, sql_store):
        for name in ("C", "A", "B"):
            sql_store.create(User(name=name, email=name.lower()))

        assert [u.name for u in sql_store.get_all()] == ["C", "A", "B"]

    def test_update(self, sql_store):
        user_id = sql_store.create(User(name="Alice", email="a@x.com"))

        assert sql_store.update_by_id(user_id, User(name="Al", email="al@x.com")) == 1
        assert sql_store.get_by_id(user_id).email == "al@x.com"

    def test_update_missing(self, sql_store):
        assert sql_store.update_by_id(42, User(name="A", email="a")) == 0

    def test_delete(self, sql_store):
        user_id = sql_store.create(User(name="Alice", email="a@x.com"))

        assert sql_store.delete_by_id(user_id) == 1
        assert sql_store.delete_by_id(user_id) == 0
        assert sql_store.get_all() == []

    def test_queue_pool_store(self, tmp_path):
        store = SQLUserStore.from_url(f"sqlite:///{tmp_path / 'pooled.db'}", pool="queue")
        try:
            store.init_schema()
            user_id = store.create(User(name="A", email="a"))
            assert store.get_by_id(user_id).name == "A"
        finally:
            store.close()

    def test_statement_error(self, tmp_path):
        # Schema never created: the table is missing
        store = SQLUserStore.from_url(f"sqlite:///{tmp_path / 'empty.db'}")

        with pytest.raises(StoreError) as exc_info:
            store.get_all()
        assert not isinstance(exc_info.value, StoreUnavailable)
