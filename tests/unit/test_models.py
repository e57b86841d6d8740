"""
Unit tests for payload records.
"""

import pytest

from crudserver.todolist import CreateEntryData, UpdateEntryData
from crudserver.users import User


class TestUser:

    def test_from_dict(self):
        user = User.from_dict({"name": "Alice", "email": "a@x.com"})

        assert user == User(name="Alice", email="a@x.com", id=None)

    def test_from_dict_keeps_id(self):
        assert User.from_dict({"id": 3, "name": "A", "email": "e"}).id == 3

    def test_from_dict_ignores_extra_keys(self):
        user = User.from_dict({"name": "A", "email": "e", "age": 40})
        assert user.to_dict() == {"id": None, "name": "A", "email": "e"}

    @pytest.mark.parametrize("data", [
        [],
        "Alice",
        None,
        {"name": "Alice"},
        {"email": "a@x.com"},
        {"name": 1, "email": "a@x.com"},
        {"name": "Alice", "email": None},
        {"id": "1", "name": "A", "email": "e"},
        {"id": True, "name": "A", "email": "e"},
        {"id": 1.5, "name": "A", "email": "e"},
        {"id": 2 ** 31, "name": "A", "email": "e"},
        {"id": -(2 ** 31) - 1, "name": "A", "email": "e"},
        {"name": "\ud800", "email": "e"},
        {"name": "A", "email": "x\udfff"},
    ])
    def test_from_dict_rejects(self, data):
        with pytest.raises(ValueError):
            User.from_dict(data)

    def test_from_row(self):
        assert User.from_row((1, "Alice", "a@x.com")) == User(id=1, name="Alice", email="a@x.com")

    def test_to_dict_key_order(self):
        user = User(id=1, name="Alice", email="a@x.com")
        assert list(user.to_dict()) == ["id", "name", "email"]


class TestTodoEntries:

    def test_create_entry(self):
        entry = CreateEntryData.from_dict({"date": 20240101, "title": "Buy milk"})

        assert entry.date == 20240101
        assert entry.title == "Buy milk"

    def test_update_entry(self):
        assert UpdateEntryData.from_dict({"title": "Renamed"}).title == "Renamed"

    @pytest.mark.parametrize("data", [
        {"title": "no date"},
        {"date": "today", "title": "x"},
        {"date": True, "title": "x"},
        {"date": 1, "title": 2},
        ["date", "title"],
    ])
    def test_create_entry_rejects(self, data):
        with pytest.raises(ValueError):
            CreateEntryData.from_dict(data)

    def test_update_entry_requires_title(self):
        with pytest.raises(ValueError):
            UpdateEntryData.from_dict({})

    def test_entries_are_immutable(self):
        entry = UpdateEntryData(title="x")
        with pytest.raises(AttributeError):
            entry.title = "y"


class TestUserIdBounds:

    def test_int32_edges_accepted(self):
        assert User.from_dict({"id": 2 ** 31 - 1, "name": "A", "email": "e"}).id == 2 ** 31 - 1
        assert User.from_dict({"id": -(2 ** 31), "name": "A", "email": "e"}).id == -(2 ** 31)
