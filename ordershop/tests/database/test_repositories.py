"""
Member, Item and Category Repository Tests
"""

import pytest
from sqlmodel import Session

from ordershop.domain.ordering.entities import Category
from ordershop.domain.shared.exceptions import EntityNotFoundError
from ordershop.infrastructure.database.repositories import (
    CategoryRepository,
    ItemRepository,
    MemberRepository,
)
from ordershop.tests.factories import ItemFactory, MemberFactory


class TestMemberRepository:
    def test_save_assigns_id(self, db_session):
        member = MemberRepository(db_session).save(MemberFactory.create("kim"))

        assert member.id is not None

    def test_find_by_name(self, db_session):
        repository = MemberRepository(db_session)
        repository.save(MemberFactory.create("kim"))
        repository.save(MemberFactory.create("lee"))

        assert [m.name for m in repository.find_by_name("kim")] == ["kim"]
        assert repository.find_by_name("park") == []

    def test_find_all_in_id_order(self, db_session):
        repository = MemberRepository(db_session)
        for name in ("a", "b", "c"):
            repository.save(MemberFactory.create(name))

        assert [m.name for m in repository.find_all()] == ["a", "b", "c"]

    def test_get_by_id_required_missing(self, db_session):
        with pytest.raises(EntityNotFoundError) as exc_info:
            MemberRepository(db_session).get_by_id_required(42)

        assert exc_info.value.entity_type == "Member"


class TestItemRepository:
    def test_save_new_item(self, db_session):
        item = ItemRepository(db_session).save(ItemFactory.create_book("JPA"))

        assert item.id is not None
        assert item in db_session

    def test_save_merges_detached_item(self, engine):
        """Test a detached item's changes land on the managed instance."""
        with Session(engine, expire_on_commit=False) as session:
            item = ItemRepository(session).save(ItemFactory.create_book("JPA"))
            session.commit()

        item.price = 99000

        with Session(engine) as session:
            merged = ItemRepository(session).save(item)
            session.commit()

            assert merged is not item
            assert merged.price == 99000

        with Session(engine) as session:
            assert ItemRepository(session).get_by_id_required(item.id).price == 99000


class TestCategoryRepository:
    def test_tree_and_items_persist(self, engine):
        with Session(engine) as session:
            parent = Category(name="books")
            child = Category(name="programming")
            parent.add_child_category(child)
            child.add_item(ItemFactory.create_book("JPA"))
            CategoryRepository(session).save(parent)
            session.commit()

        with Session(engine) as session:
            repository = CategoryRepository(session)
            roots = repository.find_roots()

            assert [c.name for c in roots] == ["books"]
            assert [c.name for c in roots[0].children] == ["programming"]
            assert [i.name for i in roots[0].children[0].items] == ["JPA"]
            assert repository.find_by_name("programming").parent.name == "books"
