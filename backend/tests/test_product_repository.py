"""
Product Catalog Backend — Product Repository Tests
====================================================

What:  Tests for ProductRepository against a real (SQLite) session, plus
       mocked sessions for the store-failure paths.

What we test:
    ✅ create assigns id and timestamps
    ✅ list_all returns rows oldest first, [] when empty
    ✅ get/update/delete raise NotFoundError for missing and malformed ids
    ✅ update applies only supplied fields
    ✅ SQLAlchemy failures are wrapped in DatabaseError
"""

import uuid
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from catalog.exceptions import DatabaseError, NotFoundError
from catalog.models.product import Product
from catalog.schemas.product import ProductCreate, ProductUpdate
from catalog.services.product_repository import ProductRepository, parse_product_id


def make_payload(**overrides) -> ProductCreate:
    data = {"name": "iPhone SE", "description": "Good phone", "price": 9001}
    data.update(overrides)
    return ProductCreate(**data)


class TestParseProductId:

    def test_valid_uuid(self):
        value = uuid.uuid4()
        assert parse_product_id(str(value)) == value

    @pytest.mark.parametrize("raw", ["6436b60c28268a437baf0b7e", "abc", ""])
    def test_malformed_id_is_not_found(self, raw):
        with pytest.raises(NotFoundError) as exc_info:
            parse_product_id(raw)
        assert exc_info.value.message == f"Product with id {raw} not found!"


class TestRepositoryWithStore:
    """Round trips through a real SQLite session."""

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_timestamps(self, db_session):
        repository = ProductRepository(db_session)

        product = await repository.create(make_payload())

        assert isinstance(product.id, uuid.UUID)
        assert product.name == "iPhone SE"
        assert product.price == 9001
        assert product.created_at is not None
        assert product.updated_at == product.created_at

    @pytest.mark.asyncio
    async def test_created_product_visible_in_new_session(self, database):
        async with database.session() as session:
            created = await ProductRepository(session).create(make_payload())

        async with database.session() as session:
            fetched = await ProductRepository(session).get_by_id(str(created.id))

        assert fetched.id == created.id
        assert fetched.description == "Good phone"

    @pytest.mark.asyncio
    async def test_list_all_empty(self, db_session):
        assert await ProductRepository(db_session).list_all() == []

    @pytest.mark.asyncio
    async def test_list_all_oldest_first(self, db_session):
        repository = ProductRepository(db_session)
        for name in ("a", "b", "c"):
            await repository.create(make_payload(name=name))

        products = await repository.list_all()

        assert [p.name for p in products] == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, db_session):
        missing = str(uuid.uuid4())

        with pytest.raises(NotFoundError, match=f"Product with id {missing} not found!"):
            await ProductRepository(db_session).get_by_id(missing)

    @pytest.mark.asyncio
    async def test_update_applies_only_supplied_fields(self, db_session):
        repository = ProductRepository(db_session)
        product = await repository.create(make_payload())
        original_created = product.created_at

        updated = await repository.update_by_id(str(product.id), ProductUpdate(name="Kelek"))

        assert updated.name == "Kelek"
        assert updated.description == "Good phone"
        assert updated.price == 9001
        assert updated.created_at == original_created
        assert updated.updated_at >= original_created

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await ProductRepository(db_session).update_by_id(
                "6436b60c28268a437baf0b7e", ProductUpdate(name="Kelek")
            )

    @pytest.mark.asyncio
    async def test_delete_removes_row(self, database):
        async with database.session() as session:
            product = await ProductRepository(session).create(make_payload())
        product_id = str(product.id)

        async with database.session() as session:
            await ProductRepository(session).delete_by_id(product_id)

        async with database.session() as session:
            repository = ProductRepository(session)
            assert await repository.list_all() == []
            with pytest.raises(NotFoundError):
                await repository.delete_by_id(product_id)


class TestRepositoryStoreFailures:
    """Driver errors surface as DatabaseError."""

    @staticmethod
    def _driver_error() -> OperationalError:
        return OperationalError("SELECT 1", {}, Exception("connection refused"))

    @pytest.mark.asyncio
    async def test_create_wraps_commit_failure(self, mock_db_session):
        mock_db_session.commit.side_effect = self._driver_error()

        with pytest.raises(DatabaseError) as exc_info:
            await ProductRepository(mock_db_session).create(make_payload())

        assert exc_info.value.context["operation"] == "create"
        assert exc_info.value.context["error_type"] == "OperationalError"

    @pytest.mark.asyncio
    async def test_list_wraps_query_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = self._driver_error()

        with pytest.raises(DatabaseError):
            await ProductRepository(mock_db_session).list_all()

    @pytest.mark.asyncio
    async def test_get_wraps_query_failure(self, mock_db_session):
        mock_db_session.get.side_effect = self._driver_error()

        with pytest.raises(DatabaseError):
            await ProductRepository(mock_db_session).get_by_id(str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_malformed_id_never_reaches_store(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await ProductRepository(mock_db_session).get_by_id("not-a-uuid")

        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_wraps_commit_failure(self, mock_db_session):
        mock_db_session.get.return_value = MagicMock(spec=Product)
        mock_db_session.commit.side_effect = self._driver_error()

        with pytest.raises(DatabaseError) as exc_info:
            await ProductRepository(mock_db_session).delete_by_id(str(uuid.uuid4()))

        assert exc_info.value.context["operation"] == "delete"

    @pytest.mark.asyncio
    async def test_update_wraps_commit_failure(self, mock_db_session):
        mock_db_session.get.return_value = MagicMock(spec=Product)
        mock_db_session.commit.side_effect = self._driver_error()

        with pytest.raises(DatabaseError) as exc_info:
            await ProductRepository(mock_db_session).update_by_id(
                str(uuid.uuid4()), ProductUpdate(name="Kelek")
            )

        assert exc_info.value.context["operation"] == "update"

    @pytest.mark.asyncio
    async def test_writes_commit_before_returning(self, mock_db_session):
        await ProductRepository(mock_db_session).create(make_payload())

        mock_db_session.commit.assert_awaited_once()
