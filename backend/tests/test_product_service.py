"""
PC Builder Catalog API — Product Service Unit Tests
====================================================

What:  Tests for ProductService and CategoryService against a mock session.
How:   mock_db_session.execute returns canned results; the statements the
       service sent are compiled with the PostgreSQL dialect and inspected.

What we test:
    ✅ Listing returns every product without averageRating
    ✅ Featured: random sample, projected columns, averageRating attached
    ✅ Category pages: known slug, "others", unknown slug (no product query)
    ✅ Single product: found, not found (404), malformed id (400)
    ✅ Legacy rating cleanup only touches individual_rating
    ✅ Driver errors and malformed reviews become DatabaseError
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql

from conftest import mappings_result, scalar_result, scalars_result
from pcbuilder.exceptions import DatabaseError, NotFoundError, ValidationError
from pcbuilder.schemas.catalog import ProductResponse, RatedProductResponse
from pcbuilder.services.category_service import CategoryService
from pcbuilder.services.product_service import ProductService, parse_product_id


def _sent_sql(mock_db_session, call_index=-1) -> str:
    stmt = mock_db_session.execute.await_args_list[call_index].args[0]
    return str(stmt.compile(dialect=postgresql.dialect()))


class TestListProducts:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_returns_all_products(self, mock_db_session, make_product):
        products = [make_product(), make_product(product_name="Dell U2723QE", category="Monitor")]
        mock_db_session.execute.return_value = scalars_result(products)

        result = await self.service.list_products(mock_db_session)

        assert [p.product_name for p in result] == ["Ryzen 5 5600X", "Dell U2723QE"]
        assert all(type(p) is ProductResponse for p in result)
        assert "averageRating" not in result[0].model_dump(by_alias=True)

    @pytest.mark.asyncio
    async def test_legacy_rating_visible_only_when_present(self, mock_db_session, make_product):
        products = [make_product(individual_rating=4.5), make_product()]
        mock_db_session.execute.return_value = scalars_result(products)

        result = await self.service.list_products(mock_db_session)

        assert result[0].model_dump(by_alias=True)["individualRating"] == 4.5
        assert "individualRating" not in result[1].model_dump(by_alias=True)

    @pytest.mark.asyncio
    async def test_reviews_returned_as_stored(self, mock_db_session, make_product):
        stored = [{"comment": "no stars"}, {"rating": "4", "reviewer": "ana"}]
        mock_db_session.execute.return_value = scalars_result([make_product(reviews=stored)])

        result = await self.service.list_products(mock_db_session)

        assert result[0].model_dump(by_alias=True)["reviews"] == stored

    @pytest.mark.asyncio
    async def test_driver_error_wrapped(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=ConnectionResetError("reset"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_products(mock_db_session)

        assert exc_info.value.context["error_type"] == "ConnectionResetError"


class TestFeaturedProducts:

    def setup_method(self):
        self.service = ProductService()

    def _row(self, **overrides):
        row = {
            "id": uuid4(),
            "image": "https://cdn.example.com/item.png",
            "product_name": "Corsair Vengeance 16GB",
            "category": "RAM",
            "price": 59.0,
            "status": "In Stock",
            "reviews": [],
        }
        row.update(overrides)
        return row

    @pytest.mark.asyncio
    async def test_sample_query(self, mock_db_session):
        mock_db_session.execute.return_value = mappings_result([])

        await self.service.featured_products(mock_db_session, sample_size=6)

        sql = _sent_sql(mock_db_session)
        assert "ORDER BY random()" in sql
        assert "LIMIT" in sql
        for column in ("id", "image", "product_name", "category", "price", "status", "reviews"):
            assert f"products.{column}" in sql
        for column in ("description", "key_features", "individual_rating"):
            assert column not in sql
        stmt = mock_db_session.execute.await_args.args[0]
        assert stmt.compile().params["param_1"] == 6

    @pytest.mark.asyncio
    async def test_average_rating_attached(self, mock_db_session):
        rows = [
            self._row(reviews=[{"rating": 4}, {"rating": 2}]),
            self._row(reviews=None),
        ]
        mock_db_session.execute.return_value = mappings_result(rows)

        result = await self.service.featured_products(mock_db_session)

        assert [p.average_rating for p in result] == [3, 0]

    @pytest.mark.asyncio
    async def test_only_projected_fields_serialized(self, mock_db_session):
        mock_db_session.execute.return_value = mappings_result([self._row()] * 6)

        result = await self.service.featured_products(mock_db_session)

        assert len(result) == 6
        assert set(result[0].model_dump(by_alias=True)) == {
            "_id", "image", "productName", "category", "price", "status", "reviews", "averageRating",
        }

    @pytest.mark.asyncio
    async def test_malformed_review_is_database_error(self, mock_db_session):
        mock_db_session.execute.return_value = mappings_result(
            [self._row(reviews=[{"rating": "five"}])]
        )

        with pytest.raises(DatabaseError):
            await self.service.featured_products(mock_db_session)


class TestProductsByCategory:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_known_slug(self, mock_db_session, make_product, categories):
        monitors = [
            make_product(product_name="LG 27GP850", category="Monitor", reviews=[{"rating": 5}]),
        ]
        mock_db_session.execute = AsyncMock(
            side_effect=[scalars_result(categories), scalars_result(monitors)]
        )

        result = await self.service.products_by_category(mock_db_session, "monitor")

        assert [p.product_name for p in result] == ["LG 27GP850"]
        assert result[0].average_rating == 5
        assert "WHERE products.category = %(category_1)s" in _sent_sql(mock_db_session)

    @pytest.mark.asyncio
    async def test_others(self, mock_db_session, make_product, categories):
        leftovers = [make_product(category="Others"), make_product(category="Mouse")]
        mock_db_session.execute = AsyncMock(
            side_effect=[scalars_result(categories), scalars_result(leftovers)]
        )

        result = await self.service.products_by_category(mock_db_session, "others")

        assert len(result) == 2
        sql = _sent_sql(mock_db_session)
        assert "NOT IN" in sql
        assert "IS NULL" in sql

    @pytest.mark.asyncio
    async def test_unknown_slug_returns_empty_without_product_query(
        self, mock_db_session, categories
    ):
        mock_db_session.execute.return_value = scalars_result(categories)

        result = await self.service.products_by_category(mock_db_session, "gpu")

        assert result == []
        assert mock_db_session.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_categories_reread_every_call(self, mock_db_session, categories):
        mock_db_session.execute.return_value = scalars_result(categories)

        await self.service.products_by_category(mock_db_session, "gpu")
        await self.service.products_by_category(mock_db_session, "gpu")

        assert mock_db_session.execute.await_count == 2


class TestGetProduct:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_found(self, mock_db_session, make_product):
        product = make_product(reviews=[{"rating": 4, "reviewer": "kim"}, {"rating": 2}])
        mock_db_session.execute.return_value = scalar_result(product)

        result = await self.service.get_product(mock_db_session, str(product.id))

        assert isinstance(result, RatedProductResponse)
        assert result.id == product.id
        assert result.average_rating == 3
        assert result.reviews[0].model_dump() == {"rating": 4, "reviewer": "kim"}

    @pytest.mark.asyncio
    async def test_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = scalar_result(None)

        with pytest.raises(NotFoundError):
            await self.service.get_product(mock_db_session, str(uuid4()))

    @pytest.mark.asyncio
    async def test_malformed_id_rejected_before_query(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.get_product(mock_db_session, "64a1f0c2e4b0a1b2c3d4e5f6")

        assert exc_info.value.field == "product_id"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_query_error_wrapped(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=OSError("connection refused"))

        with pytest.raises(DatabaseError):
            await self.service.get_product(mock_db_session, str(uuid4()))


class TestParseProductId:

    def test_accepts_uuid_string(self):
        raw = str(uuid4())
        assert str(parse_product_id(raw)) == raw

    @pytest.mark.parametrize("raw", ["", "featured", "1234", "not-a-uuid"])
    def test_rejects_other_values(self, raw):
        with pytest.raises(ValidationError):
            parse_product_id(raw)


class TestStripLegacyRating:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_clears_only_legacy_column(self, mock_db_session):
        result = AsyncMock()
        result.rowcount = 12
        mock_db_session.execute.return_value = result

        modified = await self.service.strip_legacy_rating(mock_db_session)

        assert modified == 12
        sql = _sent_sql(mock_db_session)
        assert sql.startswith("UPDATE products SET individual_rating=")
        assert "WHERE products.individual_rating IS NOT NULL" in sql
        set_clause = sql.split("WHERE")[0]
        for column in ("price", "reviews", "category", "status", "product_name"):
            assert column not in set_clause

    @pytest.mark.asyncio
    async def test_error_wrapped(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=TimeoutError())

        with pytest.raises(DatabaseError):
            await self.service.strip_legacy_rating(mock_db_session)


class TestCategoryService:

    def setup_method(self):
        self.service = CategoryService()

    @pytest.mark.asyncio
    async def test_lists_categories(self, mock_db_session, categories):
        mock_db_session.execute.return_value = scalars_result(categories)

        result = await self.service.list_categories(mock_db_session)

        assert [(c.title, c.slug) for c in result] == [
            ("Processor", "processor"), ("Monitor", "monitor"), ("RAM", "ram"),
        ]
        assert result[0].model_dump(by_alias=True)["_id"] == categories[0].id

    @pytest.mark.asyncio
    async def test_error_wrapped(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=OSError())

        with pytest.raises(DatabaseError):
            await self.service.list_categories(mock_db_session)
