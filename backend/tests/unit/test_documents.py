"""Tests for the document store."""
import pytest

from app.exceptions import ValidationError


class TestDocumentValidation:
    """Test JSON object validation."""

    @pytest.mark.parametrize("data", [{}, {"name": "Ann"}, {"nested": {"list": [1, 2, None]}}])
    def test_objects_are_accepted(self, data):
        from app.services.documents import is_json_object

        assert is_json_object(data)

    @pytest.mark.parametrize("data", [[], [{"a": 1}], "text", 42, 1.5, True, None, {1: "int key"}])
    def test_non_objects_are_rejected(self, data):
        from app.services.documents import is_json_object

        assert not is_json_object(data)


class TestDocumentStore:
    """Test document CRUD within a scope."""

    def test_create_and_get(self, db_session, sample_scope):
        from app.services.documents import DocumentStore

        store = DocumentStore(db_session)
        doc = store.create(sample_scope, {"name": "Ann"})

        assert doc.id is not None
        assert doc.data == {"name": "Ann"}
        assert doc.created_at == doc.updated_at
        assert store.get(sample_scope, doc.id).data == {"name": "Ann"}

    @pytest.mark.parametrize("data", [[1, 2], "text", None])
    def test_create_rejects_non_objects(self, db_session, sample_scope, data):
        from app.services.documents import DocumentStore

        store = DocumentStore(db_session)
        with pytest.raises(ValidationError):
            store.create(sample_scope, data)
        assert store.count(sample_scope) == 0

    def test_get_missing(self, db_session, sample_scope):
        from app.services.documents import DocumentStore

        assert DocumentStore(db_session).get(sample_scope, 999) is None

    def test_update_replaces_data(self, db_session, sample_scope):
        from app.services.documents import DocumentStore

        store = DocumentStore(db_session)
        doc = store.create(sample_scope, {"name": "Ann", "role": "admin"})
        created_at, updated_at = doc.created_at, doc.updated_at

        updated = store.update(sample_scope, doc.id, {"name": "Ann", "age": 30})

        assert updated.data == {"name": "Ann", "age": 30}
        assert updated.created_at == created_at
        assert updated.updated_at > updated_at

    def test_update_missing_and_invalid(self, db_session, sample_scope):
        from app.services.documents import DocumentStore

        store = DocumentStore(db_session)
        assert store.update(sample_scope, 999, {"a": 1}) is None
        doc = store.create(sample_scope, {"a": 1})
        with pytest.raises(ValidationError):
            store.update(sample_scope, doc.id, ["not", "an", "object"])
        assert store.get(sample_scope, doc.id).data == {"a": 1}

    def test_delete(self, db_session, sample_scope):
        from app.services.documents import DocumentStore

        store = DocumentStore(db_session)
        doc = store.create(sample_scope, {"a": 1})

        assert store.delete(sample_scope, doc.id) is True
        assert store.get(sample_scope, doc.id) is None
        assert store.delete(sample_scope, doc.id) is False

    def test_scopes_are_isolated(self, db_session, sample_scope):
        from app.services.collections import CollectionRegistry
        from app.services.documents import DocumentScope, DocumentStore
        from app.services.tenants import TenantRegistry

        other_tenant = TenantRegistry(db_session).create("globex")
        other_scope = DocumentScope(
            tenant=other_tenant,
            collection=CollectionRegistry(db_session).create(other_tenant, "users")
        )
        store = DocumentStore(db_session)
        doc = store.create(sample_scope, {"secret": True})

        assert store.get(other_scope, doc.id) is None
        assert store.update(other_scope, doc.id, {"secret": False}) is None
        assert store.delete(other_scope, doc.id) is False
        assert store.count(other_scope) == 0

    def test_delete_all_for_tenant(self, db_session, sample_scope):
        from app.services.collections import CollectionRegistry
        from app.services.documents import DocumentScope, DocumentStore

        store = DocumentStore(db_session)
        orders = DocumentScope(
            tenant=sample_scope.tenant,
            collection=CollectionRegistry(db_session).create(sample_scope.tenant, "orders")
        )
        store.create(sample_scope, {"a": 1})
        store.create(orders, {"b": 2})

        assert store.delete_all_for_tenant(sample_scope.tenant) == 2
        assert store.count(sample_scope) == 0
        assert store.count(orders) == 0

    def test_counts_by_tenant(self, db_session, sample_scope):
        from app.services.documents import DocumentStore

        store = DocumentStore(db_session)
        store.create(sample_scope, {"a": 1})
        store.create(sample_scope, {"a": 2})

        assert store.counts_by_tenant() == {sample_scope.tenant.id: 2}


class TestPagination:
    """Test list pagination contract."""

    @pytest.mark.parametrize("total,limit,offset", [
        (0, 10, 0),
        (5, 10, 0),
        (5, 2, 0),
        (5, 2, 4),
        (5, 5, 0),
        (5, 2, 5),
        (5, 3, 10),
    ])
    def test_page_sizes(self, db_session, sample_scope, total, limit, offset):
        from app.services.documents import DocumentStore

        store = DocumentStore(db_session)
        for i in range(total):
            store.create(sample_scope, {"n": i})

        page = store.list(sample_scope, limit=limit, offset=offset)

        assert len(page.items) == min(limit, max(0, total - offset))
        assert page.total == total
        assert page.has_more == (offset + limit < total)

    def test_newest_first(self, db_session, sample_scope):
        from app.services.documents import DocumentStore

        store = DocumentStore(db_session)
        ids = [store.create(sample_scope, {"n": i}).id for i in range(3)]

        page = store.list(sample_scope, limit=10, offset=0)
        assert [doc.id for doc in page.items] == list(reversed(ids))

    @pytest.mark.parametrize("limit,offset,message", [
        (0, 0, "Limit must be between 1 and 1000"),
        (1001, 0, "Limit must be between 1 and 1000"),
        (10, -1, "Offset must be non-negative"),
    ])
    def test_bounds_are_rejected(self, db_session, sample_scope, limit, offset, message):
        from app.services.documents import DocumentStore

        with pytest.raises(ValidationError, match=message):
            DocumentStore(db_session).list(sample_scope, limit=limit, offset=offset)

    @pytest.mark.parametrize("offset", [2**63 - 1, 2**63, 10**19])
    def test_huge_offset_is_an_empty_page(self, db_session, sample_scope, offset):
        from app.services.documents import DocumentStore

        store = DocumentStore(db_session)
        store.create(sample_scope, {"a": 1})

        page = store.list(sample_scope, limit=10, offset=offset)

        assert page.items == []
        assert page.total == 1
        assert page.has_more is False


class TestOutOfRangeIds:
    """Ids past the 64-bit range address nothing."""

    HUGE_ID = 99999999999999999999

    def test_get(self, db_session, sample_scope):
        from app.services.documents import DocumentStore

        assert DocumentStore(db_session).get(sample_scope, self.HUGE_ID) is None

    def test_update(self, db_session, sample_scope):
        from app.services.documents import DocumentStore

        assert DocumentStore(db_session).update(sample_scope, self.HUGE_ID, {"a": 1}) is None

    def test_update_still_validates_data(self, db_session, sample_scope):
        from app.services.documents import DocumentStore

        with pytest.raises(ValidationError):
            DocumentStore(db_session).update(sample_scope, self.HUGE_ID, [1])

    def test_delete(self, db_session, sample_scope):
        from app.services.documents import DocumentStore

        store = DocumentStore(db_session)
        store.create(sample_scope, {"a": 1})

        assert store.delete(sample_scope, self.HUGE_ID) is False
        assert store.count(sample_scope) == 1
