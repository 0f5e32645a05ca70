import pytest

from talon_django.adapters import DjangoSchemaAdapter, get_adapter, register_adapter
from talon_django.introspection import SchemaIntrospector
from tests.models import BlogPost, Comment, Reading, Tag


pytestmark = pytest.mark.unit


def test_fields_follow_declaration_order():
    assert SchemaIntrospector.for_model(BlogPost).field_names == [
        "id",
        "title",
        "body",
        "inserted_at",
        "updated_at",
    ]


def test_foreign_keys_use_their_column_name():
    names = SchemaIntrospector.for_model(Comment).field_names
    assert names[:3] == ["id", "post_id", "state_id"]


def test_declared_types():
    types = SchemaIntrospector.for_model(Comment).types
    assert types["id"] == "id"
    assert types["post_id"] == "id"
    assert types["author_name"] == "string"
    assert types["rating"] == "integer"
    assert types["approved"] == "boolean"
    assert types["inserted_at"] == "datetime"
    assert SchemaIntrospector.for_model(Tag).types["slug"] == "string"


def test_associations():
    assert SchemaIntrospector.for_model(Comment).associations == ["post", "state"]
    assert SchemaIntrospector.for_model(Tag).associations == ["posts"]
    assert set(SchemaIntrospector.for_model(BlogPost).associations) == {"comments", "tags"}


def test_primary_key():
    assert SchemaIntrospector.for_model(BlogPost).primary_key == "id"
    assert SchemaIntrospector.for_model(Reading).primary_key == "sensor"


def test_search_fields_skip_keys_and_relations():
    assert SchemaIntrospector.for_model(Comment).search_fields() == [
        "author_name",
        "rating",
        "approved",
    ]


def test_introspector_is_cached_per_model():
    assert SchemaIntrospector.for_model(BlogPost) is SchemaIntrospector.for_model(BlogPost)
    SchemaIntrospector.clear_cache()
    assert SchemaIntrospector.for_model(BlogPost).field_names[0] == "id"


def test_adapter_registry():
    class ReadOnlyAdapter(DjangoSchemaAdapter):
        name = "read_only"

    register_adapter("read_only", ReadOnlyAdapter)
    adapter = get_adapter("read_only")
    assert isinstance(adapter, ReadOnlyAdapter)
    assert adapter.fields(BlogPost) == SchemaIntrospector.for_model(BlogPost).field_names
