import dataclasses

import pytest
from django.test import SimpleTestCase, override_settings

from talon_django import (
    ConcernNotFound,
    ConfigurationError,
    Repository,
    Resource,
    resolve_descriptor,
)
from talon_django.adapters import DjangoSchemaAdapter, SchemaAdapter
from talon_django.utils import pluralize
from tests.models import BlogPost, Category, State


pytestmark = pytest.mark.unit


class TestRequiredOptions(SimpleTestCase):
    def test_missing_schema_is_a_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_descriptor(concern="my_blog")
        assert str(exc_info.value) == "schema is required"

    def test_missing_schema_fails_even_with_every_other_option(self):
        with pytest.raises(ConfigurationError, match="schema is required"):
            resolve_descriptor(
                concern="my_blog", adapter="django", repo="default", paginate=True
            )

    def test_concern_without_adapter_fails(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_descriptor(schema=BlogPost, concern="no_adapter_here")
        assert str(exc_info.value) == "schema_adapter required"
        assert exc_info.value.resource_name == "BlogPost"

    def test_no_concern_and_no_global_adapter_fails(self):
        with pytest.raises(ConfigurationError, match="schema_adapter required"):
            resolve_descriptor(schema=BlogPost)

    @override_settings(TALON={"schema_adapter": "django"})
    def test_global_adapter_setting_is_used(self):
        descriptor = resolve_descriptor(schema=BlogPost, concern="anything")
        assert isinstance(descriptor.adapter, DjangoSchemaAdapter)

    def test_unknown_adapter_name_fails(self):
        with pytest.raises(ConfigurationError, match="unknown schema_adapter"):
            resolve_descriptor(schema=BlogPost, concern="my_blog", adapter="mongo")

    def test_unimportable_adapter_path_fails(self):
        with pytest.raises(ConfigurationError, match="could not be imported"):
            resolve_descriptor(
                schema=BlogPost, concern="my_blog", adapter="missing.module.Adapter"
            )

    def test_adapter_by_import_path(self):
        descriptor = resolve_descriptor(
            schema=BlogPost,
            concern="my_blog",
            adapter="talon_django.adapters.DjangoSchemaAdapter",
        )
        assert descriptor.adapter.name == "django"

    def test_adapter_instance_is_kept(self):
        adapter = DjangoSchemaAdapter()
        descriptor = resolve_descriptor(schema=BlogPost, concern="my_blog", adapter=adapter)
        assert descriptor.adapter is adapter


class TestRepositoryResolution(SimpleTestCase):
    def test_repo_comes_from_the_concern(self):
        descriptor = resolve_descriptor(schema=BlogPost, concern="my_blog")
        assert descriptor.repo == Repository(using="default", concern="my_blog")

    def test_explicit_repo_wins(self):
        repo = Repository(using="replica")
        descriptor = resolve_descriptor(schema=BlogPost, concern="my_blog", repo=repo)
        assert descriptor.repo is repo

    def test_repo_alias_string(self):
        descriptor = resolve_descriptor(schema=BlogPost, concern="my_blog", repo="replica")
        assert descriptor.repo.using == "replica"

    def test_missing_concern_failure_propagates(self):
        with pytest.raises(ConcernNotFound):
            resolve_descriptor(schema=BlogPost, adapter="django")

    def test_explicit_repo_does_not_need_a_concern(self):
        descriptor = resolve_descriptor(schema=BlogPost, adapter="django", repo="default")
        assert descriptor.concern is None


class TestPaginateAndDomain(SimpleTestCase):
    def test_paginate_defaults_to_true(self):
        assert resolve_descriptor(schema=BlogPost, concern="my_blog").paginate is True

    def test_concern_paginate_setting(self):
        assert resolve_descriptor(schema=BlogPost, concern="archive").paginate is False

    def test_explicit_false_is_honoured(self):
        descriptor = resolve_descriptor(schema=BlogPost, concern="my_blog", paginate=False)
        assert descriptor.paginate is False

    def test_explicit_true_overrides_concern(self):
        descriptor = resolve_descriptor(schema=BlogPost, concern="archive", paginate=True)
        assert descriptor.paginate is True

    def test_domain_default(self):
        assert resolve_descriptor(schema=BlogPost, concern="my_blog").domain == "talon"

    def test_explicit_domain(self):
        descriptor = resolve_descriptor(schema=BlogPost, concern="my_blog", domain="blog")
        assert descriptor.domain == "blog"


class TestDerivedNames(SimpleTestCase):
    def test_params_key_and_route_name(self):
        descriptor = resolve_descriptor(schema=BlogPost, concern="my_blog")
        assert descriptor.params_key == "blog_post"
        assert descriptor.route_name == "blog_posts"

    def test_params_key_is_deterministic(self):
        first = resolve_descriptor(schema=Category, concern="my_blog")
        second = resolve_descriptor(schema=Category, concern="my_blog")
        assert first.params_key == second.params_key == "category"
        assert first.route_name == pluralize(first.params_key) == "categories"

    def test_single_word_schema(self):
        descriptor = resolve_descriptor(schema=State, concern="my_blog")
        assert (descriptor.params_key, descriptor.route_name) == ("state", "states")

    def test_descriptor_is_frozen(self):
        descriptor = resolve_descriptor(schema=BlogPost, concern="my_blog")
        with pytest.raises(dataclasses.FrozenInstanceError):
            descriptor.params_key = "post"


class TestEndToEnd(SimpleTestCase):
    def test_blog_post_resource(self):
        resource = Resource.configure(schema=BlogPost, concern="my_blog")

        assert resource.adapter.name == "django"
        assert resource.paginate_default is True
        assert resource.params_key == "blog_post"
        assert resource.route_name == "blog_posts"
        assert resource.display_columns("index") == ["title", "body"]
        assert resource.name_field() == "title"
        assert resource.display_name() == "Blog Post"
        assert resource.display_name_plural() == "Blog Posts"
        assert resource.themes() == ["admin-lte"]


class RecordingAdapter(DjangoSchemaAdapter):
    name = "recording"


def test_custom_adapter_subclass_is_accepted():
    descriptor = resolve_descriptor(schema=BlogPost, concern="my_blog", adapter=RecordingAdapter)
    assert isinstance(descriptor.adapter, SchemaAdapter)
    assert descriptor.adapter.name == "recording"
