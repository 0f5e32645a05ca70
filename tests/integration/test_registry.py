from unittest.mock import patch

import pytest
from django.apps import apps
from django.test import SimpleTestCase, override_settings

from talon_django import ConfigurationError, Resource, get_resource, register, resource_registry
from talon_django.registry import ResourceRegistry, autodiscover
from tests.models import BlogPost, Comment, State


pytestmark = pytest.mark.integration


class TestResourceRegistry(SimpleTestCase):
    def setUp(self):
        self.registry = ResourceRegistry()

    def test_register_resolves_the_descriptor(self):
        resource = self.registry.register(BlogPost, concern="my_blog")
        assert isinstance(resource, Resource)
        assert resource.params_key == "blog_post"
        assert self.registry.is_registered(BlogPost)

    def test_lookup_by_model_params_key_and_route_name(self):
        resource = self.registry.register(BlogPost, concern="my_blog")
        assert self.registry.get_resource(BlogPost) is resource
        assert self.registry.get_resource("blog_post") is resource
        assert self.registry.get_resource("blog_posts") is resource
        assert self.registry.get_resource("comments") is None

    def test_failed_registration_is_not_stored(self):
        with pytest.raises(ConfigurationError, match="schema_adapter required"):
            self.registry.register(BlogPost, concern="no_adapter_here")
        assert not self.registry.is_registered(BlogPost)

    def test_missing_schema(self):
        with pytest.raises(ConfigurationError, match="schema is required"):
            self.registry.register(None, concern="my_blog")

    def test_reregistering_replaces_the_resource(self):
        first = self.registry.register(BlogPost, concern="my_blog")
        second = self.registry.register(BlogPost, concern="archive")
        assert self.registry.get_resource(BlogPost) is second is not first
        assert len(self.registry.list_resources()) == 1

    def test_list_resources_by_concern(self):
        self.registry.register(BlogPost, concern="my_blog")
        self.registry.register(Comment, concern="my_blog")
        self.registry.register(State, concern="archive")
        assert {r.params_key for r in self.registry.list_resources("my_blog")} == {
            "blog_post",
            "comment",
        }
        assert len(self.registry.list_resources()) == 3

    def test_unregister(self):
        self.registry.register(BlogPost, concern="my_blog")
        assert self.registry.unregister(BlogPost) is True
        assert self.registry.unregister(BlogPost) is False
        assert self.registry.get_resource(BlogPost) is None


class TestRegisterDecorator(SimpleTestCase):
    def tearDown(self):
        resource_registry.unregister(State)

    def test_decorator_registers_the_subclass(self):
        @register(State, concern="archive")
        class StateResource(Resource):
            def display_columns(self, action):
                return ["id", *super().display_columns(action)]

        resource = get_resource(State)
        assert isinstance(resource, StateResource)
        assert resource.display_columns("index") == ["id", "name", "code"]
        assert resource.paginate_default is False

    def test_autodiscover_without_talon_modules(self):
        autodiscover()
        assert get_resource(State) is None


class TestAppReady(SimpleTestCase):
    def test_configuration_errors_abort_startup(self):
        config = apps.get_app_config("talon_django")
        with patch(
            "talon_django.registry.autodiscover",
            side_effect=ConfigurationError("schema is required"),
        ):
            with pytest.raises(ConfigurationError):
                config.ready()

    @override_settings(TALON={"autodiscover": False})
    def test_autodiscovery_can_be_disabled(self):
        config = apps.get_app_config("talon_django")
        with patch("talon_django.registry.autodiscover") as mocked:
            config.ready()
        mocked.assert_not_called()
