"""
Managed admin resources.

A resource describes how one Django model looks to generic admin pages:
which columns are displayed, how they are titled, which field names a
record, and how index/search querysets are preloaded, filtered, searched and
paginated.

Configuration is resolved once, when the resource is registered, into a
frozen ``ResourceDescriptor``. ``Resource`` reads the descriptor; every
method is a default that a resource subclass may override, calling
``super()`` to build on the default::

    @register(BlogPost, concern="my_blog")
    class BlogPostResource(Resource):
        def display_columns(self, action):
            columns = super().display_columns(action)
            if action == "index":
                return ["id", *columns, "inserted_at"]
            return columns
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from django.db import models

from . import settings as talon_settings
from .adapters import SchemaAdapter, get_adapter
from .concerns import Concern, concern_name, get_concern
from .datatable import sort_column_order
from .defaults import DEFAULT_DOMAIN, HIDDEN_COLUMNS
from .exceptions import ActionNotSupported, ConfigurationError
from .i18n import dgettext
from .introspection import STRING_TYPE, SchemaIntrospector
from .repository import Repository
from .search import search as search_schema
from .utils import pluralize, titleize, underscore

logger = logging.getLogger(__name__)

# Actions whose query is preloaded before it runs; anything else preloads
# the fetched instance.
QUERY_PRELOAD_ACTIONS = frozenset(
    {"index", "show", "edit", "delete", "search", "update"}
)
PAGINATED_ACTIONS = frozenset({"index", "search"})

ModelOrInstance = Union[type[models.Model], models.Model]


@dataclass(frozen=True)
class ResourceDescriptor:
    """Resolved, immutable configuration of one resource."""

    schema: type[models.Model]
    adapter: SchemaAdapter
    repo: Repository
    concern: Optional[str] = None
    paginate: bool = True
    domain: str = DEFAULT_DOMAIN
    params_key: str = ""
    route_name: str = ""


def _resolve_repo(repo: Any, concern: Union[Concern, str, None]) -> Repository:
    if repo is None:
        return get_concern(concern).repo()
    if isinstance(repo, str):
        return Repository(using=repo, concern=concern_name(concern))
    return repo


def resolve_descriptor(
    schema: Optional[type[models.Model]] = None,
    concern: Union[Concern, str, None] = None,
    domain: Optional[str] = None,
    adapter: Any = None,
    repo: Any = None,
    paginate: Optional[bool] = None,
) -> ResourceDescriptor:
    """
    Resolve resource options into a ``ResourceDescriptor``.

    ``adapter`` falls back to the concern's ``schema_adapter`` setting,
    ``repo`` to the concern's repository and ``paginate`` to the concern's
    ``paginate`` setting, then ``True``.

    Raises:
        ConfigurationError: when ``schema`` is missing or no adapter is
            configured.
    """
    if schema is None:
        raise ConfigurationError("schema is required")

    name = concern_name(concern)
    adapter_id = adapter if adapter is not None else talon_settings.schema_adapter(name)
    if adapter_id is None:
        raise ConfigurationError("schema_adapter required", resource_name=schema.__name__)
    schema_adapter = get_adapter(adapter_id)

    if paginate is None:
        paginate = talon_settings.paginate(name)
    if paginate is None:
        paginate = True

    params_key = underscore(schema.__name__)
    descriptor = ResourceDescriptor(
        schema=schema,
        adapter=schema_adapter,
        repo=_resolve_repo(repo, concern),
        concern=name,
        paginate=bool(paginate),
        domain=domain or DEFAULT_DOMAIN,
        params_key=params_key,
        route_name=pluralize(params_key),
    )
    logger.debug("Resolved resource descriptor %s", descriptor)
    return descriptor


def name_field(
    schema: ModelOrInstance, adapter: Optional[SchemaAdapter] = None
) -> Optional[str]:
    """
    Infer the field that names a record of ``schema``.

    Uses, in order: a string ``name`` field, the first string field, the
    primary key.

        >>> name_field(Post)
        'title'
        >>> name_field(Post(title="Hello"))
        'title'
    """
    if isinstance(schema, models.Model):
        schema = type(schema)
    if adapter is None:
        introspector = SchemaIntrospector.for_model(schema)
        types, primary_key = introspector.types, introspector.primary_key
    else:
        types, primary_key = adapter.types(schema), adapter.primary_key(schema)

    if types.get("name") == STRING_TYPE:
        return "name"
    for field, field_type in types.items():
        if field_type == STRING_TYPE:
            return field
    return primary_key


class Resource:
    """Default behaviour of a managed resource."""

    # Field paths searched by ``search``; the model's direct columns when empty.
    search_fields: tuple[str, ...] = ()

    def __init__(self, descriptor: ResourceDescriptor):
        self.descriptor = descriptor

    @classmethod
    def configure(cls, **options: Any) -> "Resource":
        """Resolve ``options`` and build the resource."""
        return cls(resolve_descriptor(**options))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.params_key!r}>"

    # Configuration accessors

    @property
    def schema(self) -> type[models.Model]:
        return self.descriptor.schema

    @property
    def adapter(self) -> SchemaAdapter:
        return self.descriptor.adapter

    @property
    def concern(self) -> Optional[str]:
        return self.descriptor.concern

    @property
    def repo(self) -> Repository:
        return self.descriptor.repo

    @property
    def domain(self) -> str:
        return self.descriptor.domain

    @property
    def paginate_default(self) -> bool:
        return self.descriptor.paginate

    @property
    def params_key(self) -> str:
        return self.descriptor.params_key

    @property
    def route_name(self) -> str:
        return self.descriptor.route_name

    def themes(self) -> list[str]:
        return talon_settings.themes(self.concern)

    # Columns and names

    def display_columns(self, action: str) -> list[str]:
        """
        Return the columns rendered on ``action`` pages.

        Every page kind (index, show, form) gets the schema's columns without
        ``id``, ``inserted_at`` and ``updated_at``.
        """
        return [
            field
            for field in self.adapter.fields(self.schema)
            if field not in HIDDEN_COLUMNS
        ]

    def render_column_name(self, action: str, field: Any) -> str:
        """
        Title a column.

            >>> resource.render_column_name("index", "first_name")
            'First Name'
            >>> resource.render_column_name("index", "state_id")
            'State'
        """
        field = str(field)
        if field.endswith("_id"):
            field = field[: -len("_id")]
        return titleize(field)

    def get_schema_field(self, action: str, resource: Any, name: str) -> Any:
        """Return the value rendered for column ``name`` of ``resource``."""
        return getattr(resource, str(name), None)

    def schema_types(self) -> dict[str, str]:
        """
        Field type overrides used when rendering fields.

        Override to render a string field as a textarea::

            def schema_types(self):
                return {"body": "text"}
        """
        return {}

    def name_field(self) -> Optional[str]:
        return name_field(self.schema, self.adapter)

    def resource_title(self, resource: Any) -> Any:
        if resource is None:
            return None
        field = name_field(type(resource), self.adapter)
        if field is None:
            return None
        return getattr(resource, field)

    def _title_text(self, resource: Any) -> str:
        title = self.resource_title(resource)
        return "" if title is None else str(title)

    def display_name(self) -> str:
        return dgettext(self.domain, "%(name)s", name=titleize(self.schema))

    def display_name_plural(self) -> str:
        return dgettext(self.domain, "%(name)s", name=pluralize(self.display_name()))

    def header_title(self, action: Any, resource: Any = None) -> str:
        """
        Title of the page rendering ``action``.

        ``action`` is an action name or a request whose resolved URL name is
        the action.
        """
        action = _action_name(action)
        if action == "show":
            return dgettext(
                self.domain,
                "%(type)s %(title)s",
                type=self.display_name(),
                title=self._title_text(resource),
            ).strip()
        if action == "new":
            return dgettext(
                self.domain,
                "%(action)s %(type)s",
                action=titleize(action),
                type=self.display_name(),
            )
        if action == "edit":
            return dgettext(
                self.domain,
                "%(action)s %(title)s",
                action=titleize(action),
                title=self._title_text(resource),
            ).strip()
        if action == "index":
            return dgettext(
                self.domain, "%(plural_type)s", plural_type=self.display_name_plural()
            )
        return dgettext(self.domain, "Unknown action")

    def toolbar_title(self) -> str:
        return dgettext(self.domain, "%(type)s listing", type=self.display_name())

    # Query hooks

    def preload(self, query: Any, params: Mapping[str, Any], action: str) -> Any:
        """
        Eager load the schema's associations.

        Queries of index, show, edit, delete, search and update actions are
        marked for preloading; for any other action ``query`` is a fetched
        instance and its associations are loaded through the repository.
        """
        associations = self.adapter.associations(self.schema)
        if action in QUERY_PRELOAD_ACTIONS:
            return self.adapter.preload_query(query, associations)
        return self.repo.preload(query, associations)

    def query(self, query: Any, params: Mapping[str, Any], action: str) -> Any:
        """
        Hook for intercepting the query.

        An ``id`` parameter restricts the query to that record for every
        action; otherwise an ``order`` parameter orders index queries.
        """
        params = params or {}
        if "id" in params:
            return self.adapter.where_id(query, params["id"])
        if action == "index" and params.get("order") is not None:
            return self.adapter.order_by(query, sort_column_order(params["order"]))
        return query

    def paginate(self, query: Any, params: Mapping[str, Any], action: str) -> dict[str, Any]:
        """
        Run an index or search query.

        Returns ``{"page": <Page>}`` when the resource paginates and
        ``{"resources": [...]}`` otherwise.
        """
        if action not in PAGINATED_ACTIONS:
            raise ActionNotSupported(
                f"{type(self).__name__} does not paginate '{action}' queries",
                action=action,
            )
        if self.paginate_default:
            return {"page": self.repo.paginate(query, params or {})}
        return {"resources": self.repo.all(query)}

    def search(self, query: Any, params: Mapping[str, Any], action: Optional[str] = None) -> Any:
        """
        Apply the ``search_terms`` parameter.

        Searches when called without an action or for the search action;
        other actions get ``query`` back unchanged.
        """
        if action is not None and action != "search":
            return query
        return search_schema(self, query, (params or {}).get("search_terms"))

    def search_request(self, request: Any) -> Any:
        """Search the schema with the ``search_terms`` of a request."""
        return search_schema(self, self.schema, request.GET.get("search_terms"))

    def run_query(self, params: Mapping[str, Any], action: str) -> Any:
        """
        Run the hook pipeline for an index or search page.

        preload, query, search and paginate, in that order, starting from
        every record of the schema.
        """
        queryset = self.adapter.queryset(self.schema)
        queryset = self.preload(queryset, params, action)
        queryset = self.query(queryset, params, action)
        queryset = self.search(queryset, params, action)
        return self.paginate(queryset, params, action)


def _action_name(action: Any) -> Optional[str]:
    if action is None or isinstance(action, str):
        return action
    resolver_match = getattr(action, "resolver_match", None)
    if resolver_match is not None:
        return resolver_match.url_name
    return str(action)


__all__ = [
    "Resource",
    "ResourceDescriptor",
    "name_field",
    "resolve_descriptor",
]
