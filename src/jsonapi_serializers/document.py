"""
:py:mod:`jsonapi_serializers.document` assembles whole JSON:API documents.

Synopsis
--------

.. code-block:: python

   from jsonapi_serializers import serialize, serialize_errors

   serialize(post, include="author,comments.author", base_url="http://example.com")
   serialize(Post.query.all(), is_collection=True, fields={"posts": "title"})
   serialize_errors({"title": ["can't be blank"]})
"""

import collections.abc
import logging
import typing

from .casing import transform_key_casing
from .config import Configuration, get_config
from .exceptions import AmbiguousCollectionError
from .inclusion import DiscoveredResourceTable, IncludeResolver, parse_relationship_paths
from .mapper import Mapper, ToSerdeContext
from .registry import SerializerRegistry, SerializerSpec, default_registry
from .serde.builders import (
    CollectionDocumentBuilder,
    DocumentBuilder,
    ErrorDocumentBuilder,
    SingletonDocumentBuilder,
)
from .serde.models import ErrorRepr, SourceRepr
from .serde.renderer import ReprRenderer
from .serde.types import JSONDocument
from .serde.utils import JSONPointer

logger = logging.getLogger(__name__)

NameList = typing.Union[None, str, typing.Iterable[str]]


def is_iterable(value: typing.Any) -> bool:
    return isinstance(value, collections.abc.Iterable) and not isinstance(
        value, (str, bytes, collections.abc.Mapping)
    )


def normalize_names(value: NameList) -> typing.Optional[typing.List[str]]:
    """
    Turns a comma-separated string or an iterable of strings into a list of
    distinct, stripped, non-empty names, keeping the original order.
    """
    if value is None:
        return None
    items = value.split(",") if isinstance(value, str) else value
    result: typing.List[str] = []
    for item in items:
        item = str(item).strip()
        if item and item not in result:
            result.append(item)
    return result


def normalize_fields(
    fields: typing.Optional[typing.Mapping[str, NameList]]
) -> typing.Dict[str, typing.FrozenSet[str]]:
    if not fields:
        return {}
    return {
        str(type_): frozenset(normalize_names(names) or ()) for type_, names in fields.items()
    }


class DocumentAssembler:
    registry: SerializerRegistry
    renderer: ReprRenderer
    mapper: Mapper

    def _check_shape(self, objects: typing.Any, is_collection: bool) -> None:
        if is_collection and not is_iterable(objects):
            raise AmbiguousCollectionError("Attempted to serialize a single object as a collection.")
        if not is_collection and is_iterable(objects):
            raise AmbiguousCollectionError(
                "Must provide `is_collection=True` to `serialize` when serializing collections."
            )

    def _build_included(
        self,
        ctx: ToSerdeContext,
        builder: DocumentBuilder,
        primaries: typing.Sequence[typing.Any],
        includes: typing.Sequence[str],
        serializer: SerializerSpec,
    ) -> None:
        tree = parse_relationship_paths(includes, ctx.config.include_intermediate_resources)
        logger.debug("inclusion tree: %r", tree)
        table = DiscoveredResourceTable()
        resolver = IncludeResolver(ctx)
        for native in primaries:
            resolver.find_recursive_relationships(native, tree, table, serializer)
        logger.debug("%d resource(s) discovered for inclusion", len(table))
        builder.enable_included()
        for entry in table:
            self.mapper.build_serde(
                ctx,
                builder.next_included(),
                entry.object,
                entry.serializer,
                entry.include_linkages,
            )

    def serialize(
        self,
        objects: typing.Any,
        *,
        is_collection: bool = False,
        include: NameList = None,
        fields: typing.Optional[typing.Mapping[str, NameList]] = None,
        context: typing.Any = None,
        base_url: typing.Optional[str] = None,
        meta: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        links: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        jsonapi: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        serializer: SerializerSpec = None,
        namespace: typing.Optional[str] = None,
        skip_collection_check: bool = False,
        config: typing.Optional[Configuration] = None,
    ) -> JSONDocument:
        if not skip_collection_check:
            self._check_shape(objects, is_collection)

        config = config if config is not None else get_config()
        includes = normalize_names(include)
        ctx = ToSerdeContext(
            config=config,
            registry=self.registry,
            context=context,
            base_url=base_url,
            fields=normalize_fields(fields),
            namespace=namespace,
        )
        primary_linkages: typing.Sequence[str] = ()
        if includes:
            primary_linkages = parse_relationship_paths(
                includes, config.include_intermediate_resources
            ).requested_names()

        builder: typing.Union[CollectionDocumentBuilder, SingletonDocumentBuilder]
        primaries: typing.List[typing.Any]
        if is_collection:
            primaries = [native for native in objects if native is not None]
            builder = CollectionDocumentBuilder()
            for native in primaries:
                self.mapper.build_serde(ctx, builder.next(), native, serializer, primary_linkages)
        else:
            primaries = [] if objects is None else [objects]
            builder = SingletonDocumentBuilder()
            if objects is not None:
                self.mapper.build_serde(ctx, builder.set(), objects, serializer, primary_linkages)
        logger.debug(
            "serializing %d primary resource(s) as a %s document",
            len(primaries),
            "collection" if is_collection else "singleton",
        )

        if includes:
            self._build_included(ctx, builder, primaries, includes, serializer)

        builder.jsonapi = jsonapi or None
        builder.meta = dict(meta) if meta else None
        builder.links = links or None
        return self.renderer(builder())

    def serialize_errors(
        self, raw_errors: typing.Any, config: typing.Optional[Configuration] = None
    ) -> JSONDocument:
        """
        Builds an error document. A mapping of attribute names to a message or a list of
        messages becomes one error object per message pointing at the attribute;
        anything else is taken as the list of error objects as it is.
        """
        if not isinstance(raw_errors, collections.abc.Mapping):
            return {"errors": list(raw_errors)}
        config = config if config is not None else get_config()
        builder = ErrorDocumentBuilder()
        for attribute, messages in raw_errors.items():
            if isinstance(messages, str) or not is_iterable(messages):
                messages = [messages]
            name = transform_key_casing(str(attribute), config.key_transform)
            pointer = JSONPointer("data", "attributes", name)
            for message in messages:
                builder.add_error(
                    ErrorRepr(source=SourceRepr(pointer=str(pointer)), detail=message)
                )
        return self.renderer(builder())

    def __init__(
        self,
        registry: typing.Optional[SerializerRegistry] = None,
        renderer: typing.Optional[ReprRenderer] = None,
        mapper: typing.Optional[Mapper] = None,
    ):
        self.registry = registry if registry is not None else default_registry
        self.renderer = renderer if renderer is not None else ReprRenderer()
        self.mapper = mapper if mapper is not None else Mapper()


_default_assembler = DocumentAssembler()


def serialize(
    objects: typing.Any,
    *,
    registry: typing.Optional[SerializerRegistry] = None,
    **kwargs: typing.Any,
) -> JSONDocument:
    """
    Serializes ``objects`` into a JSON:API document.

    :param objects: a single object, :py:const:`None`, or an iterable of objects when ``is_collection`` is set.
    :param bool is_collection: tells whether ``objects`` is a collection; mismatches raise :py:class:`AmbiguousCollectionError`.
    :param include: dotted relationship paths, as a comma-separated string or a list.
    :param fields: sparse fieldsets keyed by the formatted type.
    :param context: an opaque value made available to serializers as ``context``.
    :param base_url: prepended to every link; no trailing slash.
    :param meta: the top-level ``meta`` member.
    :param links: the top-level ``links`` member.
    :param jsonapi: the top-level ``jsonapi`` member.
    :param serializer: the serializer class or registered name for the primary data.
    :param namespace: the namespace serializers are looked up in.
    :param bool skip_collection_check: disables the shape check.
    :param config: the configuration to use instead of the active one.
    :param registry: the registry to look serializers up in instead of the default one.
    """
    assembler = _default_assembler if registry is None else DocumentAssembler(registry)
    return assembler.serialize(objects, **kwargs)


def serialize_errors(
    raw_errors: typing.Any, config: typing.Optional[Configuration] = None
) -> JSONDocument:
    return _default_assembler.serialize_errors(raw_errors, config)
