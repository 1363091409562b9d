import typing

from .config import Configuration
from .models import (
    ResourceRelationshipDescriptor,
    ResourceToManyRelationshipDescriptor,
    ResourceToOneRelationshipDescriptor,
)
from .registry import SerializerRegistry, SerializerSpec
from .serde.builders import (
    ResourceIdReprBuilder,
    ResourceReprBuilder,
    ToManyRelReprBuilder,
    ToOneRelReprBuilder,
)
from .serde.models import LinksRepr
from .serializer import FieldsetMap, Serializer


class ToSerdeContext:
    """
    Everything a single serialization call shares across the resources it renders.
    """

    context: typing.Any
    base_url: typing.Optional[str]
    fields: FieldsetMap
    namespace: typing.Optional[str]
    config: Configuration
    registry: SerializerRegistry

    def create_serializer(
        self,
        native: typing.Any,
        serializer: SerializerSpec = None,
        include_linkages: typing.Iterable[str] = (),
    ) -> Serializer:
        serializer_class = self.registry.query_serializer_class(
            native, serializer=serializer, namespace=self.namespace
        )
        return serializer_class(
            native,
            context=self.context,
            base_url=self.base_url,
            fields=self.fields,
            include_linkages=include_linkages,
            config=self.config,
        )

    def __init__(
        self,
        config: Configuration,
        registry: SerializerRegistry,
        context: typing.Any = None,
        base_url: typing.Optional[str] = None,
        fields: typing.Optional[FieldsetMap] = None,
        namespace: typing.Optional[str] = None,
    ):
        self.config = config
        self.registry = registry
        self.context = context
        self.base_url = base_url
        self.fields = fields if fields is not None else {}
        self.namespace = namespace


class Mapper:
    """
    Renders one domain object into a :py:class:`ResourceReprBuilder`.
    """

    def _build_serde_rel(
        self,
        ctx: ToSerdeContext,
        builder: ResourceIdReprBuilder,
        native: typing.Any,
        rel: ResourceRelationshipDescriptor,
    ) -> None:
        serializer = ctx.create_serializer(native, rel.serializer)
        builder.set_type(serializer.type)
        builder.set_id(serializer.id or "")

    def _build_links(
        self,
        builder: typing.Union[ToOneRelReprBuilder, ToManyRelReprBuilder],
        serializer: Serializer,
        rel: ResourceRelationshipDescriptor,
    ) -> None:
        self_ = serializer.relationship_self_link(rel.name)
        related = serializer.relationship_related_link(rel.name)
        if self_ is not None or related is not None:
            builder.links = LinksRepr(self_=self_, related=related)

    def _build_serde_to_one(
        self,
        ctx: ToSerdeContext,
        builder: ToOneRelReprBuilder,
        serializer: Serializer,
        rel: ResourceToOneRelationshipDescriptor,
        with_data: bool,
    ) -> None:
        if rel.include_links:
            self._build_links(builder, serializer, rel)
        if with_data:
            dest = serializer.has_one_relationship(rel)
            if dest is None:
                builder.nullify()
            else:
                self._build_serde_rel(ctx, builder.set(), dest, rel)

    def _build_serde_to_many(
        self,
        ctx: ToSerdeContext,
        builder: ToManyRelReprBuilder,
        serializer: Serializer,
        rel: ResourceToManyRelationshipDescriptor,
        with_data: bool,
    ) -> None:
        if rel.include_links:
            self._build_links(builder, serializer, rel)
        if with_data:
            for dest in serializer.has_many_relationship(rel):
                if dest is not None:
                    self._build_serde_rel(ctx, builder.next(), dest, rel)
            builder.done()

    def _build_serde_relationships(
        self, ctx: ToSerdeContext, builder: ResourceReprBuilder, serializer: Serializer
    ) -> None:
        for rel in serializer.resource_descr.relationships.values():
            if not serializer.is_visible(rel) or not serializer.is_selected(rel.name):
                continue
            name = serializer.format_name(rel.name)
            with_data = rel.include_data or name in serializer.include_linkages
            if isinstance(rel, ResourceToOneRelationshipDescriptor):
                self._build_serde_to_one(
                    ctx, builder.next_to_one_relationship(name), serializer, rel, with_data
                )
            elif isinstance(rel, ResourceToManyRelationshipDescriptor):
                self._build_serde_to_many(
                    ctx, builder.next_to_many_relationship(name), serializer, rel, with_data
                )
            else:
                raise AssertionError("should never get here!")

    def build_serde(
        self,
        ctx: ToSerdeContext,
        builder: ResourceReprBuilder,
        native: typing.Any,
        serializer: SerializerSpec = None,
        include_linkages: typing.Iterable[str] = (),
    ) -> Serializer:
        """
        Fills ``builder`` with the resource object for ``native``.

        :param ToSerdeContext ctx: the context of the ongoing serialization.
        :param ResourceReprBuilder builder: the builder to fill.
        :param Any native: the domain object.
        :param serializer: the serializer class or registered name to use instead of the registered one.
        :param Iterable[str] include_linkages: the formatted names of the relationships whose linkage must be rendered.
        :return: the serializer that rendered the object.
        """
        _serializer = ctx.create_serializer(native, serializer, include_linkages)
        id = _serializer.id
        if id:
            builder.set_id(id)
        builder.set_type(_serializer.type)
        for name, value in _serializer.attributes().items():
            builder.add_attribute(name, value)
        links = _serializer.links()
        if links:
            builder.links = LinksRepr(self_=links.get("self"), related=links.get("related"))
        self._build_serde_relationships(ctx, builder, _serializer)
        builder.jsonapi = _serializer.jsonapi()
        builder.meta = _serializer.meta()
        return _serializer
