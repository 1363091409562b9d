"""
:py:mod:`jsonapi_serializers.serializer` provides :py:class:`Serializer`, the per-type adapter
that tells the document assembler how a domain object looks as a JSON:API resource.

Synopsis
--------

.. code-block:: python

   from jsonapi_serializers import Attr, HasMany, HasOne, Serializer, default_registry

   @default_registry.register(Post)
   class PostSerializer(Serializer):
       class Meta:
           attributes = [
               "title",
               Attr("long_content", source=lambda s: s.object.body * 2),
           ]
           relationships = [
               HasOne("author"),
               HasMany("comments", include_data=True, unless="is_draft"),
           ]

       def is_draft(self):
           return self.object.draft

Any of the hooks below (``id``, ``type``, ``self_link()``, ``meta()``...) may be overridden.
"""

import typing
from collections import OrderedDict

from .casing import tableize, transform_key_casing, underscore
from .config import Configuration, get_config
from .declarative import Meta, build_descriptor, handle_meta
from .models import (
    Predicate,
    ResourceDescriptor,
    ResourceMemberDescriptor,
    ResourceRelationshipDescriptor,
    ResourceToManyRelationshipDescriptor,
    ResourceToOneRelationshipDescriptor,
)

FieldsetMap = typing.Mapping[str, typing.AbstractSet[str]]


class Serializer:
    resource_descr: typing.ClassVar[ResourceDescriptor] = ResourceDescriptor()

    object: typing.Any
    context: typing.Any
    base_url: typing.Optional[str]
    config: Configuration
    fields: FieldsetMap
    include_linkages: typing.AbstractSet[str]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        meta_class = cls.__dict__.get("Meta")
        meta = handle_meta(meta_class) if meta_class is not None else Meta()
        cls.resource_descr = build_descriptor(meta, cls.resource_descr)

    @property
    def id(self) -> typing.Optional[str]:
        value = self.object.id
        if value is None:
            return None
        return str(value)

    @property
    def type(self) -> str:
        return self.format_name(self.type_name())

    def type_name(self) -> str:
        """
        Returns the uncased type: the declared one, or the class name of the object tableized.
        """
        if self.resource_descr.type is not None:
            return self.resource_descr.type
        return tableize(type(self.object).__name__)

    def format_name(self, name: str) -> str:
        return transform_key_casing(name, self.config.key_transform)

    def unformat_name(self, name: str) -> str:
        return underscore(name)

    def self_link(self) -> typing.Optional[str]:
        id = self.id
        if not id:
            return None
        return f"{self.base_url or ''}/{self.type}/{id}"

    def relationship_self_link(self, name: str) -> typing.Optional[str]:
        self_link = self.self_link()
        if self_link is None:
            return None
        return f"{self_link}/relationships/{self.format_name(name)}"

    def relationship_related_link(self, name: str) -> typing.Optional[str]:
        self_link = self.self_link()
        if self_link is None:
            return None
        return f"{self_link}/{self.format_name(name)}"

    def links(self) -> typing.Dict[str, str]:
        links = {}
        self_link = self.self_link()
        if self_link is not None:
            links["self"] = self_link
        return links

    def jsonapi(self) -> typing.Optional[typing.Dict[str, typing.Any]]:
        return None

    def meta(self) -> typing.Optional[typing.Dict[str, typing.Any]]:
        return None

    def _evaluate_predicate(self, predicate: Predicate) -> bool:
        if isinstance(predicate, str):
            return bool(getattr(self, predicate)())
        return bool(predicate(self))

    def is_visible(self, member: ResourceMemberDescriptor) -> bool:
        if member.if_ is not None and not self._evaluate_predicate(member.if_):
            return False
        if member.unless is not None and self._evaluate_predicate(member.unless):
            return False
        return True

    def is_selected(self, name: str) -> bool:
        fieldset = self.fields.get(self.type)
        if fieldset is None:
            return True
        return self.format_name(name) in fieldset

    def attributes(self) -> "OrderedDict[str, typing.Any]":
        """
        Returns the visible and selected attributes keyed by their formatted names.
        """
        return OrderedDict(
            (self.format_name(attr.name), attr.extract_value(self))
            for attr in self.resource_descr.attributes.values()
            if self.is_visible(attr) and self.is_selected(attr.name)
        )

    def has_one_relationships(self) -> "OrderedDict[str, ResourceToOneRelationshipDescriptor]":
        return OrderedDict(
            (rel.name, rel)
            for rel in self.resource_descr.to_one_relationships
            if self.is_visible(rel)
        )

    def has_many_relationships(self) -> "OrderedDict[str, ResourceToManyRelationshipDescriptor]":
        return OrderedDict(
            (rel.name, rel)
            for rel in self.resource_descr.to_many_relationships
            if self.is_visible(rel)
        )

    def _get_relationship(self, rel: typing.Union[str, ResourceRelationshipDescriptor]):
        if isinstance(rel, str):
            return self.resource_descr.relationships[rel]
        return rel

    def has_one_relationship(
        self, rel: typing.Union[str, ResourceToOneRelationshipDescriptor]
    ) -> typing.Any:
        return self._get_relationship(rel).fetch_related(self)

    def has_many_relationship(
        self, rel: typing.Union[str, ResourceToManyRelationshipDescriptor]
    ) -> typing.List[typing.Any]:
        related = self._get_relationship(rel).fetch_related(self)
        if related is None:
            return []
        return list(related)

    @classmethod
    def serialize(cls, objects: typing.Any, **kwargs: typing.Any) -> typing.Dict[str, typing.Any]:
        """
        Serializes ``objects`` as :py:func:`jsonapi_serializers.serialize` does, with this class
        forced as the serializer for the primary data.
        """
        from .document import serialize

        kwargs["serializer"] = cls
        return serialize(objects, **kwargs)

    def __init__(
        self,
        object: typing.Any,
        *,
        context: typing.Any = None,
        base_url: typing.Optional[str] = None,
        fields: typing.Optional[FieldsetMap] = None,
        include_linkages: typing.Iterable[str] = (),
        config: typing.Optional[Configuration] = None,
    ):
        self.object = object
        self.context = context if context is not None else {}
        self.base_url = base_url
        self.fields = fields if fields is not None else {}
        self.include_linkages = frozenset(include_linkages)
        self.config = config if config is not None else get_config()
