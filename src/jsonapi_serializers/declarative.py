import collections.abc
import dataclasses
import typing
from collections import OrderedDict

from .exceptions import InvalidDeclarationError
from .models import (
    Computed,
    FixedAccessor,
    Predicate,
    ResourceAttributeDescriptor,
    ResourceDescriptor,
    ResourceMemberDescriptor,
    ResourceRelationshipDescriptor,
    ResourceToManyRelationshipDescriptor,
    ResourceToOneRelationshipDescriptor,
    ValueSource,
)
from .utils import UNSPECIFIED, UnspecifiedType

if typing.TYPE_CHECKING:
    from .serializer import Serializer  # noqa: F401


SourceSpec = typing.Union[UnspecifiedType, str, ValueSource, typing.Callable[["Serializer"], typing.Any]]


def build_value_source(name: str, source: SourceSpec) -> ValueSource:
    if source is UNSPECIFIED:
        return FixedAccessor(name)
    elif isinstance(source, ValueSource):
        return source
    elif isinstance(source, str):
        return FixedAccessor(source)
    elif callable(source):
        return Computed(source)
    else:
        raise InvalidDeclarationError(f"invalid source for {name}: {source!r}")


@dataclasses.dataclass
class Attr:
    name: str
    source: SourceSpec = UNSPECIFIED
    if_: typing.Optional[Predicate] = None
    unless: typing.Optional[Predicate] = None

    def build(self) -> ResourceAttributeDescriptor:
        return ResourceAttributeDescriptor(
            name=self.name,
            source=build_value_source(self.name, self.source),
            if_=self.if_,
            unless=self.unless,
        )


@dataclasses.dataclass
class Rel:
    name: str
    source: SourceSpec = UNSPECIFIED
    include_links: bool = True
    include_data: bool = False
    serializer: typing.Union[None, str, typing.Type["Serializer"]] = None
    if_: typing.Optional[Predicate] = None
    unless: typing.Optional[Predicate] = None

    descriptor_class: typing.ClassVar[typing.Type[ResourceRelationshipDescriptor]]

    def build(self) -> ResourceRelationshipDescriptor:
        return self.descriptor_class(
            name=self.name,
            source=build_value_source(self.name, self.source),
            include_links=self.include_links,
            include_data=self.include_data,
            serializer=self.serializer,
            if_=self.if_,
            unless=self.unless,
        )


@dataclasses.dataclass
class HasOne(Rel):
    descriptor_class = ResourceToOneRelationshipDescriptor


@dataclasses.dataclass
class HasMany(Rel):
    descriptor_class = ResourceToManyRelationshipDescriptor


AttributesType = typing.Union[
    typing.Sequence[typing.Union[str, Attr]],
    typing.Mapping[str, SourceSpec],
]
RelationshipsType = typing.Sequence[Rel]


@dataclasses.dataclass
class Meta:
    type: typing.Optional[str] = None
    attributes: typing.Sequence[Attr] = ()
    relationships: typing.Sequence[Rel] = ()


def _normalize_attributes(attributes: AttributesType) -> typing.List[Attr]:
    result: typing.List[Attr] = []
    if isinstance(attributes, collections.abc.Mapping):
        for name, source in attributes.items():
            if isinstance(source, Attr):
                result.append(dataclasses.replace(source, name=name))
            else:
                result.append(Attr(name, source))
        return result
    if isinstance(attributes, (str, bytes)) or not isinstance(attributes, collections.abc.Iterable):
        raise InvalidDeclarationError(f"attributes must be a sequence, got {attributes!r}")
    for attr in attributes:
        if isinstance(attr, str):
            result.append(Attr(attr))
        elif isinstance(attr, Attr):
            result.append(attr)
        else:
            raise InvalidDeclarationError(f"unknown attribute declaration: {attr!r}")
    return result


def _normalize_relationships(relationships: RelationshipsType) -> typing.List[Rel]:
    if isinstance(relationships, (str, bytes)) or not isinstance(
        relationships, collections.abc.Iterable
    ):
        raise InvalidDeclarationError(f"relationships must be a sequence, got {relationships!r}")
    result: typing.List[Rel] = []
    for rel in relationships:
        if not isinstance(rel, (HasOne, HasMany)):
            raise InvalidDeclarationError(
                f"relationship declaration must be either HasOne or HasMany, got {rel!r}"
            )
        result.append(rel)
    return result


def handle_meta(meta: typing.Type) -> Meta:
    attrs = {k: v for k, v in vars(meta).items() if not k.startswith("__")}
    unknown = set(attrs) - {f.name for f in dataclasses.fields(Meta)}
    if unknown:
        raise InvalidDeclarationError(f"unknown Meta option(s): {', '.join(sorted(unknown))}")
    type_ = attrs.get("type")
    if type_ is not None and (not isinstance(type_, str) or not type_):
        raise InvalidDeclarationError(f"type must be a non-empty string, got {type_!r}")
    meta_ = Meta(
        type=type_,
        attributes=_normalize_attributes(attrs.get("attributes", ())),
        relationships=_normalize_relationships(attrs.get("relationships", ())),
    )
    seen: typing.Set[str] = set()
    for decl in (*meta_.attributes, *meta_.relationships):
        if decl.name in seen:
            raise InvalidDeclarationError(f"member {decl.name} is declared more than once")
        seen.add(decl.name)
    return meta_


def build_descriptor(
    meta: Meta, base: typing.Optional[ResourceDescriptor] = None
) -> ResourceDescriptor:
    """
    Builds a :py:class:`ResourceDescriptor` from ``meta``, on top of the members of ``base``.
    Members redeclared in ``meta`` replace the inherited ones of the same name.
    """
    members: "OrderedDict[str, ResourceMemberDescriptor]" = OrderedDict()
    type_: typing.Optional[str] = None
    if base is not None:
        type_ = base.type
        members.update(base.attributes)
        members.update(base.relationships)
    for decl in (*meta.attributes, *meta.relationships):
        members[decl.name] = decl.build()
    return ResourceDescriptor(
        type=meta.type if meta.type is not None else type_,
        attributes=[m for m in members.values() if isinstance(m, ResourceAttributeDescriptor)],
        relationships=[
            m for m in members.values() if isinstance(m, ResourceRelationshipDescriptor)
        ],
    )
