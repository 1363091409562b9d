import abc
import inspect
import typing
from collections import OrderedDict

from .exceptions import InvalidDeclarationError
from .serde.interfaces import RelationshipType
from .serde.models import AttributeValue
from .utils import assert_not_none

if typing.TYPE_CHECKING:
    from .serializer import Serializer  # noqa: F401


class ValueSource(metaclass=abc.ABCMeta):
    """
    Tells how the value of an attribute or a relationship is obtained for a serializer.
    """

    @abc.abstractmethod
    def __call__(self, serializer: "Serializer") -> typing.Any:
        ...  # pragma: nocover


class FixedAccessor(ValueSource):
    """
    Reads the named attribute of the serialized object, calling it if it is a method.
    """

    name: str

    def __call__(self, serializer: "Serializer") -> typing.Any:
        value = getattr(serializer.object, self.name)
        if inspect.ismethod(value):
            value = value()
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def __eq__(self, other: typing.Any) -> bool:
        return isinstance(other, FixedAccessor) and other.name == self.name

    def __hash__(self) -> int:
        return hash((FixedAccessor, self.name))

    def __init__(self, name: str):
        self.name = name


class Computed(ValueSource):
    """
    Calls ``fn`` with the serializer, which gives access to ``object``, ``context`` and ``base_url``.
    """

    fn: typing.Callable[["Serializer"], typing.Any]

    def __call__(self, serializer: "Serializer") -> typing.Any:
        return self.fn(serializer)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.fn!r})"

    def __init__(self, fn: typing.Callable[["Serializer"], typing.Any]):
        self.fn = fn


Predicate = typing.Union[str, typing.Callable[["Serializer"], bool]]


class ResourceMemberDescriptor:
    name: str
    source: ValueSource
    if_: typing.Optional[Predicate]
    unless: typing.Optional[Predicate]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, source={self.source!r})"

    def __init__(
        self,
        name: str,
        source: typing.Optional[ValueSource] = None,
        if_: typing.Optional[Predicate] = None,
        unless: typing.Optional[Predicate] = None,
    ):
        self.name = name
        self.source = source if source is not None else FixedAccessor(name)
        self.if_ = if_
        self.unless = unless


class ResourceAttributeDescriptor(ResourceMemberDescriptor):
    def extract_value(self, serializer: "Serializer") -> AttributeValue:
        return self.source(serializer)


class ResourceRelationshipDescriptor(ResourceMemberDescriptor):
    type: RelationshipType
    include_links: bool
    include_data: bool
    serializer: typing.Union[None, str, typing.Type["Serializer"]]
    """
    Overrides the serializer used for the related objects; either a class or a registered name.
    """

    def fetch_related(self, serializer: "Serializer") -> typing.Any:
        return self.source(serializer)

    def __init__(
        self,
        name: str,
        source: typing.Optional[ValueSource] = None,
        include_links: bool = True,
        include_data: bool = False,
        serializer: typing.Union[None, str, typing.Type["Serializer"]] = None,
        if_: typing.Optional[Predicate] = None,
        unless: typing.Optional[Predicate] = None,
    ):
        super().__init__(name, source, if_, unless)
        self.include_links = include_links
        self.include_data = include_data
        self.serializer = serializer


class ResourceToOneRelationshipDescriptor(ResourceRelationshipDescriptor):
    type = RelationshipType.TO_ONE
    """
    Always set to :py:class:`RelationshipType`.``TO_ONE``
    """


class ResourceToManyRelationshipDescriptor(ResourceRelationshipDescriptor):
    type = RelationshipType.TO_MANY
    """
    Always set to :py:class:`RelationshipType`.``TO_MANY``
    """


class ResourceDescriptor:
    """
    A :py:class:`ResourceDescriptor` holds the declared members of a serializer class.

    :param Optional[str] type: The fixed, uncased type name of the resource, if any.
    :param Iterable[ResourceAttributeDescriptor] attributes: The descriptors for the attributes the resource holds.
    :param Iterable[ResourceRelationshipDescriptor] relationships: The descriptors for the relationships the resource has.
    """

    type: typing.Optional[str]
    """
    The fixed type name, or :py:const:`None` to derive it from the class of the serialized object.
    """
    _attributes: typing.MutableMapping[str, ResourceAttributeDescriptor]
    _relationships: typing.MutableMapping[str, ResourceRelationshipDescriptor]

    @property
    def attributes(self) -> typing.Mapping[str, ResourceAttributeDescriptor]:
        """
        The mapping of attribute names to :py:class:`ResourceAttributeDescriptor`s.
        """
        return self._attributes

    @property
    def relationships(self) -> typing.Mapping[str, ResourceRelationshipDescriptor]:
        """
        The mapping of relationship names to :py:class:`ResourceRelationshipDescriptor`s.
        """
        return self._relationships

    @property
    def to_one_relationships(self) -> typing.Iterator[ResourceToOneRelationshipDescriptor]:
        for rel in self._relationships.values():
            if isinstance(rel, ResourceToOneRelationshipDescriptor):
                yield rel

    @property
    def to_many_relationships(self) -> typing.Iterator[ResourceToManyRelationshipDescriptor]:
        for rel in self._relationships.values():
            if isinstance(rel, ResourceToManyRelationshipDescriptor):
                yield rel

    def add_attribute(self, attr: ResourceAttributeDescriptor) -> None:
        """
        Add an attribute to the resource descriptor.

        :param ResourceAttributeDescriptor attr: the attribute to add.
        :raises InvalidDeclarationError: if a member with the same name already exists.
        """
        name = assert_not_none(attr.name)
        if name in self._attributes or name in self._relationships:
            raise InvalidDeclarationError(f"member {name} is declared more than once")
        self._attributes[name] = attr

    def add_relationship(self, rel: ResourceRelationshipDescriptor) -> None:
        """
        Add a relationship to the resource descriptor.

        :param ResourceRelationshipDescriptor rel: the relationship to add.
        :raises InvalidDeclarationError: if a member with the same name already exists.
        """
        name = assert_not_none(rel.name)
        if name in self._attributes or name in self._relationships:
            raise InvalidDeclarationError(f"member {name} is declared more than once")
        self._relationships[name] = rel

    def __init__(
        self,
        type: typing.Optional[str] = None,
        attributes: typing.Iterable[ResourceAttributeDescriptor] = (),
        relationships: typing.Iterable[ResourceRelationshipDescriptor] = (),
    ) -> None:
        self.type = type
        self._attributes = OrderedDict()
        self._relationships = OrderedDict()
        for attr in attributes:
            self.add_attribute(attr)
        for rel in relationships:
            self.add_relationship(rel)
