"""
Classes in :py:mod:`jsonapi_serializers.serde.models` are abstract representation of JSON:API document elements.
"""

import dataclasses
import typing
from collections import OrderedDict

from .types import JSONObject
from .utils import JSONPointer

Source = typing.Union[JSONPointer, str]

AttributeValue = typing.Any


class MissingType:
    """
    The type of :py:data:`Missing`, which marks a member that must not be
    rendered at all, as opposed to one rendered as ``null``.
    """

    def __bool__(self):
        return False

    def __repr__(self):
        return "Missing"

    def __init__(self):
        raise TypeError("Not directly instantiable")


Missing = object.__new__(MissingType)


@dataclasses.dataclass
class Repr:
    """
    The base class for any model objects.
    """

    _source_: typing.Optional[Source] = None


@dataclasses.dataclass
class LinksRepr(Repr):
    """
    :py:class:`LinksRepr` class represents a ``links`` node of a resource or relationship object.

    Ref.

    * `Resource Links <https://jsonapi.org/format/#document-resource-object-links>`_
    * `Relationship Links <https://jsonapi.org/format/#document-resource-object-relationships>`_
    """

    self_: typing.Optional[str] = None
    related: typing.Optional[str] = None

    def __bool__(self):
        return self.self_ is not None or self.related is not None


@dataclasses.dataclass(init=False)
class MetaContainerRepr(Repr):
    """
    :py:class:`MetaContainerRepr` is an abstract base for classes containing ``meta`` node.
    """

    meta: typing.Optional[typing.Dict[str, typing.Any]] = None

    def __init__(
        self,
        *,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        """
        :param Optional[Dict[str. Any]] meta: a dictionary containing user-defined information.
        :param Union[JSONPointer, str, None] _source_: an object that describes the source of the node.
        """
        super().__init__(_source_=_source_)
        self.meta = meta


@dataclasses.dataclass(init=False)
class NodeRepr(MetaContainerRepr):
    """
    :py:class:`NodeRepr` is an abstract base for classes containing ``links`` node.
    """

    links: typing.Optional[LinksRepr] = None

    def __init__(
        self,
        *,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(meta=meta, _source_=_source_)
        self.links = links


@dataclasses.dataclass(init=False)
class ResourceIdRepr(MetaContainerRepr):
    """
    Instances of :py:class:`ResourceIdRepr` represent `Resource Identifier Objects <https://jsonapi.org/format/#document-resource-identifier-objects>`_
    """

    type: str  # type: ignore
    id: str  # type: ignore

    def __init__(
        self,
        *,
        type: str,
        id: str,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        """
        :param str type: a value for ``type`` property.
        :param str id: a value for ``id`` property.
        :param Optional[Dict[str. Any]] meta: a dictionary containing user-defined information.
        :param Union[JSONPointer, str, None] _source_: an object that describes the source of the node.
        """
        super().__init__(meta=meta, _source_=_source_)
        self.type = type
        self.id = id


LinkageData = typing.Union[MissingType, None, ResourceIdRepr, typing.Sequence[ResourceIdRepr]]


@dataclasses.dataclass(init=False)
class LinkageRepr(NodeRepr):
    """
    :py:class:`LinkageRepr` represents a `Relationship Object <https://jsonapi.org/format/#document-resource-object-relationships>`_.
    Its ``data`` is :py:data:`Missing` when no `Resource Linkage <https://jsonapi.org/format/#document-resource-object-linkage>`_
    is to be rendered, and :py:const:`None` for an empty to-one relationship.
    """

    data: LinkageData = Missing

    def __bool__(self):
        return self.data is not Missing or bool(self.links) or bool(self.meta)

    def __init__(
        self,
        *,
        data: LinkageData = Missing,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        """
        :param Union[Missing, None, ResourceIdRepr, Sequence[ResourceIdRepr]] data: a value for ``data`` property.
        :param Optional[LinksRepr] links: a value for ``links`` property.
        :param Optional[Dict[str. Any]] meta: a dictionary containing user-defined information.
        :param Union[JSONPointer, str, None] _source_: an object that describes the source of the node.
        """
        super().__init__(links=links, meta=meta, _source_=_source_)
        self.data = data


@dataclasses.dataclass(init=False)
class ResourceRepr(NodeRepr):
    """
    :py:class:`ResourceRepr` class represents a `Resource Object <https://jsonapi.org/format/#document-resource-objects>`_.
    """

    type: str  # type: ignore
    id: typing.Optional[str]  # type: ignore
    attributes: typing.Mapping[str, AttributeValue] = dataclasses.field(default_factory=OrderedDict)  # type: ignore
    relationships: typing.Mapping[str, LinkageRepr] = dataclasses.field(default_factory=OrderedDict)  # type: ignore
    jsonapi: typing.Optional[typing.Dict[str, typing.Any]] = None

    def __init__(
        self,
        *,
        type: str,
        id: typing.Optional[str],
        attributes: typing.Iterable[typing.Tuple[str, AttributeValue]] = (),
        relationships: typing.Iterable[typing.Tuple[str, LinkageRepr]] = (),
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        jsonapi: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        """
        :param str type: a value for ``type`` property.
        :param Optional[str] id: an optional value for ``id`` property; absent for resources not persisted yet.
        :param Iterable[Tuple[str, AttributeValue]] attributes: a sequence of tuples each of which represents a key-value pair of an attribute.
        :param Iterable[Tuple[str, LinkageRepr]] relationships: a sequence of tuples each of which represent a key-value pair of a relationship.
        :param Optional[LinksRepr] links: a value for ``links`` property.
        :param Optional[Dict[str, Any]] meta: a dictionary containing user-defined information.
        :param Optional[Dict[str, Any]] jsonapi: a value for the resource-level ``jsonapi`` property.
        :param Union[JSONPointer, str, None] _source_: an object that describes the source of the node.
        """
        super().__init__(links=links, meta=meta, _source_=_source_)
        self.type = type
        self.id = id
        self.attributes = OrderedDict(attributes)
        self.relationships = OrderedDict(relationships)
        self.jsonapi = jsonapi


@dataclasses.dataclass(init=False)
class SourceRepr(Repr):
    """
    :py:class:`SourceRepr` represents a value for the ``source`` property of an `Error Object <https://jsonapi.org/format/#error-objects>`_.
    """

    pointer: typing.Optional[str] = None
    parameter: typing.Optional[str] = None

    def __init__(
        self,
        pointer: typing.Optional[str] = None,
        parameter: typing.Optional[str] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(_source_=_source_)
        self.pointer = pointer
        self.parameter = parameter


@dataclasses.dataclass(init=False)
class ErrorRepr(MetaContainerRepr):
    """
    :py:class:`ErrorRepr` represents an `Error Object <https://jsonapi.org/format/#error-objects>`_ pointing at the offending member.
    """

    detail: typing.Optional[str] = None
    source: typing.Optional[SourceRepr] = None

    def __init__(
        self,
        *,
        detail: typing.Optional[str] = None,
        source: typing.Optional[SourceRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(meta=meta, _source_=_source_)
        self.detail = detail
        self.source = source


@dataclasses.dataclass(init=False)
class DocumentReprBase(MetaContainerRepr):
    """
    The top-level members every document may carry. ``links`` and ``jsonapi``
    are caller-supplied and rendered as they are.
    ``included`` is :py:const:`None` when no inclusion was requested.
    """

    jsonapi: typing.Optional[JSONObject] = None
    links: typing.Optional[JSONObject] = None
    included: typing.Optional[typing.Sequence[ResourceRepr]] = None

    def __init__(
        self,
        *,
        jsonapi: typing.Optional[JSONObject] = None,
        links: typing.Optional[JSONObject] = None,
        included: typing.Optional[typing.Sequence[ResourceRepr]] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(meta=meta, _source_=_source_)
        self.jsonapi = jsonapi
        self.links = links
        self.included = included


@dataclasses.dataclass(init=False)
class SingletonDocumentRepr(DocumentReprBase):
    data: typing.Optional[ResourceRepr] = None

    def __init__(
        self,
        *,
        data: typing.Optional[ResourceRepr] = None,
        jsonapi: typing.Optional[JSONObject] = None,
        links: typing.Optional[JSONObject] = None,
        included: typing.Optional[typing.Sequence[ResourceRepr]] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        """
        :param Optional[ResourceRepr] data: the primary resource, or :py:const:`None` to render ``"data": null``.
        """
        super().__init__(
            jsonapi=jsonapi, links=links, included=included, meta=meta, _source_=_source_
        )
        self.data = data


@dataclasses.dataclass(init=False)
class CollectionDocumentRepr(DocumentReprBase):
    data: typing.Sequence[ResourceRepr] = ()

    def __init__(
        self,
        *,
        data: typing.Sequence[ResourceRepr] = (),
        jsonapi: typing.Optional[JSONObject] = None,
        links: typing.Optional[JSONObject] = None,
        included: typing.Optional[typing.Sequence[ResourceRepr]] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        """
        :param Sequence[ResourceRepr] data: the primary resources; may be empty.
        """
        super().__init__(
            jsonapi=jsonapi, links=links, included=included, meta=meta, _source_=_source_
        )
        self.data = data


@dataclasses.dataclass(init=False)
class ErrorDocumentRepr(DocumentReprBase):
    errors: typing.Sequence[ErrorRepr] = ()

    def __init__(
        self,
        *,
        errors: typing.Sequence[ErrorRepr],
        jsonapi: typing.Optional[JSONObject] = None,
        links: typing.Optional[JSONObject] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(jsonapi=jsonapi, links=links, meta=meta, _source_=_source_)
        self.errors = errors


DocumentRepr = typing.Union[SingletonDocumentRepr, CollectionDocumentRepr, ErrorDocumentRepr]
