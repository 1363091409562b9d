import abc
import typing
from collections import OrderedDict

from .models import (
    AttributeValue,
    CollectionDocumentRepr,
    ErrorDocumentRepr,
    ErrorRepr,
    LinkageData,
    LinkageRepr,
    LinksRepr,
    Missing,
    Repr,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
)
from .types import JSONObject


class ReprBuilder(metaclass=abc.ABCMeta):
    parent: typing.Optional["ReprBuilder"] = None
    meta: typing.Optional[typing.Dict[str, typing.Any]]

    @abc.abstractmethod
    def __call__(self) -> Repr:
        ...  # pragma: nocover

    def __init__(self, parent: typing.Optional["ReprBuilder"] = None):
        self.parent = parent
        self.meta = None


class NodeReprBuilder(ReprBuilder):
    links: typing.Optional[LinksRepr] = None

    def __init__(self, parent: typing.Optional["ReprBuilder"] = None):
        super().__init__(parent)
        self.links = None


class LinkageReprBuilder(NodeReprBuilder, metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def __call__(self) -> LinkageRepr:
        ...  # pragma: nocover


class ResourceIdReprBuilder(NodeReprBuilder):
    type: typing.Optional[str] = None
    id: typing.Optional[str] = None

    def set_type(self, type: str):
        self.type = type

    def set_id(self, id: str):
        self.id = id

    def __call__(self) -> ResourceIdRepr:
        assert self.type is not None
        assert self.id is not None
        return ResourceIdRepr(
            type=self.type,
            id=self.id,
            meta=self.meta,
        )

    def __init__(self, parent: typing.Optional[ReprBuilder] = None):
        super().__init__(parent)


class ToManyRelReprBuilder(LinkageReprBuilder):
    """
    Builds a to-many relationship object. ``data`` stays absent unless
    :py:meth:`next` or :py:meth:`done` is called, in which case it renders
    as a (possibly empty) array.
    """

    data: typing.Optional[typing.List[ResourceIdReprBuilder]]

    def next(self) -> ResourceIdReprBuilder:
        builder = ResourceIdReprBuilder(self)
        if self.data is None:
            self.data = []
        self.data.append(builder)
        return builder

    def done(self) -> None:
        if self.data is None:
            self.data = []

    def __call__(self) -> LinkageRepr:
        data: LinkageData = Missing
        if self.data is not None:
            data = tuple(b() for b in self.data)
        return LinkageRepr(
            data=data,
            links=self.links,
            meta=self.meta,
        )

    def __init__(self, parent: typing.Optional[ReprBuilder] = None):
        super().__init__(parent)
        self.data = None


class ToOneRelReprBuilder(LinkageReprBuilder):
    """
    Builds a to-one relationship object. ``data`` stays absent unless
    :py:meth:`set` or :py:meth:`nullify` is called.
    """

    data: typing.Optional[ResourceIdReprBuilder]
    data_available: bool

    def set(self) -> ResourceIdReprBuilder:
        self.data = builder = ResourceIdReprBuilder(self)
        self.data_available = True
        return builder

    def nullify(self) -> None:
        self.data = None
        self.data_available = True

    def __call__(self) -> LinkageRepr:
        data: LinkageData = Missing
        if self.data_available:
            data = self.data() if self.data is not None else None
        return LinkageRepr(
            data=data,
            links=self.links,
            meta=self.meta,
        )

    def __init__(self, parent: typing.Optional[ReprBuilder] = None):
        super().__init__(parent)
        self.data = None
        self.data_available = False


class ResourceReprBuilder(NodeReprBuilder):
    type: typing.Optional[str] = None
    id: typing.Optional[str] = None
    jsonapi: typing.Optional[typing.Dict[str, typing.Any]] = None
    attributes: "OrderedDict[str, typing.Any]"
    relationships: "OrderedDict[str, LinkageReprBuilder]"

    def set_type(self, type: str):
        self.type = type

    def set_id(self, id: typing.Optional[str]):
        self.id = id

    def add_attribute(self, name: str, value: AttributeValue):
        self.attributes[name] = value

    def next_to_many_relationship(self, name: str) -> ToManyRelReprBuilder:
        rel = self.relationships.get(name)
        if rel is not None:
            if not isinstance(rel, ToManyRelReprBuilder):
                raise TypeError("specified relationship is not a to-many relationship")
        else:
            self.relationships[name] = rel = ToManyRelReprBuilder(self)
        return typing.cast(ToManyRelReprBuilder, rel)

    def next_to_one_relationship(self, name: str) -> ToOneRelReprBuilder:
        rel = self.relationships.get(name)
        if rel is not None:
            if not isinstance(rel, ToOneRelReprBuilder):
                raise TypeError("specified relationship is not a to-one relationship")
        else:
            self.relationships[name] = rel = ToOneRelReprBuilder(self)
        return typing.cast(ToOneRelReprBuilder, rel)

    def __call__(self) -> ResourceRepr:
        assert self.type is not None
        # empty relationship objects are dropped
        relationships = ((k, v()) for k, v in self.relationships.items())
        return ResourceRepr(
            type=self.type,
            id=self.id,
            links=self.links,
            meta=self.meta,
            jsonapi=self.jsonapi,
            attributes=tuple((k, v) for k, v in self.attributes.items()),
            relationships=tuple((k, v) for k, v in relationships if v),
        )

    def __init__(self, parent: typing.Optional[ReprBuilder] = None):
        super().__init__(parent)
        self.attributes = OrderedDict()
        self.relationships = OrderedDict()


class DocumentBuilder(ReprBuilder, metaclass=abc.ABCMeta):
    jsonapi: typing.Optional[JSONObject]
    links: typing.Optional[JSONObject]
    included: typing.Optional[typing.List[ResourceReprBuilder]]

    def next_included(self) -> ResourceReprBuilder:
        b = ResourceReprBuilder(self)
        if self.included is None:
            self.included = []
        self.included.append(b)
        return b

    def enable_included(self) -> None:
        """
        Makes the document render ``included``, even if nothing ends up in it.
        """
        if self.included is None:
            self.included = []

    def _build_included(self) -> typing.Optional[typing.Sequence[ResourceRepr]]:
        if self.included is None:
            return None
        return tuple(r() for r in self.included)

    def __init__(self):
        super().__init__(None)
        self.jsonapi = None
        self.links = None
        self.included = None


class CollectionDocumentBuilder(DocumentBuilder):
    data: typing.List[ResourceReprBuilder]

    def next(self) -> ResourceReprBuilder:
        builder = ResourceReprBuilder(self)
        self.data.append(builder)
        return builder

    def __call__(self) -> CollectionDocumentRepr:
        return CollectionDocumentRepr(
            data=tuple(b() for b in self.data),
            jsonapi=self.jsonapi,
            links=self.links,
            meta=self.meta,
            included=self._build_included(),
        )

    def __init__(self):
        super().__init__()
        self.data = []


class SingletonDocumentBuilder(DocumentBuilder):
    data: typing.Optional[ResourceReprBuilder]

    def set(self) -> ResourceReprBuilder:
        self.data = builder = ResourceReprBuilder(self)
        return builder

    def __call__(self) -> SingletonDocumentRepr:
        return SingletonDocumentRepr(
            data=self.data() if self.data is not None else None,
            jsonapi=self.jsonapi,
            links=self.links,
            meta=self.meta,
            included=self._build_included(),
        )

    def __init__(self):
        super().__init__()
        self.data = None


class ErrorDocumentBuilder(DocumentBuilder):
    errors: typing.List[ErrorRepr]

    def add_error(self, error: ErrorRepr) -> None:
        self.errors.append(error)

    def __call__(self) -> ErrorDocumentRepr:
        return ErrorDocumentRepr(
            errors=tuple(self.errors),
            jsonapi=self.jsonapi,
            links=self.links,
            meta=self.meta,
        )

    def __init__(self):
        super().__init__()
        self.errors = []
