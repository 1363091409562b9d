"""
:py:mod:`jsonapi_serializers.serde.renderer` module contains a class in charge of rendering internal representation of JSON:API document to JSON-compatible dictionaries.

Synopsis
--------

.. code-block:: python

   import json

   from jsonapi_serializers.serde.renderer import ReprRenderer

   renderer = ReprRenderer()

   internal_repr = SingletonDocumentRepr(
       data=ResourceRepr(
           type="posts",
           id="1",
           attributes=[
               ("title", "Hello"),
           ],
           relationships=[
               (
                   "comments",
                   LinkageRepr(
                       links=LinksRepr(
                           self_="/posts/1/relationships/comments",
                           related="/posts/1/comments",
                       ),
                       data=[
                           ResourceIdRepr(type="comments", id="1"),
                           ResourceIdRepr(type="comments", id="2"),
                       ],
                   ),
               ),
           ],
       ),
   )

   print(json.dumps(renderer(internal_repr)))

"""

import base64
import collections.abc
import datetime
import decimal
import enum
import typing
from collections import OrderedDict

from .models import (
    AttributeValue,
    CollectionDocumentRepr,
    DocumentRepr,
    DocumentReprBase,
    ErrorDocumentRepr,
    ErrorRepr,
    LinkageRepr,
    LinksRepr,
    Missing,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
    SourceRepr,
)
from .types import JSONDocument, JSONValue, MutableJSONObject
from .utils import JSONPointer


class ReprRendererContext:
    parent: typing.Optional["ReprRendererContext"]
    path: JSONPointer

    def __truediv__(self, component: str) -> "ReprRendererContext":
        return ReprRendererContext(parent=self, path=(self.path / component))

    def __getitem__(self, index: int) -> "ReprRendererContext":
        return ReprRendererContext(parent=self, path=(self.path[index]))

    def __init__(
        self,
        parent: typing.Optional["ReprRendererContext"],
        path: typing.Optional[JSONPointer] = None,
    ):
        self.parent = parent
        self.path = JSONPointer() if path is None else path


class ReprRenderer:
    _render_decimal_as_str: bool = True
    _assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None

    def _dict_factory(self, items: typing.Iterable[typing.Tuple[str, typing.Any]]):
        return OrderedDict(items)

    def _render_datetime(self, ctx: ReprRendererContext, value: AttributeValue) -> JSONValue:
        _value = typing.cast(datetime.datetime, value)
        if _value.tzinfo is None:
            if self._assume_naive_timezone_as is None:
                return _value.isoformat()
            _value = _value.replace(tzinfo=self._assume_naive_timezone_as)
        return _value.astimezone(datetime.timezone.utc).isoformat()

    def _render_date(self, ctx: ReprRendererContext, value: AttributeValue) -> JSONValue:
        return typing.cast(datetime.date, value).isoformat()

    def _render_time(self, ctx: ReprRendererContext, value: AttributeValue) -> JSONValue:
        return typing.cast(datetime.time, value).isoformat()

    def _render_decimal(self, ctx: ReprRendererContext, value: AttributeValue) -> JSONValue:
        _value = typing.cast(decimal.Decimal, value)
        return str(_value) if self._render_decimal_as_str else float(_value)

    def _render_bytes(self, ctx: ReprRendererContext, value: AttributeValue) -> JSONValue:
        return base64.b64encode(typing.cast(bytes, value)).decode("ascii")

    def _render_enum(self, ctx: ReprRendererContext, value: AttributeValue) -> JSONValue:
        return self._render_value(ctx, typing.cast(enum.Enum, value).value)

    def _render_passthrough(self, ctx: ReprRendererContext, value: AttributeValue) -> JSONValue:
        return typing.cast(JSONValue, value)

    # checked in order; datetime must precede its base class date
    _supported_types: typing.ClassVar[typing.Dict[type, typing.Callable]] = {
        bool: _render_passthrough,
        int: _render_passthrough,
        float: _render_passthrough,
        str: _render_passthrough,
        None.__class__: _render_passthrough,
        datetime.datetime: _render_datetime,
        datetime.date: _render_date,
        datetime.time: _render_time,
        decimal.Decimal: _render_decimal,
        bytes: _render_bytes,
        enum.Enum: _render_enum,
    }

    def _render_value(self, ctx: ReprRendererContext, value: AttributeValue) -> JSONValue:
        # fast pass
        r = self._supported_types.get(type(value))
        if r is not None:
            return r(self, ctx, value)

        for type_, r in self._supported_types.items():
            if isinstance(value, type_):
                return r(self, ctx, value)

        if isinstance(value, collections.abc.Mapping):
            return self._dict_factory(
                (str(k), self._render_value(ctx / str(k), v)) for k, v in value.items()
            )
        if isinstance(value, (collections.abc.Sequence, collections.abc.Set)):
            return [self._render_value(ctx[i], v) for i, v in enumerate(value)]

        return typing.cast(JSONValue, value)

    def _render_relationship(
        self, ctx: ReprRendererContext, repr_: LinkageRepr
    ) -> MutableJSONObject:
        retval: MutableJSONObject = {}
        if repr_.links:
            retval["links"] = self._render_links(ctx / "links", typing.cast(LinksRepr, repr_.links))
        if repr_.data is None:
            retval["data"] = None
        elif isinstance(repr_.data, ResourceIdRepr):
            retval["data"] = self._render_resource_link(ctx / "data", repr_.data)
        elif repr_.data is not Missing:
            retval["data"] = [
                self._render_resource_link((ctx / "data")[i], item)
                for i, item in enumerate(typing.cast(typing.Sequence[ResourceIdRepr], repr_.data))
            ]
        if repr_.meta:
            retval["meta"] = repr_.meta
        return retval

    def _render_resource_link(
        self, ctx: ReprRendererContext, repr_: ResourceIdRepr
    ) -> MutableJSONObject:
        retval: MutableJSONObject = {
            "id": repr_.id,
            "type": repr_.type,
        }
        if repr_.meta:
            retval["meta"] = repr_.meta
        return retval

    def _render_resource(self, ctx: ReprRendererContext, repr_: ResourceRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {}
        if repr_.id is not None:
            retval["id"] = repr_.id
        retval["type"] = repr_.type
        if repr_.attributes:
            new_ctx = ctx / "attributes"
            retval["attributes"] = self._dict_factory(
                (k, self._render_value(new_ctx / k, v)) for k, v in repr_.attributes.items()
            )
        if repr_.links:
            retval["links"] = self._render_links(ctx / "links", typing.cast(LinksRepr, repr_.links))
        if repr_.relationships:
            new_ctx = ctx / "relationships"
            retval["relationships"] = self._dict_factory(
                (k, self._render_relationship(new_ctx / k, v))
                for k, v in repr_.relationships.items()
            )
        if repr_.jsonapi is not None:
            retval["jsonapi"] = repr_.jsonapi
        if repr_.meta is not None:
            retval["meta"] = repr_.meta
        return retval

    def _render_links(self, ctx: ReprRendererContext, repr_: LinksRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {}
        if repr_.self_ is not None:
            retval["self"] = repr_.self_
        if repr_.related is not None:
            retval["related"] = repr_.related
        return retval

    def _render_source(self, ctx: ReprRendererContext, repr_: SourceRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {}
        if repr_.pointer is not None:
            retval["pointer"] = repr_.pointer
        if repr_.parameter is not None:
            retval["parameter"] = repr_.parameter
        return retval

    def _render_error(self, ctx: ReprRendererContext, repr_: ErrorRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {}
        if repr_.source is not None:
            retval["source"] = self._render_source(ctx / "source", repr_.source)
        if repr_.detail is not None:
            retval["detail"] = repr_.detail
        if repr_.meta:
            retval["meta"] = repr_.meta
        return retval

    def _populate_document_common(
        self, target: MutableJSONObject, ctx: ReprRendererContext, repr_: DocumentReprBase
    ) -> None:
        if repr_.included is not None:
            new_ctx = ctx / "included"
            target["included"] = [
                self._render_resource(new_ctx[i], r) for i, r in enumerate(repr_.included)
            ]
        if repr_.jsonapi:
            target["jsonapi"] = repr_.jsonapi
        if repr_.meta:
            target["meta"] = repr_.meta
        if repr_.links:
            target["links"] = repr_.links

    def _render_singleton_document(
        self, ctx: ReprRendererContext, repr_: SingletonDocumentRepr
    ) -> JSONDocument:
        retval: JSONDocument = {}
        retval["data"] = (
            self._render_resource(ctx / "data", repr_.data)
            if repr_.data is not None
            else None
        )
        self._populate_document_common(retval, ctx, repr_)
        return retval

    def _render_collection_document(
        self, ctx: ReprRendererContext, repr_: CollectionDocumentRepr
    ) -> JSONDocument:
        retval: JSONDocument = {}
        retval["data"] = [
            self._render_resource((ctx / "data")[i], item)
            for i, item in enumerate(repr_.data)
        ]
        self._populate_document_common(retval, ctx, repr_)
        return retval

    def _render_error_document(
        self, ctx: ReprRendererContext, repr_: ErrorDocumentRepr
    ) -> JSONDocument:
        retval: JSONDocument = {}
        new_ctx = ctx / "errors"
        retval["errors"] = [self._render_error(new_ctx[i], e) for i, e in enumerate(repr_.errors)]
        self._populate_document_common(retval, ctx, repr_)
        return retval

    def __call__(self, repr_: DocumentRepr) -> JSONDocument:
        ctx = ReprRendererContext(None)
        if isinstance(repr_, SingletonDocumentRepr):
            return self._render_singleton_document(ctx, repr_)
        elif isinstance(repr_, CollectionDocumentRepr):
            return self._render_collection_document(ctx, repr_)
        elif isinstance(repr_, ErrorDocumentRepr):
            return self._render_error_document(ctx, repr_)
        else:
            raise AssertionError("never get here")

    def __init__(
        self,
        render_decimal_as_str: bool = True,
        assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None,
    ):
        self._render_decimal_as_str = render_decimal_as_str
        self._assume_naive_timezone_as = assume_naive_timezone_as
