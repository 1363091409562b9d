import datetime
import decimal
import enum
import uuid

import pytest


@pytest.fixture
def target_class():
    from ..renderer import ReprRenderer

    return ReprRenderer


def test_singleton(target_class):
    from ..models import (
        LinkageRepr,
        LinksRepr,
        ResourceIdRepr,
        ResourceRepr,
        SingletonDocumentRepr,
    )

    target = target_class()

    result = target(
        SingletonDocumentRepr(
            links={"self": "/foos/1"},
            data=ResourceRepr(
                type="foos",
                id="1",
                attributes=[
                    ("a", 1),
                    ("b", 2),
                ],
                links=LinksRepr(self_="/foos/1"),
                relationships=[
                    (
                        "item",
                        LinkageRepr(
                            links=LinksRepr(
                                self_="/foos/1/relationships/item",
                                related="/foos/1/item",
                            ),
                            data=ResourceIdRepr(type="bars", id="1"),
                        ),
                    ),
                    (
                        "items",
                        LinkageRepr(
                            data=[
                                ResourceIdRepr(type="bars", id="1"),
                                ResourceIdRepr(type="bars", id="2"),
                            ],
                        ),
                    ),
                    (
                        "none",
                        LinkageRepr(data=None),
                    ),
                    (
                        "links-only",
                        LinkageRepr(links=LinksRepr(related="/foos/1/links-only")),
                    ),
                ],
                meta={"x": 1},
            ),
            meta={"count": 1},
            jsonapi={"version": "1.0"},
        )
    )
    assert result == {
        "data": {
            "id": "1",
            "type": "foos",
            "attributes": {"a": 1, "b": 2},
            "links": {"self": "/foos/1"},
            "relationships": {
                "item": {
                    "links": {
                        "self": "/foos/1/relationships/item",
                        "related": "/foos/1/item",
                    },
                    "data": {"id": "1", "type": "bars"},
                },
                "items": {
                    "data": [
                        {"id": "1", "type": "bars"},
                        {"id": "2", "type": "bars"},
                    ],
                },
                "none": {"data": None},
                "links-only": {"links": {"related": "/foos/1/links-only"}},
            },
            "meta": {"x": 1},
        },
        "links": {"self": "/foos/1"},
        "meta": {"count": 1},
        "jsonapi": {"version": "1.0"},
    }


def test_singleton_null(target_class):
    from ..models import SingletonDocumentRepr

    assert target_class()(SingletonDocumentRepr(data=None)) == {"data": None}


def test_resource_without_id(target_class):
    from ..models import ResourceRepr, SingletonDocumentRepr

    result = target_class()(SingletonDocumentRepr(data=ResourceRepr(type="foos", id=None)))
    assert result == {"data": {"type": "foos"}}


def test_collection(target_class):
    from ..models import CollectionDocumentRepr, ResourceRepr

    target = target_class()

    assert target(CollectionDocumentRepr(data=())) == {"data": []}

    result = target(
        CollectionDocumentRepr(
            data=[
                ResourceRepr(type="foos", id="1", attributes=[("a", "x")]),
                ResourceRepr(type="foos", id="2", attributes=[("a", "y")]),
            ],
            included=[
                ResourceRepr(type="bars", id="1"),
            ],
        )
    )
    assert result == {
        "data": [
            {"id": "1", "type": "foos", "attributes": {"a": "x"}},
            {"id": "2", "type": "foos", "attributes": {"a": "y"}},
        ],
        "included": [
            {"id": "1", "type": "bars"},
        ],
    }


def test_empty_included_is_rendered(target_class):
    from ..models import SingletonDocumentRepr

    result = target_class()(SingletonDocumentRepr(data=None, included=()))
    assert result == {"data": None, "included": []}


def test_errors(target_class):
    from ..models import ErrorDocumentRepr, ErrorRepr, SourceRepr

    result = target_class()(
        ErrorDocumentRepr(
            errors=[
                ErrorRepr(
                    source=SourceRepr(pointer="/data/attributes/title"),
                    detail="can't be blank",
                ),
            ]
        )
    )
    assert result == {
        "errors": [
            {
                "source": {"pointer": "/data/attributes/title"},
                "detail": "can't be blank",
            },
        ],
    }


class Color(enum.Enum):
    RED = "red"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (
            datetime.datetime(2020, 1, 2, 3, 4, 5, tzinfo=datetime.timezone.utc),
            "2020-01-02T03:04:05+00:00",
        ),
        (datetime.date(2020, 1, 2), "2020-01-02"),
        (decimal.Decimal("1.50"), "1.50"),
        (b"\x00\x01", "AAE="),
        (Color.RED, "red"),
        ([1, datetime.date(2020, 1, 2)], [1, "2020-01-02"]),
        ({"a": {"b": decimal.Decimal("2")}}, {"a": {"b": "2"}}),
        (None, None),
    ],
)
def test_attribute_values(target_class, value, expected):
    from ..models import ResourceRepr, SingletonDocumentRepr

    result = target_class()(
        SingletonDocumentRepr(data=ResourceRepr(type="foos", id="1", attributes=[("v", value)]))
    )
    assert result["data"]["attributes"]["v"] == expected


def test_decimal_as_float(target_class):
    from ..models import ResourceRepr, SingletonDocumentRepr

    result = target_class(render_decimal_as_str=False)(
        SingletonDocumentRepr(
            data=ResourceRepr(type="foos", id="1", attributes=[("v", decimal.Decimal("1.5"))])
        )
    )
    assert result["data"]["attributes"]["v"] == 1.5


def test_naive_datetime(target_class):
    from ..models import ResourceRepr, SingletonDocumentRepr

    doc = SingletonDocumentRepr(
        data=ResourceRepr(
            type="foos",
            id="1",
            attributes=[("v", datetime.datetime(2020, 1, 2, 3, 4, 5))],
        )
    )

    result = target_class()(doc)
    assert result["data"]["attributes"]["v"] == "2020-01-02T03:04:05"

    result = target_class(assume_naive_timezone_as=datetime.timezone.utc)(doc)
    assert result["data"]["attributes"]["v"] == "2020-01-02T03:04:05+00:00"


@pytest.mark.parametrize("value", [uuid.UUID(int=1), object()])
def test_opaque_value(target_class, value):
    from ..models import ResourceRepr, SingletonDocumentRepr

    result = target_class()(
        SingletonDocumentRepr(data=ResourceRepr(type="foos", id="1", attributes=[("v", value)]))
    )
    assert result["data"]["attributes"]["v"] is value
