import pytest

from ..declarative import Attr, HasMany, HasOne
from ..exceptions import InvalidDeclarationError
from ..models import (
    Computed,
    FixedAccessor,
    ResourceToManyRelationshipDescriptor,
    ResourceToOneRelationshipDescriptor,
)
from ..serializer import Serializer


class TestHandleMeta:
    @pytest.fixture
    def target(self):
        from ..declarative import handle_meta

        return handle_meta

    def test_basic(self, target):
        class Meta:
            type = "articles"
            attributes = ["title", Attr("body", source="content")]
            relationships = [HasOne("author"), HasMany("comments", include_data=True)]

        result = target(Meta)
        assert result.type == "articles"
        assert [a.name for a in result.attributes] == ["title", "body"]
        assert result.attributes[1].source == "content"
        assert [r.name for r in result.relationships] == ["author", "comments"]

    def test_mapping_attributes(self, target):
        fn = lambda s: 1  # noqa: E731

        class Meta:
            attributes = {"title": "name", "one": fn}

        result = target(Meta)
        assert [(a.name, a.source) for a in result.attributes] == [("title", "name"), ("one", fn)]

    def test_unknown_option(self, target):
        class Meta:
            attribute_mappings = ["title"]

        with pytest.raises(InvalidDeclarationError) as excinfo:
            target(Meta)
        assert "attribute_mappings" in str(excinfo.value)

    @pytest.mark.parametrize("type_", ["", 1])
    def test_invalid_type(self, target, type_):
        class Meta:
            type = type_

        with pytest.raises(InvalidDeclarationError):
            target(Meta)

    def test_invalid_relationship(self, target):
        class Meta:
            relationships = ["author"]

        with pytest.raises(InvalidDeclarationError):
            target(Meta)

    def test_duplicate(self, target):
        class Meta:
            attributes = ["author"]
            relationships = [HasOne("author")]

        with pytest.raises(InvalidDeclarationError):
            target(Meta)


def test_build_value_source():
    from ..declarative import build_value_source
    from ..utils import UNSPECIFIED

    assert build_value_source("a", UNSPECIFIED) == FixedAccessor("a")
    assert build_value_source("a", "b") == FixedAccessor("b")
    fn = lambda s: 1  # noqa: E731
    source = build_value_source("a", fn)
    assert isinstance(source, Computed)
    assert source.fn is fn
    with pytest.raises(InvalidDeclarationError):
        build_value_source("a", 1)


def test_descriptor():
    class FooSerializer(Serializer):
        class Meta:
            type = "foos"
            attributes = ["a", "b"]
            relationships = [HasOne("bar"), HasMany("bazs", include_links=False)]

    descr = FooSerializer.resource_descr
    assert descr.type == "foos"
    assert list(descr.attributes) == ["a", "b"]
    assert [r.name for r in descr.to_one_relationships] == ["bar"]
    assert [r.name for r in descr.to_many_relationships] == ["bazs"]
    assert isinstance(descr.relationships["bar"], ResourceToOneRelationshipDescriptor)
    assert isinstance(descr.relationships["bazs"], ResourceToManyRelationshipDescriptor)
    assert descr.relationships["bar"].include_links
    assert not descr.relationships["bar"].include_data
    assert not descr.relationships["bazs"].include_links


def test_inheritance():
    class BaseSerializer(Serializer):
        class Meta:
            type = "foos"
            attributes = ["a", "b"]
            relationships = [HasOne("bar")]

    class DerivedSerializer(BaseSerializer):
        class Meta:
            attributes = [Attr("b", source="c"), "d"]
            relationships = [HasOne("bar", include_data=True)]

    base = BaseSerializer.resource_descr
    derived = DerivedSerializer.resource_descr
    assert derived.type == "foos"
    assert list(derived.attributes) == ["a", "b", "d"]
    assert derived.attributes["b"].source == FixedAccessor("c")
    assert derived.relationships["bar"].include_data
    assert derived.attributes["a"] is base.attributes["a"]
    assert list(base.attributes) == ["a", "b"]
    assert not base.relationships["bar"].include_data


def test_add_member_twice():
    from ..models import ResourceAttributeDescriptor, ResourceDescriptor

    descr = ResourceDescriptor(attributes=[ResourceAttributeDescriptor("a")])
    with pytest.raises(InvalidDeclarationError):
        descr.add_attribute(ResourceAttributeDescriptor("a"))


def test_value_sources():
    class Foo:
        a = 1

        def b(self):
            return 2

    class FooSerializer(Serializer):
        class Meta:
            attributes = [
                "a",
                "b",
                Attr("c", source=lambda s: s.object.a + s.context["offset"]),
            ]

    serializer = FooSerializer(Foo(), context={"offset": 10})
    assert dict(serializer.attributes()) == {"a": 1, "b": 2, "c": 11}
