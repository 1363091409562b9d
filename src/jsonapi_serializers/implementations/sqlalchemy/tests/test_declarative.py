import pytest
import sqlalchemy as sa  # type: ignore
from sqlalchemy import orm  # type: ignore

from ....declarative import Attr, HasOne
from ....serde.interfaces import RelationshipType
from ....models import ResourceToManyRelationshipDescriptor, ResourceToOneRelationshipDescriptor


@pytest.fixture
def models():
    from ..declarative import declarative_with_defaults

    decl = declarative_with_defaults()
    Base = orm.declarative_base()

    @decl
    class User(Base):
        __tablename__ = "users"
        id = sa.Column(sa.Integer(), primary_key=True, nullable=False)
        name = sa.Column(sa.String(), nullable=False)
        long_comments = orm.relationship("LongComment", back_populates="user")

    @decl
    class LongComment(Base):
        __tablename__ = "long_comments"

        class Meta:
            attributes = ["id", Attr("fancy_body", source="body")]
            relationships = [HasOne("user", include_links=False, include_data=True)]

        id = sa.Column(sa.Integer(), primary_key=True, nullable=False)
        body = sa.Column(sa.String(), nullable=False)
        user_id = sa.Column(sa.Integer(), sa.ForeignKey("users.id"), nullable=True)
        user = orm.relationship("User", back_populates="long_comments")

    @decl
    class Tag(Base):
        __tablename__ = "tags"
        namespace = sa.Column(sa.String(), primary_key=True)
        name = sa.Column(sa.String(), primary_key=True)
        label = sa.Column(sa.String(), nullable=True)

    decl.configure()

    engine = sa.create_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = orm.Session(bind=engine)
    try:
        yield decl, session, User, LongComment, Tag
    finally:
        session.close()


def test_derived_descriptor(models):
    decl, _, User, LongComment, _ = models

    user_serializer = decl.query_serializer_class(User)
    assert user_serializer.__name__ == "UserSerializer"
    descr = user_serializer.resource_descr
    assert list(descr.attributes) == ["name"]
    assert isinstance(descr.relationships["long_comments"], ResourceToManyRelationshipDescriptor)
    assert decl.registry.query_serializer_class(User(id=1)) is user_serializer

    descr = decl.query_serializer_class(LongComment).resource_descr
    # body is derived, id and fancy_body come from Meta; the foreign key is left out
    assert list(descr.attributes) == ["body", "id", "fancy_body"]
    user = descr.relationships["user"]
    assert isinstance(user, ResourceToOneRelationshipDescriptor)
    assert user.include_data
    assert not user.include_links


def test_native_descriptor(models):
    from ..core import SQLADescriptor

    _, _, User, LongComment, Tag = models

    descr = SQLADescriptor(orm.class_mapper(LongComment))
    assert [a.name for a in descr.attributes] == ["body", "user_id"]
    assert [r.name for r in descr.relationships] == ["user"]
    assert descr.relationships[0].type is RelationshipType.TO_ONE
    assert descr.get_identity(LongComment(body="x")) is None
    assert SQLADescriptor(orm.class_mapper(Tag)).get_identity(Tag(namespace="a", name="b")) == "a-b"


def test_serialize(models):
    decl, session, User, LongComment, _ = models

    user = User(id=1, name="alice")
    session.add_all([user, LongComment(id=1, body="x", user=user), LongComment(id=2, body="y")])
    session.flush()

    assert decl.serialize(session.get(LongComment, 2)) == {
        "data": {
            "id": "2",
            "type": "long-comments",
            "attributes": {"body": "y", "id": 2, "fancy-body": "y"},
            "links": {"self": "/long-comments/2"},
            "relationships": {"user": {"data": None}},
        }
    }

    result = decl.serialize(session.get(LongComment, 1), include="user")
    assert result["data"]["relationships"] == {"user": {"data": {"id": "1", "type": "users"}}}
    assert result["included"] == [
        {
            "id": "1",
            "type": "users",
            "attributes": {"name": "alice"},
            "links": {"self": "/users/1"},
            "relationships": {
                "long-comments": {
                    "links": {
                        "self": "/users/1/relationships/long-comments",
                        "related": "/users/1/long-comments",
                    },
                },
            },
        }
    ]


def test_serialize_collection(models):
    decl, session, User, _, Tag = models

    session.add_all([Tag(namespace="a", name="b", label="ab"), Tag(namespace="c", name="d")])
    session.flush()

    result = decl.serialize(
        session.query(Tag).order_by(Tag.namespace).all(), is_collection=True
    )
    assert result == {
        "data": [
            {
                "id": "a-b",
                "type": "tags",
                "attributes": {"label": "ab"},
                "links": {"self": "/tags/a-b"},
            },
            {
                "id": "c-d",
                "type": "tags",
                "attributes": {"label": None},
                "links": {"self": "/tags/c-d"},
            },
        ]
    }


def test_unconfigured_class(models):
    from ....exceptions import UnknownSerializerError

    decl, *_ = models

    class Stranger:
        id = 1

    with pytest.raises(UnknownSerializerError):
        decl.serialize(Stranger())
