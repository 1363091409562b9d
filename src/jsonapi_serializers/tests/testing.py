import dataclasses
import typing

from ..declarative import Attr, HasMany, HasOne
from ..registry import SerializerRegistry
from ..serializer import Serializer


@dataclasses.dataclass(eq=False)
class User:
    id: typing.Optional[int]
    name: str = ""


@dataclasses.dataclass(eq=False)
class Comment:
    id: typing.Optional[int]
    content: str = ""
    user: typing.Optional[User] = None


@dataclasses.dataclass(eq=False)
class LongComment:
    id: typing.Optional[int]
    body: str = ""
    user: typing.Optional[User] = None
    post: typing.Optional["Post"] = None


@dataclasses.dataclass(eq=False)
class Post:
    id: typing.Optional[int]
    title: str = ""
    body: str = ""
    draft: bool = False
    author: typing.Optional[User] = None
    comments: typing.List[Comment] = dataclasses.field(default_factory=list)
    long_comments: typing.List[LongComment] = dataclasses.field(default_factory=list)


def make_registry() -> SerializerRegistry:
    """
    Returns a fresh registry binding the domain classes above.
    """
    registry = SerializerRegistry()

    @registry.register(User)
    class UserSerializer(Serializer):
        class Meta:
            attributes = ["name"]

    @registry.register(Comment)
    class CommentSerializer(Serializer):
        class Meta:
            attributes = ["content"]
            relationships = [HasOne("user")]

    @registry.register(LongComment)
    class LongCommentSerializer(Serializer):
        class Meta:
            attributes = ["body"]
            relationships = [HasOne("user"), HasOne("post")]

    @registry.register(Post)
    class PostSerializer(Serializer):
        class Meta:
            attributes = [
                "title",
                "body",
                Attr("summary", source=lambda s: s.object.title.upper(), unless="is_draft"),
            ]
            relationships = [
                HasOne("author"),
                HasMany("comments"),
                HasMany("long_comments"),
            ]

        def is_draft(self):
            return self.object.draft

    return registry


class FancyLongCommentSerializer(Serializer):
    class Meta:
        attributes = [
            "id",
            Attr("fancy_body", source="body"),
        ]
        relationships = [HasOne("user", include_links=False, include_data=True)]
