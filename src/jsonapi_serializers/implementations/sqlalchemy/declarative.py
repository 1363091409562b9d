"""
jsonapi_serializers.implementations.sqlalchemy.declarative module contains a
facade that derives serializers from SQLAlchemy-mapped classes.

Synopsis
--------

.. code-block:: python

   import sqlalchemy as sa
   from sqlalchemy import orm
   from jsonapi_serializers import HasOne
   from jsonapi_serializers.implementations.sqlalchemy import declarative_with_defaults

   Base = orm.declarative_base()
   decl = declarative_with_defaults()

   @decl
   class LongComment(Base):
       __tablename__ = "long_comments"

       class Meta:
           relationships = [HasOne("user", include_links=False, include_data=True)]

       id = sa.Column(sa.Integer(), primary_key=True, nullable=False)
       fancy_body = sa.Column(sa.String(), nullable=False)
       user_id = sa.Column(sa.Integer(), sa.ForeignKey("users.id"))
       user = orm.relationship("User")

   decl.configure()

   decl.serialize(session.get(LongComment, 1), include="user")

"""
import logging
import typing

from sqlalchemy import orm  # type: ignore

from ...declarative import Attr, HasMany, HasOne, Meta, build_descriptor, handle_meta
from ...document import DocumentAssembler
from ...models import ResourceDescriptor
from ...registry import SerializerRegistry
from ...serde.interfaces import RelationshipType
from ...serde.types import JSONDocument
from ...serializer import Serializer
from .core import ExtractPropertiesFn, SQLADescriptor, default_extract_properties

logger = logging.getLogger(__name__)


class SQLASerializer(Serializer):
    """
    The base class of the serializers :py:class:`Declarative` derives.
    The identity is taken from the primary key.
    """

    native_descr: typing.ClassVar[typing.Optional[SQLADescriptor]] = None

    @property
    def id(self) -> typing.Optional[str]:
        if self.native_descr is None:
            return super().id
        return self.native_descr.get_identity(self.object)


def derive_resource_descriptor(native_descr: SQLADescriptor) -> ResourceDescriptor:
    """
    Builds a descriptor with an attribute per column and a has-one or has-many per relationship.
    """
    return build_descriptor(
        Meta(
            attributes=[Attr(attr.name) for attr in native_descr.attributes],
            relationships=[
                (HasMany if rel.type is RelationshipType.TO_MANY else HasOne)(rel.name)
                for rel in native_descr.relationships
            ],
        ),
        SQLASerializer.resource_descr,
    )


class Declarative:
    """
    The facade that turns SQLAlchemy-instrumented classes into registered serializers.
    """

    registry: SerializerRegistry
    assembler: DocumentAssembler
    _sa_mapper_to_serializer_map: typing.Dict[orm.Mapper, typing.Type[SQLASerializer]]
    _instrumented_classes: typing.List[typing.Type]
    _extract_properties_fn: typing.Optional[ExtractPropertiesFn]

    def _configure_instrumented_class(self, sa_mapper: orm.Mapper) -> typing.Type[SQLASerializer]:
        if sa_mapper in self._sa_mapper_to_serializer_map:
            return self._sa_mapper_to_serializer_map[sa_mapper]
        native_descr = SQLADescriptor(sa_mapper, self._extract_properties_fn)
        meta: Meta
        meta_class = getattr(sa_mapper.class_, "Meta", None)
        if meta_class is not None:
            meta = handle_meta(meta_class)
        else:
            meta = Meta()
        serializer_class = typing.cast(
            typing.Type[SQLASerializer],
            type(f"{sa_mapper.class_.__name__}Serializer", (SQLASerializer,), {}),
        )
        serializer_class.native_descr = native_descr
        serializer_class.resource_descr = build_descriptor(
            meta, derive_resource_descriptor(native_descr)
        )
        self.registry.add(sa_mapper.class_, serializer_class)
        self._sa_mapper_to_serializer_map[sa_mapper] = serializer_class
        logger.debug("derived %s from %r", serializer_class.__name__, sa_mapper)
        return serializer_class

    def _do_configure(self):
        for c in self._instrumented_classes:
            self._configure_instrumented_class(orm.class_mapper(c))

    def query_serializer_class(self, class_: typing.Type) -> typing.Type[SQLASerializer]:
        return self._configure_instrumented_class(orm.class_mapper(class_))

    def serialize(self, objects: typing.Any, **kwargs: typing.Any) -> JSONDocument:
        return self.assembler.serialize(objects, **kwargs)

    def configure(self, skip_configure_mappers=False) -> None:
        if not skip_configure_mappers:
            orm.configure_mappers()
        self._do_configure()

    T = typing.TypeVar("T")

    def __call__(self, instrumented_classes: typing.Type[T]) -> typing.Type[T]:
        self._instrumented_classes.append(instrumented_classes)
        return instrumented_classes

    def __init__(
        self,
        registry: SerializerRegistry,
        extract_properties_fn: typing.Optional[ExtractPropertiesFn] = None,
    ):
        self.registry = registry
        self.assembler = DocumentAssembler(registry)
        self._sa_mapper_to_serializer_map = {}
        self._instrumented_classes = []
        self._extract_properties_fn = extract_properties_fn


def declarative_with_defaults(
    registry: typing.Optional[SerializerRegistry] = None,
    extract_properties_fn: typing.Optional[ExtractPropertiesFn] = default_extract_properties,
) -> Declarative:
    return Declarative(
        registry=(registry if registry is not None else SerializerRegistry()),
        extract_properties_fn=extract_properties_fn,
    )
