import typing
from collections import OrderedDict

import sqlalchemy as sa  # type: ignore
from sqlalchemy import orm  # type: ignore

from ...serde.interfaces import RelationshipType


def default_extract_properties(
    sa_mapper: orm.Mapper,
) -> typing.Iterator[orm.interfaces.MapperProperty]:
    """
    Yields the mapped properties of ``sa_mapper`` except for foreign key columns,
    which are exposed through the corresponding relationships instead.
    """
    for attr in sa_mapper.attrs:
        if isinstance(attr, orm.ColumnProperty) and isinstance(attr.expression, sa.Column):
            col = attr.expression
            if col.table is not None and any(
                col.key in c.column_keys for c in col.table.foreign_key_constraints
            ):
                continue
        yield attr


ExtractPropertiesFn = typing.Callable[
    [orm.Mapper], typing.Iterable[orm.interfaces.MapperProperty]
]


Tprop = typing.TypeVar("Tprop", bound=orm.interfaces.MapperProperty)


class SQLAAttributeDescriptor(typing.Generic[Tprop]):
    property: Tprop

    @property
    def name(self) -> str:
        return self.property.key

    def __init__(self, property: Tprop):
        self.property = property


class SQLARelationshipDescriptor:
    property: orm.RelationshipProperty

    @property
    def name(self) -> str:
        return self.property.key

    @property
    def type(self) -> RelationshipType:
        return RelationshipType.TO_MANY if self.property.uselist else RelationshipType.TO_ONE

    def __init__(self, property: orm.RelationshipProperty):
        self.property = property


class SQLADescriptor:
    """
    Describes the attributes and relationships of a SQLAlchemy-mapped class.
    Primary key columns are left out of the attributes; they make up the identity.
    """

    mapper: orm.Mapper
    extract_properties: ExtractPropertiesFn
    attrs_: "typing.Optional[OrderedDict[str, SQLAAttributeDescriptor]]" = None
    rels_: "typing.Optional[OrderedDict[str, SQLARelationshipDescriptor]]" = None

    def _populate_attrs_and_rels(self) -> None:
        if self.attrs_ is None:
            attrs: "OrderedDict[str, SQLAAttributeDescriptor]" = OrderedDict()
            rels: "OrderedDict[str, SQLARelationshipDescriptor]" = OrderedDict()
            pkey_cols = set(self.mapper.primary_key)
            for sa_attr in self.extract_properties(self.mapper):
                if isinstance(sa_attr, orm.ColumnProperty):
                    if (
                        isinstance(sa_attr.expression, sa.Column)
                        and sa_attr.expression in pkey_cols
                    ):
                        continue
                    attrs[sa_attr.key] = SQLAAttributeDescriptor[orm.ColumnProperty](sa_attr)
                elif isinstance(sa_attr, orm.CompositeProperty):
                    if all(
                        isinstance(col, sa.Column) and col in pkey_cols for col in sa_attr.columns
                    ):
                        continue
                    attrs[sa_attr.key] = SQLAAttributeDescriptor[orm.CompositeProperty](sa_attr)
                elif isinstance(sa_attr, orm.RelationshipProperty):
                    rels[sa_attr.key] = SQLARelationshipDescriptor(sa_attr)
            self.attrs_ = attrs
            self.rels_ = rels

    @property
    def attributes(self) -> typing.Sequence[SQLAAttributeDescriptor]:
        self._populate_attrs_and_rels()
        assert self.attrs_ is not None
        return list(self.attrs_.values())

    @property
    def relationships(self) -> typing.Sequence[SQLARelationshipDescriptor]:
        self._populate_attrs_and_rels()
        assert self.rels_ is not None
        return list(self.rels_.values())

    def get_identity(self, target: typing.Any) -> typing.Optional[str]:
        """
        Returns the primary key values of ``target`` joined with ``-``,
        or :py:const:`None` if it has not been assigned any.
        """
        pkey_values = self.mapper.primary_key_from_instance(target)
        if all(v is None for v in pkey_values):
            return None
        return "-".join(str(v) for v in pkey_values)

    def __init__(
        self, mapper: orm.Mapper, extract_properties: typing.Optional[ExtractPropertiesFn] = None
    ):
        self.mapper = mapper
        self.extract_properties = (
            extract_properties if extract_properties is not None else (lambda m: m.attrs)
        )
