"""
Finds the resources a compound document has to carry in ``included``.

An include parameter like ``["author", "comments.author"]`` is parsed into a tree:

.. code-block:: text

   author    (requested)
   comments  (not requested)
     author  (requested)

which :py:class:`IncludeResolver` walks for each primary object, collecting every
resource it reaches into a :py:class:`DiscoveredResourceTable` keyed by ``(id, type)``.
"""

import dataclasses
import logging
import typing
from collections import OrderedDict

from .exceptions import InvalidIncludeError
from .mapper import ToSerdeContext
from .models import ResourceRelationshipDescriptor, ResourceToOneRelationshipDescriptor
from .registry import SerializerSpec

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class InclusionNode:
    requested: bool = False
    children: "InclusionTree" = dataclasses.field(default_factory=lambda: InclusionTree())


class InclusionTree(typing.Dict[str, InclusionNode]):
    def requested_names(self) -> typing.List[str]:
        return [name for name, node in self.items() if node.requested]


def _merge_relationship_path(path: str, tree: InclusionTree, include_intermediate: bool) -> None:
    head, sep, tail = path.partition(".")
    head = head.strip()
    node = tree.get(head)
    if node is None:
        tree[head] = node = InclusionNode()
    if not sep or include_intermediate:
        node.requested = True
    if sep:
        _merge_relationship_path(tail, node.children, include_intermediate)


def parse_relationship_paths(
    paths: typing.Iterable[str], include_intermediate: bool = False
) -> InclusionTree:
    """
    Parses dotted relationship paths into an :py:class:`InclusionTree`.

    A node is requested when some path ends at it, or, with ``include_intermediate``,
    when some path goes through it.
    """
    tree = InclusionTree()
    for path in paths:
        _merge_relationship_path(path, tree, include_intermediate)
    return tree


ResourceKey = typing.Tuple[typing.Optional[str], str]


@dataclasses.dataclass
class DiscoveredResource:
    object: typing.Any
    include_linkages: typing.Set[str] = dataclasses.field(default_factory=set)
    serializer: SerializerSpec = None


class DiscoveredResourceTable:
    """
    An insertion-ordered table holding at most one entry per ``(id, uncased type)``.
    """

    _entries: "OrderedDict[ResourceKey, DiscoveredResource]"

    def upsert(
        self,
        key: ResourceKey,
        object: typing.Any,
        include_linkages: typing.Iterable[str],
        serializer: SerializerSpec = None,
    ) -> DiscoveredResource:
        entry = self._entries.get(key)
        if entry is None:
            self._entries[key] = entry = DiscoveredResource(
                object=object, include_linkages=set(include_linkages), serializer=serializer
            )
        else:
            entry.include_linkages.update(include_linkages)
        return entry

    def __getitem__(self, key: ResourceKey) -> DiscoveredResource:
        return self._entries[key]

    def __contains__(self, key: ResourceKey) -> bool:
        return key in self._entries

    def __iter__(self) -> typing.Iterator[DiscoveredResource]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __init__(self):
        self._entries = OrderedDict()


class IncludeResolver:
    ctx: ToSerdeContext

    def _resolve(
        self, serializer, rel: ResourceRelationshipDescriptor
    ) -> typing.List[typing.Any]:
        if isinstance(rel, ResourceToOneRelationshipDescriptor):
            dest = serializer.has_one_relationship(rel)
            return [] if dest is None else [dest]
        return [dest for dest in serializer.has_many_relationship(rel) if dest is not None]

    def find_recursive_relationships(
        self,
        root: typing.Any,
        tree: InclusionTree,
        results: DiscoveredResourceTable,
        serializer: SerializerSpec = None,
    ) -> None:
        _serializer = self.ctx.create_serializer(root, serializer)
        for segment, node in tree.items():
            name = _serializer.unformat_name(segment)
            rel: typing.Optional[ResourceRelationshipDescriptor] = _serializer.has_one_relationships().get(name)
            if rel is None:
                rel = _serializer.has_many_relationships().get(name)
            if rel is None:
                raise InvalidIncludeError(segment)
            expected = _serializer.format_name(rel.name)
            if expected != segment:
                raise InvalidIncludeError(segment, expected)

            dests = self._resolve(_serializer, rel)

            if node.requested:
                linkages = node.children.requested_names()
                for dest in dests:
                    dest_serializer = self.ctx.create_serializer(dest, rel.serializer)
                    key = (dest_serializer.id, dest_serializer.type_name())
                    if key not in results:
                        logger.debug("discovered %r through %s", key, segment)
                    results.upsert(key, dest, linkages, rel.serializer)

            if node.children:
                for dest in dests:
                    self.find_recursive_relationships(dest, node.children, results, rel.serializer)

    def __init__(self, ctx: ToSerdeContext):
        self.ctx = ctx
