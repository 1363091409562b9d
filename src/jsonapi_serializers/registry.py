import logging
import typing

from .exceptions import InvalidDeclarationError, UnknownSerializerError
from .serializer import Serializer

logger = logging.getLogger(__name__)

SerializerClass = typing.Type[Serializer]
SerializerSpec = typing.Union[None, str, SerializerClass]

T = typing.TypeVar("T", bound=SerializerClass)


class SerializerRegistry:
    """
    Maps domain classes to the serializer classes that render them.

    Serializers are looked up, in this order, by:

    1. the serializer explicitly asked for (a class or a registered name),
    2. the class of the object within the given namespace,
    3. the ``jsonapi_serializer_name`` attribute of the object,
    4. the class of the object or the nearest of its bases.
    """

    _by_class: typing.Dict[typing.Tuple[typing.Optional[str], type], SerializerClass]
    _by_name: typing.Dict[str, SerializerClass]

    @staticmethod
    def _name_for(serializer_class: SerializerClass, namespace: typing.Optional[str]) -> str:
        if namespace is None:
            return serializer_class.__name__
        return f"{namespace}.{serializer_class.__name__}"

    def add(
        self,
        native_class: type,
        serializer_class: SerializerClass,
        namespace: typing.Optional[str] = None,
    ) -> None:
        key = (namespace, native_class)
        existing = self._by_class.get(key)
        if existing is not None and existing is not serializer_class:
            raise InvalidDeclarationError(
                f"{native_class.__name__} is already bound to {existing.__name__}"
                + (f" in namespace {namespace}" if namespace is not None else "")
            )
        self._by_class[key] = serializer_class
        self._by_name[self._name_for(serializer_class, namespace)] = serializer_class
        logger.debug(
            "registered %s for %s (namespace=%r)",
            serializer_class.__name__,
            native_class.__name__,
            namespace,
        )

    def register(
        self, native_class: type, namespace: typing.Optional[str] = None
    ) -> typing.Callable[[T], T]:
        def _(serializer_class: T) -> T:
            self.add(native_class, serializer_class, namespace)
            return serializer_class

        return _

    def query_serializer_class_by_name(self, name: str) -> SerializerClass:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownSerializerError(name, f"no serializer registered as {name!r}")

    def query_serializer_class(
        self,
        obj: typing.Any,
        serializer: SerializerSpec = None,
        namespace: typing.Optional[str] = None,
    ) -> SerializerClass:
        if serializer is not None:
            if isinstance(serializer, str):
                return self.query_serializer_class_by_name(serializer)
            if isinstance(serializer, type) and issubclass(serializer, Serializer):
                return serializer
            raise UnknownSerializerError(serializer, f"{serializer!r} is not a serializer")

        if namespace is not None:
            try:
                return self._by_class[(namespace, type(obj))]
            except KeyError:
                raise UnknownSerializerError(
                    obj, f"no serializer for {type(obj).__name__} in namespace {namespace}"
                )

        name = getattr(obj, "jsonapi_serializer_name", None)
        if name is not None:
            return self.query_serializer_class_by_name(name)

        for class_ in type(obj).__mro__:
            serializer_class = self._by_class.get((None, class_))
            if serializer_class is not None:
                return serializer_class

        raise UnknownSerializerError(obj)

    def __contains__(self, native_class: type) -> bool:
        return (None, native_class) in self._by_class

    def __init__(self):
        self._by_class = {}
        self._by_name = {}


default_registry = SerializerRegistry()
