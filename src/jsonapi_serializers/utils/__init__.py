import typing

T = typing.TypeVar("T")


class UnspecifiedType:
    """
    The type of :py:data:`UNSPECIFIED`, a falsy singleton that tells an omitted
    declaration option apart from an explicit :py:const:`None`.
    """

    _singleton: typing.ClassVar[typing.Optional["UnspecifiedType"]] = None

    def __bool__(self):
        return False

    def __repr__(self):
        return "UNSPECIFIED"

    def __new__(cls) -> "UnspecifiedType":
        if cls._singleton is None:
            cls._singleton = object.__new__(cls)
        return cls._singleton


UNSPECIFIED = UnspecifiedType()


def assert_not_none(value: typing.Optional[T]) -> T:
    assert value is not None
    return value
