import abc
import typing

from .serde.utils import english_enumerate, quoted


class JSONAPISerializerException(Exception, metaclass=abc.ABCMeta):
    pass


class InvalidDeclarationError(JSONAPISerializerException):
    message: str

    def __str__(self):
        return self.message

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownKeyTransformError(JSONAPISerializerException):
    value: typing.Any
    choices: typing.Sequence[str]

    @property
    def message(self) -> str:
        return f"unknown key transform {self.value!r}; must be one of {english_enumerate(quoted(self.choices), conj=', or ')}"

    def __str__(self):
        return self.message

    def __init__(self, value: typing.Any, choices: typing.Sequence[str]):
        super().__init__(value)
        self.value = value
        self.choices = choices


class JSONAPISerializerError(JSONAPISerializerException):
    """
    The base class for errors caused by what the caller passes to :py:func:`jsonapi_serializers.serialize`.
    """

    message: str

    def __str__(self):
        return self.message

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AmbiguousCollectionError(JSONAPISerializerError):
    pass


class InvalidIncludeError(JSONAPISerializerError):
    name: str
    suggestion: typing.Optional[str]

    def __init__(self, name: str, suggestion: typing.Optional[str] = None):
        message = f"'{name}' is not a valid include."
        if suggestion is not None:
            message += f"  Did you mean '{suggestion}' ?"
        super().__init__(message)
        self.name = name
        self.suggestion = suggestion


class UnknownSerializerError(JSONAPISerializerError):
    target: typing.Any

    def __init__(self, target: typing.Any, message: typing.Optional[str] = None):
        if message is None:
            message = f"no serializer found for {target!r}"
        super().__init__(message)
        self.target = target
