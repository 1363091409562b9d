"""
:py:mod:`jsonapi_serializers.casing` turns identifiers into the key casing used on the wire.

Every name that appears in a document goes through :py:func:`transform_key_casing`:
resource types, attribute and relationship keys, link path segments and error pointers.

.. code-block:: python

   transform_key_casing("fancy_body", KeyTransform.DASH)         # => "fancy-body"
   transform_key_casing("fancy_body", KeyTransform.CAMEL)        # => "FancyBody"
   transform_key_casing("fancy_body", KeyTransform.CAMEL_LOWER)  # => "fancyBody"
   tableize("LongComment")                                       # => "long_comments"
"""

import enum
import functools
import re
import typing

import inflect

from .exceptions import UnknownKeyTransformError


class KeyTransform(enum.Enum):
    CAMEL = "camel"
    CAMEL_LOWER = "camel_lower"
    DASH = "dash"
    UNDERSCORE = "underscore"
    UNALTERED = "unaltered"

    @classmethod
    def parse(cls, value: typing.Union["KeyTransform", str]) -> "KeyTransform":
        if isinstance(value, KeyTransform):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownKeyTransformError(value, [m.value for m in cls])


_acronym_boundary = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_word_boundary = re.compile(r"([a-z\d])([A-Z])")

_inflect_engine = inflect.engine()


@functools.lru_cache(maxsize=1024)
def underscore(name: str) -> str:
    """
    Converts ``FancyBody``, ``fancyBody`` or ``fancy-body`` into ``fancy_body``.
    """
    name = _acronym_boundary.sub(r"\1_\2", name)
    name = _word_boundary.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


def camelize(name: str, uppercase_first_letter: bool = True) -> str:
    words = underscore(name).split("_")
    head, tail = words[0], words[1:]
    if uppercase_first_letter:
        head = head[:1].upper() + head[1:]
    return head + "".join(w[:1].upper() + w[1:] for w in tail)


def dasherize(name: str) -> str:
    return underscore(name).replace("_", "-")


@functools.lru_cache(maxsize=None)
def tableize(class_name: str) -> str:
    """
    Derives the uncased resource type from a class name by underscoring it and
    pluralizing its last word: ``LongComment`` becomes ``long_comments``.
    """
    words = underscore(class_name).split("_")
    words[-1] = _inflect_engine.plural_noun(words[-1]) or words[-1]
    return "_".join(words)


_transformers: typing.Dict[KeyTransform, typing.Callable[[str], str]] = {
    KeyTransform.CAMEL: camelize,
    KeyTransform.CAMEL_LOWER: lambda name: camelize(name, uppercase_first_letter=False),
    KeyTransform.DASH: dasherize,
    KeyTransform.UNDERSCORE: underscore,
    KeyTransform.UNALTERED: lambda name: name,
}


def transform_key_casing(
    name: str, mode: typing.Union[KeyTransform, str, None] = None
) -> str:
    """
    Transforms ``name`` into the casing ``mode`` designates.
    When ``mode`` is omitted, the ``key_transform`` of the active configuration is used.
    """
    if mode is None:
        from .config import get_config

        mode = get_config().key_transform
    return _transformers[KeyTransform.parse(mode)](name)
