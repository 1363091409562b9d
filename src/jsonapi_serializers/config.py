"""
Process-wide configuration and its scoped override.

.. code-block:: python

   from jsonapi_serializers.config import configure, override_config

   configure(key_transform="camel_lower")

   with override_config(key_transform="underscore"):
       serialize(post)  # types and keys are underscored here
"""

import contextlib
import contextvars
import dataclasses
import logging
import os
import typing

from .casing import KeyTransform

logger = logging.getLogger(__name__)

KEY_TRANSFORM_ENV_VAR = "JSONAPI_SERIALIZERS_KEY_TRANSFORM"


@dataclasses.dataclass(frozen=True)
class Configuration:
    key_transform: KeyTransform = KeyTransform.DASH
    """
    The casing applied to types, member names, link segments and error pointers.
    """

    include_intermediate_resources: bool = False
    """
    When set, every resource on a dotted include path goes into ``included``,
    not just the ones the path ends at.
    """

    def replace(self, **changes: typing.Any) -> "Configuration":
        if "key_transform" in changes:
            changes["key_transform"] = KeyTransform.parse(changes["key_transform"])
        return dataclasses.replace(self, **changes)


def _initial_config() -> Configuration:
    config = Configuration()
    value = os.environ.get(KEY_TRANSFORM_ENV_VAR)
    if value:
        config = config.replace(key_transform=value)
    return config


_default_config: typing.Optional[Configuration] = None

_override: contextvars.ContextVar[typing.Optional[Configuration]] = contextvars.ContextVar(
    "jsonapi_serializers_config_override", default=None
)


def get_default_config() -> Configuration:
    global _default_config
    if _default_config is None:
        _default_config = _initial_config()
    return _default_config


def configure(**changes: typing.Any) -> Configuration:
    """
    Replaces the process-wide default with a copy carrying ``changes``.
    """
    global _default_config
    _default_config = get_default_config().replace(**changes)
    logger.debug("default configuration replaced: %r", _default_config)
    return _default_config


def get_config() -> Configuration:
    config = _override.get()
    return config if config is not None else get_default_config()


@contextlib.contextmanager
def override_config(**changes: typing.Any) -> typing.Iterator[Configuration]:
    """
    Applies ``changes`` on top of the active configuration for the duration of the block.
    The override is local to the current thread or task and is always undone on exit.
    """
    config = get_config().replace(**changes)
    token = _override.set(config)
    try:
        yield config
    finally:
        _override.reset(token)
