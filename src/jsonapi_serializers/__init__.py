from .casing import KeyTransform, transform_key_casing  # noqa: F401
from .config import (  # noqa: F401
    Configuration,
    configure,
    get_config,
    get_default_config,
    override_config,
)
from .declarative import Attr, HasMany, HasOne  # noqa: F401
from .document import DocumentAssembler, serialize, serialize_errors  # noqa: F401
from .exceptions import (  # noqa: F401
    AmbiguousCollectionError,
    InvalidDeclarationError,
    InvalidIncludeError,
    JSONAPISerializerError,
    JSONAPISerializerException,
    UnknownKeyTransformError,
    UnknownSerializerError,
)
from .models import Computed, FixedAccessor  # noqa: F401
from .registry import SerializerRegistry, default_registry  # noqa: F401
from .serializer import Serializer  # noqa: F401
