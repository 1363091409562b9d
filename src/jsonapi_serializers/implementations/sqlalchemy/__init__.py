from .core import SQLADescriptor, default_extract_properties  # noqa: F401
from .declarative import Declarative, SQLASerializer, declarative_with_defaults  # noqa: F401
