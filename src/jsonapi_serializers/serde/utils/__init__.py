from .formatting import english_enumerate, quoted  # noqa
from .jsonpointer import JSONPointer  # noqa
