from .jsonpointer import JSONPointer  # noqa
