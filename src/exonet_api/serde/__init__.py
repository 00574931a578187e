from .deserializer import ReprDeserializer  # noqa
from .exceptions import DeserializationError, DeserializationErrorItem  # noqa
from .renderer import ReprRenderer  # noqa
