import dataclasses
import typing

from .models import JSONValue
from .utils import JSONPointer


class JSONAPISerdeError(Exception):
    pass


@dataclasses.dataclass(frozen=True)
class DeserializationErrorItem:
    pointer: JSONPointer
    message: str

    def __str__(self):
        return f"{self.pointer}: {self.message}"


class DeserializationError(JSONAPISerdeError):
    payload: JSONValue
    errors: typing.Sequence[DeserializationErrorItem]

    def __str__(self):
        return "; ".join(str(e) for e in self.errors)

    def __init__(self, payload: JSONValue, errors: typing.Sequence[DeserializationErrorItem]):
        super().__init__(payload, errors)
        self.payload = payload
        self.errors = errors
