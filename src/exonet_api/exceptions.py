import abc
import collections
import typing

import requests

from .serde.exceptions import DeserializationError, DeserializationErrorItem
from .serde.models import ErrorRepr, JSONValue


class ExonetApiError(Exception, metaclass=abc.ABCMeta):
    """
    The base of every error raised by this library.
    """

    message: str

    def __str__(self):
        return self.message

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(ExonetApiError):
    """
    Raised when a request needs a token while the client has no authentication provider.
    """


class TransportError(ExonetApiError):
    """
    Raised when the HTTP exchange itself failed. The original exception is the ``__cause__``.
    """

    url: str

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class ParseError(ExonetApiError):
    """
    Raised when a response body is not valid JSON or does not have the expected ``data``.
    """

    payload: JSONValue
    errors: typing.Sequence[DeserializationErrorItem]

    @classmethod
    def from_deserialization_error(cls, e: DeserializationError) -> "ParseError":
        return cls(f"malformed response body ({e})", e.payload, e.errors)

    def __init__(
        self,
        message: str,
        payload: JSONValue = None,
        errors: typing.Sequence[DeserializationErrorItem] = (),
    ):
        super().__init__(message)
        self.payload = payload
        self.errors = errors


class ApiError(ExonetApiError):
    """
    Raised when the API responded with a status code of 300 or above.

    ``code`` and ``detail`` come from the first error object in the response, if any.
    """

    status_code: int
    errors: typing.Sequence[ErrorRepr]

    @property
    def code(self) -> typing.Optional[str]:
        return self.errors[0].code if self.errors else None

    @property
    def detail(self) -> typing.Optional[str]:
        return self.errors[0].detail if self.errors else None

    def __init__(self, message: str, status_code: int, errors: typing.Sequence[ErrorRepr] = ()):
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors


class BadRequestError(ApiError):
    pass


class UnauthorizedError(ApiError):
    pass


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    """
    Raised on ``422 Unprocessable Entity``. Unlike the other errors, every error object of the
    response is relevant here: each describes one rejected field.
    """

    @property
    def field_errors(self) -> typing.Mapping[str, typing.Sequence[str]]:
        """
        The error details grouped by the ``field`` variable. Errors not tied to a field are listed
        under ``"generic"``.
        """
        retval: typing.Dict[str, typing.List[str]] = collections.OrderedDict()
        for error in self.errors:
            field = error.variables.get("field", "generic")
            retval.setdefault(field, []).append(error.detail or error.title or "")
        return retval


class ServerError(ApiError):
    pass


_STATUS_CODE_ERRORS: typing.Mapping[int, typing.Type[ApiError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    422: ValidationError,
}


class ResponseExceptionHandler:
    """
    Translates a non-successful response into the matching :py:class:`ApiError` and raises it.
    """

    response: requests.Response
    client: "Client"

    def _decode_errors(self) -> typing.Sequence[ErrorRepr]:
        deserializer = self.client.deserializer
        try:
            document = deserializer.decode(self.response.content)
        except DeserializationError:
            return ()
        return deserializer.errors(document).errors

    def _error_class(self) -> typing.Type[ApiError]:
        status_code = self.response.status_code
        if status_code >= 500:
            return ServerError
        return _STATUS_CODE_ERRORS.get(status_code, ApiError)

    def _message(
        self, error_class: typing.Type[ApiError], errors: typing.Sequence[ErrorRepr]
    ) -> str:
        if error_class is ValidationError and errors:
            if len(errors) == 1:
                return "There is 1 validation error."
            return f"There are {len(errors)} validation errors."
        for error in errors:
            message = error.detail or error.title
            if message:
                return message
        return f"The API returned an unexpected status code ({self.response.status_code})"

    def handle(self) -> typing.NoReturn:
        errors = self._decode_errors()
        error_class = self._error_class()
        message = self._message(error_class, errors)

        self.client.log.error(
            message,
            extra={"statusCode": self.response.status_code, "url": self.response.url},
        )
        raise error_class(message, self.response.status_code, errors)

    def __init__(self, response: requests.Response, client: "Client"):
        self.response = response
        self.client = client


if typing.TYPE_CHECKING:
    from .client import Client  # noqa: E402
