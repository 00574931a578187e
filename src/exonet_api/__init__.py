import logging

from .auth import AuthProvider, PersonalAccessToken  # noqa
from .client import Client  # noqa
from .exceptions import (  # noqa
    ApiError,
    AuthenticationError,
    BadRequestError,
    ExonetApiError,
    ForbiddenError,
    NotFoundError,
    ParseError,
    ServerError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .request import Request  # noqa
from .structures import (  # noqa
    ApiResource,
    ApiResourceIdentifier,
    ApiResourceSet,
    Relation,
    Relationship,
)

__version__ = Client.CLIENT_VERSION

logging.getLogger(__name__).addHandler(logging.NullHandler())
