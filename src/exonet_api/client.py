"""
:py:mod:`exonet_api.client` holds the :py:class:`Client`, the context every other part of the
library is handed: API URL, authentication, logger and HTTP session.

Synopsis
--------

.. code-block:: python

   from exonet_api import Client, PersonalAccessToken

   client = Client(PersonalAccessToken("<token>"))

   for ticket in client.resource("tickets").size(5).get():
       print(ticket.id, ticket["last_message_subject"])
"""

import logging
import os
import typing

import requests

from .auth import AuthProvider, PersonalAccessToken
from .exceptions import AuthenticationError
from .serde import ReprDeserializer, ReprRenderer

logger = logging.getLogger(__name__)


class Client:
    CLIENT_VERSION: typing.ClassVar[str] = "0.1.0"
    API_PRODUCTION_URL: typing.ClassVar[str] = "https://api.exonet.nl/"
    API_TEST_URL: typing.ClassVar[str] = "https://test-api.exonet.nl/"

    ENVIRONMENTS: typing.ClassVar[typing.Mapping[str, str]] = {
        "production": API_PRODUCTION_URL,
        "test": API_TEST_URL,
    }

    timeout: typing.Optional[float]
    deserializer: ReprDeserializer
    renderer: ReprRenderer
    _auth: typing.Optional[AuthProvider] = None
    _api_url: str
    _logger: typing.Optional[logging.Logger] = None
    _session: typing.Optional[requests.Session] = None
    _connector: typing.Optional["Connector"] = None

    @classmethod
    def from_env(
        cls, environ: typing.Optional[typing.Mapping[str, str]] = None, **kwargs: typing.Any
    ) -> "Client":
        """
        Build a client from ``EXONET_API_TOKEN``, and ``EXONET_API_URL`` or
        ``EXONET_API_ENVIRONMENT`` (``production`` or ``test``). Keyword arguments are passed on
        to the constructor.
        """
        environ = os.environ if environ is None else environ

        api_url = environ.get("EXONET_API_URL")
        if not api_url:
            environment = environ.get("EXONET_API_ENVIRONMENT", "production")
            try:
                api_url = cls.ENVIRONMENTS[environment]
            except KeyError:
                raise ValueError(f"unknown API environment: {environment!r}")

        token = environ.get("EXONET_API_TOKEN")
        auth = PersonalAccessToken(token) if token else None
        return cls(auth, api_url, **kwargs)

    def get_auth(self) -> AuthProvider:
        """
        :raises AuthenticationError: if no authentication provider was set.
        """
        if self._auth is None:
            self.log.error("No authentication method set.")
            raise AuthenticationError("No authentication method set.")
        return self._auth

    def set_auth(self, auth: typing.Optional[AuthProvider]) -> "Client":
        self._auth = auth
        return self

    def get_api_url(self) -> str:
        return self._api_url

    def set_api_url(self, api_url: str) -> "Client":
        self._api_url = api_url.rstrip("/") + "/"
        return self

    @property
    def log(self) -> logging.Logger:
        """
        The logger to report to. Without an explicit logger this is the package logger, which has
        only a :py:class:`logging.NullHandler` unless the application configures one.
        """
        return self._logger if self._logger is not None else logger

    def set_logger(self, logger: typing.Optional[logging.Logger]) -> "Client":
        self._logger = logger
        return self

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    @property
    def connector(self) -> "Connector":
        if self._connector is None:
            self._connector = Connector(self)
        return self._connector

    def resource(self, name: str) -> "Request":
        """
        Start building a request for the resources of type ``name``.
        """
        return Request(name, self)

    def __init__(
        self,
        auth: typing.Optional[AuthProvider] = None,
        api_url: typing.Optional[str] = None,
        *,
        logger: typing.Optional[logging.Logger] = None,
        session: typing.Optional[requests.Session] = None,
        timeout: typing.Optional[float] = None,
        renderer: typing.Optional[ReprRenderer] = None,
    ):
        """
        :param Optional[AuthProvider] auth: the authentication provider. May be set later on.
        :param Optional[str] api_url: the API URL. Defaults to :py:attr:`API_PRODUCTION_URL`.
        :param Optional[logging.Logger] logger: the logger to report to.
        :param Optional[requests.Session] session: the HTTP session to send requests with.
        :param Optional[float] timeout: passed on to ``requests`` for every request.
        :param Optional[ReprRenderer] renderer: renders request payloads. Pass one to change how
               decimals or naive datetimes are sent.
        """
        self._auth = auth
        self.set_api_url(api_url if api_url is not None else self.API_PRODUCTION_URL)
        self._logger = logger
        self._session = session
        self.timeout = timeout
        self.deserializer = ReprDeserializer()
        self.renderer = renderer if renderer is not None else ReprRenderer()


from .connector import Connector  # noqa: E402
from .request import Request  # noqa: E402
