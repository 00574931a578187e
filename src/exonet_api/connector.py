"""
:py:mod:`exonet_api.connector` makes the calls to the API and returns the retrieved data as
resource structures.
"""

import json
import typing
from urllib.parse import urljoin

import requests

from .exceptions import ParseError, ResponseExceptionHandler, TransportError
from .serde.exceptions import DeserializationError
from .serde.models import CollectionDocumentRepr, JSONValue, ResourceIdRepr, ResourceRepr
from .structures import ApiResourceSet
from .structures.parser import DocumentParser, ParseResult


class Connector:
    """
    Issues the HTTP requests for a :py:class:`~exonet_api.client.Client`.

    Every request blocks until the exchange completed. Errors are raised to the caller as they
    occur and are never retried here.
    """

    client: "Client"
    parser: DocumentParser

    def _url(self, url_path: str) -> str:
        # absolute URLs, such as pagination links, are used as-is
        return urljoin(self.client.get_api_url(), url_path)

    def _default_headers(self) -> typing.Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.client.get_auth().get_token()}",
            "Accept": "application/vnd.Exonet.v1+json",
            "Content-Type": "application/json",
            "User-Agent": f"exonet-api-python/{self.client.CLIENT_VERSION}",
        }

    def _send(
        self,
        method: str,
        url: str,
        data: typing.Optional[JSONValue] = None,
        recursive: bool = False,
    ) -> requests.Response:
        headers = self._default_headers()
        log = self.client.log

        log.debug(
            f"Sending {'recursive ' if recursive else ''}[{method}] request", extra={"url": url}
        )
        try:
            response = self.client.session.request(
                method,
                url,
                headers=headers,
                data=json.dumps(data) if data is not None else None,
                timeout=self.client.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"[{method}] request to {url} failed: {e}", url) from e
        log.debug(
            f"{'Recursive request' if recursive else 'Request'} completed",
            extra={"statusCode": response.status_code},
        )

        if response.status_code >= 300:
            ResponseExceptionHandler(response, self.client).handle()
        return response

    def _decode(self, response: requests.Response) -> JSONValue:
        try:
            return self.client.deserializer.decode(response.content)
        except DeserializationError as e:
            raise ParseError.from_deserialization_error(e) from e

    def _parse_response(self, response: requests.Response) -> ParseResult:
        document = self._decode(response)
        try:
            document_repr = self.client.deserializer(document)
        except DeserializationError as e:
            raise ParseError.from_deserialization_error(e) from e
        return self.parser(document_repr)

    def get(self, url_path: str) -> ParseResult:
        """
        Perform a GET request and return the parsed body.

        :param str url_path: the URL path to GET, relative to the API URL.
        :return: an :py:class:`ApiResource`, :py:class:`ApiResourceIdentifier` or
                 :py:class:`ApiResourceSet`, depending on the shape of the returned data.
        """
        return self._parse_response(self._send("GET", self._url(url_path)))

    def get_recursive(self, url_path: str) -> ApiResourceSet:
        """
        GET the given URL, and every page that follows it by the ``links.next`` of the previous
        response, merging the data of all pages in the order they were received.

        There is no upper bound to the number of requests: limit the page size, or slice the
        result, when only part of a large collection is needed.
        """
        url: typing.Optional[str] = self._url(url_path)
        data: typing.List[typing.Union[ResourceRepr, ResourceIdRepr]] = []
        while url is not None:
            response = self._send("GET", url, recursive=True)
            try:
                document_repr = self.client.deserializer(self._decode(response))
            except DeserializationError as e:
                raise ParseError.from_deserialization_error(e) from e
            if not isinstance(document_repr, CollectionDocumentRepr):
                raise ParseError(
                    f"expected a collection while fetching {url} recursively",
                    payload=response.text,
                )
            data.extend(document_repr.data)
            url = document_repr.links.next if document_repr.links is not None else None
            if url is not None:
                url = self._url(url)

        return typing.cast(ApiResourceSet, self.parser(CollectionDocumentRepr(data=data)))

    def post(self, url_path: str, data: JSONValue) -> typing.Optional[ParseResult]:
        """
        Convert the data to JSON and POST it. Returns the parsed response body, or ``None`` when
        the API returned no content.
        """
        response = self._send("POST", self._url(url_path), data)
        if not response.content:
            return None
        return self._parse_response(response)

    def patch(self, url_path: str, data: JSONValue) -> bool:
        """
        Convert the data to JSON and PATCH it. Returns ``True`` when successful; an error is raised
        otherwise.
        """
        self._send("PATCH", self._url(url_path), data)
        return True

    def delete(self, url_path: str, data: typing.Optional[JSONValue] = None) -> bool:
        """
        Make a DELETE call, optionally with a body. Returns ``True`` when successful; an error is
        raised otherwise.
        """
        self._send("DELETE", self._url(url_path), data)
        return True

    def __init__(self, client: "Client"):
        self.client = client
        self.parser = DocumentParser(client)


if typing.TYPE_CHECKING:
    from .client import Client  # noqa: E402
