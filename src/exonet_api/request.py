"""
:py:mod:`exonet_api.request` builds the requests for a resource type and passes them on to the
:py:class:`~exonet_api.connector.Connector`.
"""

import re
import typing
from collections import OrderedDict
from urllib.parse import urlencode

FilterValue = typing.Union[str, int, float, bool, typing.Sequence[typing.Union[str, int, float]]]


def _stringify(value: typing.Union[str, int, float, bool]) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class Request:
    """
    Accumulates the resource path, pagination and filters of a request. The builder methods return
    the request itself, so they can be chained:

    .. code-block:: python

       client.resource("dns_records").filter("zone", "VX09kwR3KxNo").size(20).page(2).get()
    """

    client: "Client"
    _resource: str
    _page: typing.Dict[str, typing.Optional[int]]
    _filters: "OrderedDict[str, str]"

    def size(self, page_size: int) -> "Request":
        """
        Set the maximum number of resources returned by a single call.
        """
        self._page["size"] = page_size
        return self

    def page(self, page_number: int) -> "Request":
        self._page["number"] = page_number
        return self

    def filter(self, name: str, value: FilterValue = True) -> "Request":
        """
        Set a filter. A list of values is sent as a single, comma separated, value. Filter names are
        not validated; the API decides what it supports.
        """
        if isinstance(value, (list, tuple)):
            value = ",".join(_stringify(v) for v in value)
        self._filters[name] = _stringify(typing.cast(typing.Union[str, int, float, bool], value))
        return self

    def query_string(self) -> str:
        params: typing.List[typing.Tuple[str, str]] = [
            (f"page[{k}]", str(v)) for k, v in self._page.items() if v is not None
        ]
        params.extend((f"filter[{k}]", v) for k, v in self._filters.items())
        return urlencode(params)

    def _path(self, id: typing.Optional[str] = None) -> str:
        path = self._resource.strip("/")
        if id:
            path += "/" + str(id).strip("/")
        return re.sub(r"/{2,}", "/", path)

    def prepare_url(self, id: typing.Optional[str] = None) -> str:
        """
        The URL path of the resource, including the (optional) id and the query string.
        """
        url = self._path(id)
        params = self.query_string()
        if params:
            url += "?" + params
        return url

    def id(self, id: str) -> "ApiResourceIdentifier":
        """
        Identify a single resource without fetching it.
        """
        from .structures import ApiResourceIdentifier

        return ApiResourceIdentifier(self._path(), id, client=self.client)

    def get(self, id: typing.Optional[str] = None) -> "ParseResult":
        """
        Get the resources or, if an id is given, the resource with that id.
        """
        return self.client.connector.get(self.prepare_url(id))

    def get_recursive(self, id: typing.Optional[str] = None) -> "ApiResourceSet":
        """
        Get the resources of every page, starting at the page this request points to.
        """
        return self.client.connector.get_recursive(self.prepare_url(id))

    def post(self, payload: "JSONValue") -> typing.Optional["ParseResult"]:
        return self.client.connector.post(self._path(), payload)

    def patch(self, id: str, payload: "JSONValue") -> bool:
        return self.client.connector.patch(self._path(id), payload)

    def delete(self, id: str, payload: typing.Optional["JSONValue"] = None) -> bool:
        return self.client.connector.delete(self._path(id), payload)

    def __repr__(self):
        return f"{type(self).__name__}({self.prepare_url()!r})"

    def __init__(self, resource: str, client: "Client"):
        """
        :param str resource: the resource path, usually just the resource type.
        :param Client client: the client to send the request with.
        """
        self._resource = resource
        self.client = client
        self._page = OrderedDict([("size", None), ("number", None)])
        self._filters = OrderedDict()


if typing.TYPE_CHECKING:
    from .client import Client  # noqa: E402
    from .serde.models import JSONValue  # noqa: E402
    from .structures import ApiResourceIdentifier, ApiResourceSet  # noqa: E402
    from .structures.parser import ParseResult  # noqa: E402
