import collections.abc
import typing

from ..serde.models import LinksRepr


class ApiResourceSet(collections.abc.Sequence):
    """
    An ordered collection of resources, as returned by a single page of a collection endpoint,
    together with the links to the other pages.
    """

    client: "Client"
    links: LinksRepr
    _items: typing.List["ApiResourceIdentifier"]

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def _navigate(self, link: typing.Optional[str]) -> typing.Optional["ApiResourceSet"]:
        if link is None:
            return None
        result = self.client.connector.get(link)
        if not isinstance(result, ApiResourceSet):
            raise ParseError(f"expected a collection at {link}, got {result!r}")
        return result

    def next_page(self) -> typing.Optional["ApiResourceSet"]:
        """
        Fetch the next page, or return ``None`` on the last page.
        """
        return self._navigate(self.links.next)

    def previous_page(self) -> typing.Optional["ApiResourceSet"]:
        return self._navigate(self.links.prev)

    def first_page(self) -> typing.Optional["ApiResourceSet"]:
        return self._navigate(self.links.first)

    def last_page(self) -> typing.Optional["ApiResourceSet"]:
        return self._navigate(self.links.last)

    def get_all(self) -> "ApiResourceSet":
        """
        The resources of this page followed by those of every next page, fetched one page after
        the other.
        """
        items = list(self._items)
        if self.links.next is not None:
            items.extend(self.client.connector.get_recursive(self.links.next))
        return ApiResourceSet(items, client=self.client)

    def __repr__(self):
        return f"ApiResourceSet({self._items!r})"

    def __init__(
        self,
        items: typing.Iterable["ApiResourceIdentifier"],
        *,
        client: "Client",
        links: typing.Optional[LinksRepr] = None,
    ):
        self._items = list(items)
        self.client = client
        self.links = links if links is not None else LinksRepr()


from ..exceptions import ParseError  # noqa: E402

if typing.TYPE_CHECKING:
    from ..client import Client  # noqa: E402
    from .identifier import ApiResourceIdentifier  # noqa: E402
