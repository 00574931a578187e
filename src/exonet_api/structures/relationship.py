import dataclasses
import typing

from ..deferred import Deferred
from ..serde.models import LinkageRepr


@dataclasses.dataclass(frozen=True)
class Unset:
    """
    Nothing is known about the relationship yet.
    """


@dataclasses.dataclass(frozen=True)
class Single:
    """
    A to-one relationship. ``identifier`` is ``None`` for an empty one.
    """

    identifier: typing.Optional["ApiResourceIdentifier"]


@dataclasses.dataclass(frozen=True)
class Many:
    """
    A to-many relationship.
    """

    identifiers: typing.Tuple["ApiResourceIdentifier", ...] = ()


RelationshipValue = typing.Union[Unset, Single, Many]

UNSET = Unset()


def value_of(result: typing.Any) -> RelationshipValue:
    """
    Convert a parsed relationship response into the value it describes.
    """
    if result is None:
        return Single(None)
    elif isinstance(result, ApiResourceSet):
        return Many(tuple(result))
    elif isinstance(result, ApiResourceIdentifier):
        return Single(result)
    else:
        raise TypeError(f"not a relationship: {result!r}")


class Relationship:
    """
    A relationship of a resource to one or more other resources, by their linkage objects.

    The relationship data is fetched from ``type/id/relationships/name`` the first time it is read
    while nothing is known about it. :py:meth:`get` always issues a new request.
    """

    name: str
    owner: "ApiResourceIdentifier"
    _value: RelationshipValue
    _fetched: Deferred[RelationshipValue]

    def _fetch(self) -> RelationshipValue:
        self.owner._require_id(f'fetch relationship "{self.name}" of')
        return value_of(self._request().get())

    def _request(self) -> "Request":
        return self.owner.client.resource(self.url_path)

    @property
    def url_path(self) -> str:
        return f"{self.owner.type}/{self.owner.id}/relationships/{self.name}"

    @property
    def value(self) -> RelationshipValue:
        if isinstance(self._value, Unset):
            self._value = self._fetched()
        return self._value

    @property
    def data(
        self,
    ) -> typing.Union[None, "ApiResourceIdentifier", typing.List["ApiResourceIdentifier"]]:
        """
        The related resource identifier, ``None`` for an empty to-one relationship, or a list of
        identifiers for a to-many relationship.
        """
        value = self.value
        if isinstance(value, Single):
            return value.identifier
        elif isinstance(value, Many):
            return list(value.identifiers)
        else:
            raise AssertionError("never get here")

    def get(self) -> "ParseResult":
        """
        Fetch the relationship data from the API, replacing what is currently known about it.
        """
        self.owner._require_id(f'fetch relationship "{self.name}" of')
        result = self._request().get()
        self._value = value_of(result)
        return result

    def replace(self, identifier: typing.Optional["ApiResourceIdentifier"]) -> None:
        self._value = Single(identifier)

    def extend(self, identifiers: typing.Iterable["ApiResourceIdentifier"]) -> None:
        """
        Append identifiers to the relationship. A to-one relationship turns into a to-many
        relationship, keeping the identifier it had.
        """
        current = self._value
        if isinstance(current, Unset):
            existing: typing.Tuple["ApiResourceIdentifier", ...] = ()
        elif isinstance(current, Single):
            existing = (current.identifier,) if current.identifier is not None else ()
        elif isinstance(current, Many):
            existing = current.identifiers
        else:
            raise AssertionError("never get here")
        self._value = Many(existing + tuple(identifiers))

    def to_repr(self) -> LinkageRepr:
        value = self.value
        if isinstance(value, Single):
            return LinkageRepr(
                data=value.identifier.to_repr() if value.identifier is not None else None
            )
        elif isinstance(value, Many):
            return LinkageRepr(data=[identifier.to_repr() for identifier in value.identifiers])
        else:
            raise AssertionError("never get here")

    def __repr__(self):
        return f"Relationship({self.url_path!r}, {self._value!r})"

    def __init__(
        self, name: str, owner: "ApiResourceIdentifier", value: RelationshipValue = UNSET
    ):
        """
        :param str name: the name of the relationship.
        :param ApiResourceIdentifier owner: the resource the relationship belongs to.
        :param RelationshipValue value: the value, if it is already known.
        """
        self.name = name
        self.owner = owner
        self._value = value
        self._fetched = Deferred(self._fetch)


from .identifier import ApiResourceIdentifier  # noqa: E402
from .resource_set import ApiResourceSet  # noqa: E402

if typing.TYPE_CHECKING:
    from ..request import Request  # noqa: E402
    from .parser import ParseResult  # noqa: E402
