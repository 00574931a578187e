import typing

from ..serde.models import ResourceIdRepr
from ..utils import UNSPECIFIED, UnspecifiedType
from .relation import Relation


class ApiResourceIdentifier:
    """
    Identifies a single resource by its type and id, and keeps track of the relationships that were
    changed through it.

    Instances are never shared: every API call yields new objects, even for the same resource.
    """

    client: "Client"
    _type: str
    _id: typing.Optional[str]
    _relationships: typing.Dict[str, "Relationship"]
    _changed_relationships: typing.Dict[str, None]

    @property
    def type(self) -> str:
        return self._type

    @property
    def id(self) -> typing.Optional[str]:
        return self._id

    @property
    def changed_relationships(self) -> typing.Sequence[str]:
        """
        The names of the relationships that were set, in the order they were first changed.
        """
        return tuple(self._changed_relationships)

    def _require_id(self, action: str) -> str:
        if self._id is None:
            raise ValueError(f"cannot {action} a {self._type} resource without id")
        return self._id

    def get(self) -> "ParseResult":
        """
        Fetch the resource this identifier points to.
        """
        return self.client.resource(self._type).get(self._require_id("get"))

    def delete(self) -> bool:
        """
        Delete this resource, or, when relationships were changed, delete the identifiers that were
        set on them from those relationships instead: one request per changed relationship, in the
        order they were changed.

        This is not transactional. When one of the requests fails, the error is raised right away
        and the relationships handled before it stay deleted.

        :return: ``True`` when every request succeeded.
        """
        resource_id = self._require_id("delete")
        request = self.client.resource(self._type)

        if not self._changed_relationships:
            return request.delete(resource_id)

        for name in self._changed_relationships:
            request.delete(
                f"{resource_id}/relationships/{name}",
                self.client.renderer(self._relationships[name].to_repr()),
            )
        return True

    def related(self, name: str) -> Relation:
        """
        Get a relation definition to other resources. Creating it does not issue a request.
        """
        self._require_id("follow a relation of")
        return Relation(name, self)

    @typing.overload
    def relationship(self, name: str) -> "Relationship":
        ...  # pragma: nocover

    @typing.overload
    def relationship(
        self,
        name: str,
        value: typing.Union[
            None, "ApiResourceIdentifier", typing.Sequence["ApiResourceIdentifier"]
        ],
    ) -> "ApiResourceIdentifier":
        ...  # pragma: nocover

    def relationship(self, name, value=UNSPECIFIED):
        """
        Get the relationship called ``name``, or set its data when a value is given.

        A list of identifiers is appended to the relationship; a single identifier (or ``None``)
        replaces it. Setting marks the relationship as changed and returns the resource itself, so
        calls can be chained.
        """
        relationship = self._relationships.get(name)
        if relationship is None:
            relationship = self._relationships[name] = Relationship(name, self)

        if isinstance(value, UnspecifiedType):
            return relationship

        if isinstance(value, (list, tuple)):
            relationship.extend(value)
        else:
            relationship.replace(value)
        self._changed_relationships.setdefault(name, None)
        return self

    def to_repr(self) -> ResourceIdRepr:
        return ResourceIdRepr(type=self._type, id=self._id)

    def __repr__(self):
        return f"{type(self).__name__}(type={self._type!r}, id={self._id!r})"

    def __init__(self, type: str, id: typing.Optional[str] = None, *, client: "Client"):
        """
        :param str type: the resource type.
        :param Optional[str] id: the resource id, if it has one already.
        :param Client client: the client to make calls with.
        """
        self._type = type
        self._id = id
        self.client = client
        self._relationships = {}
        self._changed_relationships = {}


from .relationship import Relationship  # noqa: E402

if typing.TYPE_CHECKING:
    from ..client import Client  # noqa: E402
    from .parser import ParseResult  # noqa: E402
