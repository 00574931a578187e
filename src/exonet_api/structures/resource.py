import types
import typing
from collections import OrderedDict

from ..serde.models import AttributeValue, LinksRepr, ResourceRepr, SingletonDocumentRepr
from ..utils import UNSPECIFIED, UnspecifiedType
from .identifier import ApiResourceIdentifier
from .relationship import Relationship, RelationshipValue


class ApiResource(ApiResourceIdentifier):
    """
    A fully loaded resource: its identifier plus its attributes.

    Attributes are read with ``resource["name"]`` or ``resource.attribute("name")``. Changes made
    with ``resource.attribute("name", value)`` are tracked, and sent by :py:meth:`patch`.

    A new resource is created by building it locally and posting it:

    .. code-block:: python

       record = (
           ApiResource("dns_records", client=client)
           .attribute("name", "www")
           .attribute("content", "192.0.2.1")
           .relationship("zone", client.resource("dns_zones").id("VX09kwR3KxNo"))
       )
       record.post()
    """

    links: typing.Optional[LinksRepr]
    _attributes: "OrderedDict[str, AttributeValue]"
    _changed_attributes: typing.Dict[str, None]

    @property
    def attributes(self) -> typing.Mapping[str, AttributeValue]:
        return types.MappingProxyType(self._attributes)

    @property
    def changed_attributes(self) -> typing.Sequence[str]:
        return tuple(self._changed_attributes)

    def __getitem__(self, name: str) -> AttributeValue:
        return self._attributes[name]

    def __contains__(self, name: str) -> bool:
        return name in self._attributes

    @typing.overload
    def attribute(self, name: str) -> AttributeValue:
        ...  # pragma: nocover

    @typing.overload
    def attribute(self, name: str, value: AttributeValue) -> "ApiResource":
        ...  # pragma: nocover

    def attribute(self, name, value=UNSPECIFIED):
        """
        Get the value of an attribute (``None`` when the resource has no such attribute), or set it
        when a value is given. Setting returns the resource itself.
        """
        if isinstance(value, UnspecifiedType):
            return self._attributes.get(name)
        self._attributes[name] = value
        self._changed_attributes.setdefault(name, None)
        return self

    def to_resource_repr(self, changed_only: bool = False) -> ResourceRepr:
        if changed_only:
            attributes = [(name, self._attributes[name]) for name in self._changed_attributes]
        else:
            attributes = list(self._attributes.items())
        return ResourceRepr(
            type=self.type,
            id=self.id,
            attributes=attributes,
            relationships=[
                (name, self._relationships[name].to_repr()) for name in self._changed_relationships
            ]
            if not changed_only
            else (),
        )

    def post(self) -> "ParseResult":
        """
        Create this resource with its attributes and the relationships that were set on it.

        :return: the resource as created by the API.
        """
        payload = self.client.renderer(SingletonDocumentRepr(data=self.to_resource_repr()))
        return self.client.resource(self.type).post(payload)

    def patch(self) -> bool:
        """
        Send the changed attributes, then every changed relationship to its relationship endpoint,
        one request each. As with :py:meth:`delete`, a failure is raised right away and the requests
        sent before it stay applied.

        :return: ``True`` when every request succeeded.
        """
        request = self.client.resource(self.type)
        resource_id = self._require_id("patch")

        if self._changed_attributes or not self._changed_relationships:
            payload = self.client.renderer(
                SingletonDocumentRepr(data=self.to_resource_repr(changed_only=True))
            )
            request.patch(resource_id, payload)

        for name in self._changed_relationships:
            request.patch(
                f"{resource_id}/relationships/{name}",
                self.client.renderer(self._relationships[name].to_repr()),
            )
        return True

    def __init__(
        self,
        type: str,
        id: typing.Optional[str] = None,
        *,
        client: "Client",
        attributes: typing.Iterable[typing.Tuple[str, AttributeValue]] = (),
        relationships: typing.Iterable[typing.Tuple[str, RelationshipValue]] = (),
        links: typing.Optional[LinksRepr] = None,
    ):
        """
        :param str type: the resource type.
        :param Optional[str] id: the resource id; ``None`` for a resource yet to be created.
        :param Client client: the client to make calls with.
        :param attributes: the attributes, as name-value pairs.
        :param relationships: the relationships that came along with the resource, as pairs.
        :param Optional[LinksRepr] links: the links of the resource.
        """
        super().__init__(type, id, client=client)
        self._attributes = OrderedDict(attributes)
        self._changed_attributes = {}
        self.links = links
        for name, value in relationships:
            self._relationships[name] = Relationship(name, self, value)


if typing.TYPE_CHECKING:
    from ..client import Client  # noqa: E402
    from .parser import ParseResult  # noqa: E402
