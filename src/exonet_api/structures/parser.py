import typing

from ..serde.models import (
    CollectionDocumentRepr,
    DataDocumentRepr,
    LinkageRepr,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
    ToOneRelDocumentRepr,
)
from .identifier import ApiResourceIdentifier
from .relationship import UNSET, Many, RelationshipValue, Single
from .resource import ApiResource
from .resource_set import ApiResourceSet

ParseResult = typing.Union[ApiResource, ApiResourceIdentifier, ApiResourceSet, None]


class DocumentParser:
    """
    Builds the resource structures described by a deserialized document.
    """

    client: "Client"

    def identifier(self, repr_: ResourceIdRepr) -> ApiResourceIdentifier:
        return ApiResourceIdentifier(repr_.type, repr_.id, client=self.client)

    def relationship_value(self, repr_: LinkageRepr) -> RelationshipValue:
        if not repr_.has_data:
            return UNSET
        elif repr_.data is None:
            return Single(None)
        elif isinstance(repr_.data, ResourceIdRepr):
            return Single(self.identifier(repr_.data))
        else:
            return Many(tuple(self.identifier(item) for item in repr_.data))

    def resource(self, repr_: ResourceRepr) -> ApiResource:
        return ApiResource(
            repr_.type,
            repr_.id,
            client=self.client,
            attributes=repr_.attributes.items(),
            relationships=[
                (name, self.relationship_value(linkage))
                for name, linkage in repr_.relationships.items()
            ],
            links=repr_.links,
        )

    def item(self, repr_: typing.Union[ResourceRepr, ResourceIdRepr]) -> ApiResourceIdentifier:
        if isinstance(repr_, ResourceRepr):
            return self.resource(repr_)
        return self.identifier(repr_)

    def __call__(self, document: DataDocumentRepr) -> ParseResult:
        if isinstance(document, CollectionDocumentRepr):
            return ApiResourceSet(
                [self.item(item) for item in document.data],
                client=self.client,
                links=document.links,
            )
        elif isinstance(document, SingletonDocumentRepr):
            return self.resource(document.data) if document.data is not None else None
        elif isinstance(document, ToOneRelDocumentRepr):
            return self.identifier(document.data) if document.data is not None else None
        else:
            raise AssertionError("never get here")

    def __init__(self, client: "Client"):
        self.client = client


if typing.TYPE_CHECKING:
    from ..client import Client  # noqa: E402
