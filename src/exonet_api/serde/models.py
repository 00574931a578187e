"""
Classes in :py:mod:`exonet_api.serde.models` are the typed intermediate representation of the
JSON:API documents exchanged with the API. A response body is first decoded into plain JSON values
and then classified into one of these, before any resource structure is built from it.
"""

import dataclasses
import datetime
import decimal
import typing
from collections import OrderedDict

from .utils import JSONPointer

JSONScalar = typing.Union[bool, int, float, str]
JSONArray = typing.Sequence[typing.Any]
JSONObject = typing.Mapping[str, typing.Any]
MutableJSONObject = typing.MutableMapping[str, typing.Any]
JSONValue = typing.Union[JSONScalar, JSONArray, JSONObject, None]

Source = typing.Union[JSONPointer, str]


@dataclasses.dataclass
class Repr:
    """
    The base class for any model objects.
    """

    _source_: typing.Optional[Source] = None


@dataclasses.dataclass
class LinksRepr(Repr):
    """
    :py:class:`LinksRepr` class represents a ``links`` node of JSON:API. The pagination members
    (``next``, ``prev``, ``first``, ``last``) drive the page navigation of resource sets.

    Ref.

    * `Document Links <https://jsonapi.org/format/#document-links>`_
    * `Pagination <https://jsonapi.org/format/#fetching-pagination>`_
    """

    self_: typing.Optional[str] = None
    related: typing.Optional[str] = None
    next: typing.Optional[str] = None
    prev: typing.Optional[str] = None
    first: typing.Optional[str] = None
    last: typing.Optional[str] = None


@dataclasses.dataclass(init=False)
class MetaContainerRepr(Repr):
    """
    :py:class:`MetaContainerRepr` is an abstract base for classes containing ``meta`` node.
    """

    meta: typing.Dict[str, typing.Any] = dataclasses.field(default_factory=dict)

    def __init__(
        self,
        *,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(_source_=_source_)
        self.meta = meta if meta is not None else {}


@dataclasses.dataclass(init=False)
class NodeRepr(MetaContainerRepr):
    """
    :py:class:`NodeRepr` is an abstract base for classes containing ``links`` node.
    """

    links: typing.Optional[LinksRepr] = None

    def __init__(
        self,
        *,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(meta=meta, _source_=_source_)
        self.links = links


@dataclasses.dataclass(init=False)
class ResourceIdRepr(MetaContainerRepr):
    """
    Instances of :py:class:`ResourceIdRepr` represent `Resource Identifier Objects <https://jsonapi.org/format/#document-resource-identifier-objects>`_,
    also known as linkage objects.

    The ``id`` is optional only because a resource that is about to be created has none yet.
    """

    type: str  # type: ignore
    id: typing.Optional[str]  # type: ignore

    def __init__(
        self,
        *,
        type: str,
        id: typing.Optional[str],
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        """
        :param str type: a value for ``type`` property.
        :param Optional[str] id: a value for ``id`` property.
        :param Optional[Dict[str. Any]] meta: a dictionary containing user-defined information.
        :param Union[JSONPointer, str, None] _source_: an object that describes the source of the node.
        """
        super().__init__(meta=meta, _source_=_source_)
        self.type = type
        self.id = id


LinkageData = typing.Union[None, ResourceIdRepr, typing.Sequence[ResourceIdRepr]]


@dataclasses.dataclass(init=False)
class LinkageRepr(NodeRepr):
    """
    :py:class:`LinkageRepr` represents a `Resource Linkage <https://jsonapi.org/format/#document-resource-object-linkage>`_

    ``has_data`` tells a linkage with ``"data": null`` (an empty to-one relationship) apart from
    one that only carries links.
    """

    data: LinkageData = None
    has_data: bool = True

    def __init__(
        self,
        *,
        data: LinkageData = None,
        has_data: bool = True,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(links=links, meta=meta, _source_=_source_)
        self.data = data
        self.has_data = has_data


AttributeScalar = typing.Union[
    datetime.datetime, datetime.date, decimal.Decimal, str, int, float, bool, bytes, None
]
AttributeValue = typing.Union[
    typing.Sequence[typing.Any],
    typing.Mapping[str, typing.Any],
    AttributeScalar,
]


@dataclasses.dataclass(init=False)
class ResourceRepr(NodeRepr):
    """
    :py:class:`ResourceRepr` class represents a `Resource Object <https://jsonapi.org/format/#document-resource-objects>`_.
    """

    type: str  # type: ignore
    id: typing.Optional[str]  # type: ignore
    attributes: typing.Mapping[str, AttributeValue] = dataclasses.field(default_factory=OrderedDict)  # type: ignore
    relationships: typing.Mapping[str, LinkageRepr] = dataclasses.field(default_factory=OrderedDict)  # type: ignore

    def __getitem__(self, name):
        return self.attributes[name]

    def __init__(
        self,
        *,
        type: str,
        id: typing.Optional[str],
        attributes: typing.Iterable[typing.Tuple[str, AttributeValue]] = (),
        relationships: typing.Iterable[typing.Tuple[str, LinkageRepr]] = (),
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        """
        :param str type: a value for ``type`` property.
        :param Optional[str] id: an optional value for ``id`` property.
        :param Iterable[Tuple[str, AttributeValue]] attributes: a sequence of tuples each of which represents a key-value pair of an attribute.
        :param Iterable[Tuple[str, LinkageRepr]] relationships: a sequence of tuples each of which represent a key-value pair of a relationship.
        :param Optional[LinksRepr] links: a value for ``links`` property.
        :param Optional[Dict[str. Any]] meta: a dictionary containing user-defined information.
        :param Union[JSONPointer, str, None] _source_: an object that describes the source of the node.
        """
        super().__init__(links=links, meta=meta, _source_=_source_)
        self.type = type
        self.id = id
        self.attributes = OrderedDict(attributes)
        self.relationships = OrderedDict(relationships)


@dataclasses.dataclass(init=False)
class SourceRepr(Repr):
    """
    :py:class:`SourceRepr` represents a value for the ``source`` property of an `Error Object <https://jsonapi.org/format/#error-objects>`_.
    """

    pointer: typing.Optional[str] = None
    parameter: typing.Optional[str] = None

    def __init__(
        self,
        pointer: typing.Optional[str] = None,
        parameter: typing.Optional[str] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(_source_=_source_)
        self.pointer = pointer
        self.parameter = parameter


@dataclasses.dataclass
class ErrorRepr(NodeRepr):
    """
    An `Error Object <https://jsonapi.org/format/#error-objects>`_. The API puts the values that
    were substituted into ``detail`` (such as the offending ``field``) into ``variables``.
    """

    id: typing.Optional[str] = None
    status: typing.Optional[str] = None
    code: typing.Optional[str] = None
    title: typing.Optional[str] = None
    detail: typing.Optional[str] = None
    source: typing.Optional[SourceRepr] = None
    variables: typing.Dict[str, typing.Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(init=False)
class DocumentReprBase(NodeRepr):
    jsonapi: typing.Dict[str, typing.Any] = dataclasses.field(default_factory=dict)
    errors: typing.Sequence[ErrorRepr] = ()

    def __init__(
        self,
        *,
        jsonapi: typing.Optional[typing.Dict[str, typing.Any]] = None,
        errors: typing.Optional[typing.Sequence[ErrorRepr]] = None,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(links=links, meta=meta, _source_=_source_)
        self.jsonapi = jsonapi if jsonapi is not None else {}
        self.errors = errors or ()


@dataclasses.dataclass(init=False)
class SingletonDocumentRepr(DocumentReprBase):
    """
    A document whose primary data is a single, fully loaded resource.
    """

    data: typing.Optional[ResourceRepr] = None

    def __init__(
        self,
        *,
        data: typing.Optional[ResourceRepr],
        jsonapi: typing.Optional[typing.Dict[str, typing.Any]] = None,
        errors: typing.Optional[typing.Sequence[ErrorRepr]] = None,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(jsonapi=jsonapi, errors=errors, links=links, meta=meta, _source_=_source_)
        self.data = data


@dataclasses.dataclass(init=False)
class CollectionDocumentRepr(DocumentReprBase):
    """
    A document whose primary data is an array. Elements without ``attributes`` stay resource
    identifiers, which is what relationship endpoints of to-many relationships return.
    """

    data: typing.Sequence[typing.Union[ResourceRepr, ResourceIdRepr]] = ()

    def __init__(
        self,
        *,
        data: typing.Sequence[typing.Union[ResourceRepr, ResourceIdRepr]],
        jsonapi: typing.Optional[typing.Dict[str, typing.Any]] = None,
        errors: typing.Optional[typing.Sequence[ErrorRepr]] = None,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(jsonapi=jsonapi, errors=errors, links=links, meta=meta, _source_=_source_)
        self.data = data


@dataclasses.dataclass(init=False)
class ToOneRelDocumentRepr(DocumentReprBase):
    """
    A document whose primary data is a bare resource identifier, or ``null``.
    """

    data: typing.Optional[ResourceIdRepr] = None

    def __init__(
        self,
        *,
        data: typing.Optional[ResourceIdRepr],
        jsonapi: typing.Optional[typing.Dict[str, typing.Any]] = None,
        errors: typing.Optional[typing.Sequence[ErrorRepr]] = None,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(jsonapi=jsonapi, errors=errors, links=links, meta=meta, _source_=_source_)
        self.data = data


@dataclasses.dataclass(init=False)
class ErrorDocumentRepr(DocumentReprBase):
    """
    A document carrying only ``errors``, as returned along with a non-successful status code.
    """

    def __init__(
        self,
        *,
        errors: typing.Sequence[ErrorRepr],
        jsonapi: typing.Optional[typing.Dict[str, typing.Any]] = None,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(jsonapi=jsonapi, errors=errors, links=links, meta=meta, _source_=_source_)


DataDocumentRepr = typing.Union[SingletonDocumentRepr, CollectionDocumentRepr, ToOneRelDocumentRepr]
