"""
:py:mod:`exonet_api.serde.deserializer` turns response bodies into the representations of
:py:mod:`exonet_api.serde.models`.

Deserialization happens in two phases. :py:meth:`ReprDeserializer.decode` parses the raw body into
plain JSON values; calling the deserializer then classifies the decoded value by explicit presence
checks on ``data``:

* an array becomes a :py:class:`CollectionDocumentRepr`,
* an object with non-null ``attributes`` becomes a :py:class:`SingletonDocumentRepr`,
* anything else becomes a :py:class:`ToOneRelDocumentRepr` (a bare resource identifier).

Problems are collected along with the location they were found at, and reported together in a
single :py:class:`DeserializationError`.
"""

import collections.abc
import json
import typing

from .exceptions import DeserializationError, DeserializationErrorItem
from .models import (
    CollectionDocumentRepr,
    DataDocumentRepr,
    ErrorDocumentRepr,
    ErrorRepr,
    JSONObject,
    JSONValue,
    LinkageRepr,
    LinksRepr,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
    SourceRepr,
    ToOneRelDocumentRepr,
)
from .utils import JSONPointer

_LINK_MEMBERS = {
    "self": "self_",
    "related": "related",
    "next": "next",
    "prev": "prev",
    "first": "first",
    "last": "last",
}


class ErrorCollectingContext:
    errors: typing.List[DeserializationErrorItem]

    def validation_error_occurred(self, pointer: JSONPointer, message: str) -> None:
        self.errors.append(DeserializationErrorItem(pointer, message))

    def __init__(self):
        self.errors = []


def _type_name(value: JSONValue) -> str:
    if value is None:
        return "null"
    elif isinstance(value, bool):
        return "boolean"
    elif isinstance(value, (int, float)):
        return "number"
    elif isinstance(value, str):
        return "string"
    elif isinstance(value, collections.abc.Mapping):
        return "object"
    else:
        return "array"


def _is_array(value: JSONValue) -> bool:
    return isinstance(value, collections.abc.Sequence) and not isinstance(value, (str, bytes))


class ReprDeserializer:
    def _expect_object(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[JSONObject]:
        if not isinstance(value, collections.abc.Mapping):
            ctx.validation_error_occurred(
                pointer, f"value has type {_type_name(value)} where object expected"
            )
            return None
        return value

    def _convert_meta(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONObject
    ) -> typing.Optional[typing.Dict[str, typing.Any]]:
        if "meta" not in value:
            return None
        meta = self._expect_object(ctx, pointer / "meta", value["meta"])
        return dict(meta) if meta is not None else None

    def _convert_links(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[LinksRepr]:
        links = self._expect_object(ctx, pointer, value)
        if links is None:
            return None
        retval = LinksRepr(_source_=pointer)
        for k, attr in _LINK_MEMBERS.items():
            link = links.get(k)
            if isinstance(link, collections.abc.Mapping):
                link = link.get("href")
            if link is not None and not isinstance(link, str):
                ctx.validation_error_occurred(
                    pointer / k, f"value has type {_type_name(link)} where string expected"
                )
                continue
            setattr(retval, attr, link)
        return retval

    def _convert_type_and_id(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONObject
    ) -> typing.Tuple[typing.Optional[str], typing.Optional[str]]:
        type_ = value.get("type")
        if "type" not in value:
            ctx.validation_error_occurred(pointer / "type", 'value must have a property "type"')
        elif not isinstance(type_, str):
            ctx.validation_error_occurred(
                pointer / "type", f"value has type {_type_name(type_)} where string expected"
            )
            type_ = None

        id_ = value.get("id")
        if id_ is not None and not isinstance(id_, str):
            ctx.validation_error_occurred(
                pointer / "id", f"value has type {_type_name(id_)} where string expected"
            )
            id_ = None
        return type_, id_

    def _convert_resource_id(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[ResourceIdRepr]:
        obj = self._expect_object(ctx, pointer, value)
        if obj is None:
            return None
        type_, id_ = self._convert_type_and_id(ctx, pointer, obj)
        if type_ is None:
            return None
        return ResourceIdRepr(
            type=type_,
            id=id_,
            meta=self._convert_meta(ctx, pointer, obj),
            _source_=pointer,
        )

    def _convert_linkage(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[LinkageRepr]:
        obj = self._expect_object(ctx, pointer, value)
        if obj is None:
            return None

        links: typing.Optional[LinksRepr] = None
        if "links" in obj:
            links = self._convert_links(ctx, pointer / "links", obj["links"])

        data: typing.Union[None, ResourceIdRepr, typing.Sequence[ResourceIdRepr]] = None
        if "data" in obj:
            data_ = obj["data"]
            if _is_array(data_):
                items = []
                for i, item in enumerate(data_):
                    id_repr = self._convert_resource_id(ctx, (pointer / "data")[i], item)
                    if id_repr is not None:
                        items.append(id_repr)
                data = items
            elif data_ is not None:
                data = self._convert_resource_id(ctx, pointer / "data", data_)

        return LinkageRepr(
            data=data,
            has_data="data" in obj,
            links=links,
            meta=self._convert_meta(ctx, pointer, obj),
            _source_=pointer,
        )

    def _convert_resource(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONObject
    ) -> typing.Optional[ResourceRepr]:
        type_, id_ = self._convert_type_and_id(ctx, pointer, value)

        attributes_ = self._expect_object(ctx, pointer / "attributes", value["attributes"])

        relationships: typing.List[typing.Tuple[str, LinkageRepr]] = []
        if "relationships" in value:
            relationships_ = self._expect_object(
                ctx, pointer / "relationships", value["relationships"]
            )
            if relationships_ is not None:
                for k, v in relationships_.items():
                    linkage = self._convert_linkage(ctx, pointer / "relationships" / k, v)
                    if linkage is not None:
                        relationships.append((k, linkage))

        links: typing.Optional[LinksRepr] = None
        if "links" in value:
            links = self._convert_links(ctx, pointer / "links", value["links"])

        if type_ is None or attributes_ is None:
            return None

        return ResourceRepr(
            type=type_,
            id=id_,
            attributes=attributes_.items(),
            relationships=relationships,
            links=links,
            meta=self._convert_meta(ctx, pointer, value),
            _source_=pointer,
        )

    def _convert_primary(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Union[ResourceRepr, ResourceIdRepr, None]:
        obj = self._expect_object(ctx, pointer, value)
        if obj is None:
            return None
        if obj.get("attributes") is not None:
            return self._convert_resource(ctx, pointer, obj)
        return self._convert_resource_id(ctx, pointer, obj)

    def _convert_error(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[ErrorRepr]:
        obj = self._expect_object(ctx, pointer, value)
        if obj is None:
            return None

        source: typing.Optional[SourceRepr] = None
        source_ = obj.get("source")
        if isinstance(source_, collections.abc.Mapping):
            source = SourceRepr(
                pointer=source_.get("pointer"),
                parameter=source_.get("parameter"),
                _source_=pointer / "source",
            )

        variables = obj.get("variables")
        status = obj.get("status")
        code = obj.get("code")
        return ErrorRepr(
            id=obj.get("id"),
            status=str(status) if status is not None else None,
            code=str(code) if code is not None else None,
            title=obj.get("title"),
            detail=obj.get("detail"),
            source=source,
            variables=dict(variables) if isinstance(variables, collections.abc.Mapping) else {},
            meta=self._convert_meta(ctx, pointer, obj) or {},
            _source_=pointer,
        )

    def decode(self, content: typing.Union[bytes, str]) -> JSONValue:
        """
        Parse a raw response body into plain JSON values.

        :param Union[bytes, str] content: the response body.
        :raises DeserializationError: if the body is not valid JSON.
        """
        try:
            return json.loads(content)
        except ValueError as e:
            raise DeserializationError(
                content if isinstance(content, str) else content.decode("utf-8", "replace"),
                [DeserializationErrorItem(JSONPointer(), f"body is not valid JSON ({e})")],
            ) from e

    def errors(self, document: JSONValue) -> ErrorDocumentRepr:
        """
        Classify an error document. Malformed entries are skipped instead of reported, as this is
        only used to describe a failure that is being raised anyway.
        """
        ctx = ErrorCollectingContext()
        pointer = JSONPointer()
        errors: typing.List[ErrorRepr] = []
        if isinstance(document, collections.abc.Mapping) and _is_array(document.get("errors")):
            for i, item in enumerate(document["errors"]):
                error = self._convert_error(ctx, (pointer / "errors")[i], item)
                if error is not None:
                    errors.append(error)
        return ErrorDocumentRepr(errors=errors, _source_=pointer)

    def __call__(self, document: JSONValue) -> DataDocumentRepr:
        ctx = ErrorCollectingContext()
        pointer = JSONPointer()

        obj = self._expect_object(ctx, pointer, document)
        if obj is None:
            raise DeserializationError(document, ctx.errors)
        if "data" not in obj:
            ctx.validation_error_occurred(pointer / "data", 'value must have a property "data"')
            raise DeserializationError(document, ctx.errors)

        links: typing.Optional[LinksRepr] = None
        if "links" in obj:
            links = self._convert_links(ctx, pointer / "links", obj["links"])
        meta = self._convert_meta(ctx, pointer, obj)

        data = obj["data"]
        retval: DataDocumentRepr
        if _is_array(data):
            items: typing.List[typing.Union[ResourceRepr, ResourceIdRepr]] = []
            for i, item in enumerate(data):
                item_repr = self._convert_primary(ctx, (pointer / "data")[i], item)
                if item_repr is not None:
                    items.append(item_repr)
            retval = CollectionDocumentRepr(data=items, links=links, meta=meta, _source_=pointer)
        elif isinstance(data, collections.abc.Mapping) and data.get("attributes") is not None:
            retval = SingletonDocumentRepr(
                data=self._convert_resource(ctx, pointer / "data", data),
                links=links,
                meta=meta,
                _source_=pointer,
            )
        elif data is None:
            retval = ToOneRelDocumentRepr(data=None, links=links, meta=meta, _source_=pointer)
        else:
            retval = ToOneRelDocumentRepr(
                data=self._convert_resource_id(ctx, pointer / "data", data),
                links=links,
                meta=meta,
                _source_=pointer,
            )

        if ctx.errors:
            raise DeserializationError(document, ctx.errors)
        return retval
