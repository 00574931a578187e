"""
:py:mod:`exonet_api.serde.renderer` renders request payloads from the representations of
:py:mod:`exonet_api.serde.models`.

Synopsis
--------

.. code-block:: python

   renderer = ReprRenderer()

   renderer(
       SingletonDocumentRepr(
           data=ResourceRepr(
               type="dns_records",
               id=None,
               attributes=[("name", "www"), ("ttl", 3600)],
               relationships=[
                   ("zone", LinkageRepr(data=ResourceIdRepr(type="dns_zones", id="VX09kwR3KxNo"))),
               ],
           ),
       ),
   )
   # {"data": {"type": "dns_records", "attributes": {...}, "relationships": {"zone": {"data": {...}}}}}
"""

import base64
import collections.abc
import datetime
import decimal
import typing
from collections import OrderedDict

from .models import (
    AttributeValue,
    JSONScalar,
    LinkageData,
    LinkageRepr,
    MutableJSONObject,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
)
from .utils import JSONPointer


class TZLocalizer(typing.Protocol):
    def localize(self, dt: datetime.datetime) -> datetime.datetime:
        ...  # pragma: nocover


class ReprRenderer:
    _render_decimal_as_str: bool = True
    _assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None

    def _dict_factory(self, items: typing.Iterable[typing.Tuple[str, typing.Any]]):
        return OrderedDict(items)

    def _render_datetime(
        self: "ReprRenderer", path: JSONPointer, repr_: AttributeValue
    ) -> JSONScalar:
        _repr = typing.cast(datetime.datetime, repr_)
        if _repr.tzinfo is None:
            if self._assume_naive_timezone_as is None:
                raise ValueError(f"{path}: naive datetime {_repr}")
            else:
                if hasattr(self._assume_naive_timezone_as, "localize"):
                    _repr = typing.cast(TZLocalizer, self._assume_naive_timezone_as).localize(_repr)
                else:
                    _repr = _repr.replace(tzinfo=self._assume_naive_timezone_as)
        return _repr.astimezone(datetime.timezone.utc).isoformat()

    def _render_date(self: "ReprRenderer", path: JSONPointer, repr_: AttributeValue) -> JSONScalar:
        return typing.cast(datetime.date, repr_).isoformat()

    def _render_decimal(
        self: "ReprRenderer", path: JSONPointer, repr_: AttributeValue
    ) -> JSONScalar:
        _repr = typing.cast(decimal.Decimal, repr_)
        return str(_repr) if self._render_decimal_as_str else float(_repr)

    def _render_bytes(self: "ReprRenderer", path: JSONPointer, repr_: AttributeValue) -> JSONScalar:
        return base64.b64encode(typing.cast(bytes, repr_)).decode("ascii")

    def _render_passthrough(
        self: "ReprRenderer", path: JSONPointer, repr_: AttributeValue
    ) -> JSONScalar:
        return typing.cast(JSONScalar, repr_)

    _supported_types: typing.ClassVar[typing.Dict[type, typing.Callable]] = {
        datetime.datetime: _render_datetime,
        datetime.date: _render_date,
        decimal.Decimal: _render_decimal,
        bytes: _render_bytes,
        str: _render_passthrough,
        int: _render_passthrough,
        float: _render_passthrough,
        bool: _render_passthrough,
        None.__class__: _render_passthrough,
    }

    def _render_value(self, path: JSONPointer, repr_: typing.Any) -> typing.Any:
        # fast pass
        r = self._supported_types.get(type(repr_))
        if r is not None:
            return r(self, path, repr_)

        if isinstance(repr_, collections.abc.Mapping):
            return self._dict_factory(
                (k, self._render_value(path / k, v)) for k, v in repr_.items()
            )
        if isinstance(repr_, collections.abc.Sequence) and not isinstance(repr_, (str, bytes)):
            return [self._render_value(path[i], v) for i, v in enumerate(repr_)]

        for type_, r in self._supported_types.items():
            if isinstance(repr_, type_):
                return r(self, path, repr_)

        raise TypeError(f"{path}: unsupported type {repr_!r}")

    def _render_resource_link(self, path: JSONPointer, repr_: ResourceIdRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {
            "type": repr_.type,
            "id": repr_.id,
        }
        if repr_.meta:
            retval["meta"] = repr_.meta
        return retval

    def _render_linkage_data(self, path: JSONPointer, data: LinkageData) -> typing.Any:
        if data is None:
            return None
        elif isinstance(data, ResourceIdRepr):
            return self._render_resource_link(path, data)
        else:
            return [self._render_resource_link(path[i], item) for i, item in enumerate(data)]

    def _render_relationship(self, path: JSONPointer, repr_: LinkageRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {
            "data": self._render_linkage_data(path / "data", repr_.data),
        }
        if repr_.meta:
            retval["meta"] = repr_.meta
        return retval

    def _render_resource(self, path: JSONPointer, repr_: ResourceRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {"type": repr_.type}
        if repr_.id is not None:
            retval["id"] = repr_.id
        if repr_.attributes:
            retval["attributes"] = self._dict_factory(
                (k, self._render_value(path / "attributes" / k, v))
                for k, v in repr_.attributes.items()
            )
        if repr_.relationships:
            retval["relationships"] = self._dict_factory(
                (k, self._render_relationship(path / "relationships" / k, v))
                for k, v in repr_.relationships.items()
            )
        if repr_.meta:
            retval["meta"] = repr_.meta
        return retval

    def __call__(
        self, repr_: typing.Union[SingletonDocumentRepr, LinkageRepr]
    ) -> MutableJSONObject:
        path = JSONPointer()
        if isinstance(repr_, SingletonDocumentRepr):
            retval: MutableJSONObject = {}
            if repr_.data is not None:
                retval["data"] = self._render_resource(path / "data", repr_.data)
            else:
                retval["data"] = None
            if repr_.meta:
                retval["meta"] = repr_.meta
            return retval
        elif isinstance(repr_, LinkageRepr):
            return self._render_relationship(path, repr_)
        else:
            raise AssertionError("never get here")

    def __init__(
        self,
        render_decimal_as_str: bool = True,
        assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None,
    ):
        self._render_decimal_as_str = render_decimal_as_str
        self._assume_naive_timezone_as = assume_naive_timezone_as
