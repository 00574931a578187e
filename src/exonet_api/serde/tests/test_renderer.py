import datetime
import decimal

import pytest

from ..models import (
    LinkageRepr,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
)


@pytest.fixture
def target_class():
    from ..renderer import ReprRenderer

    return ReprRenderer


def test_singleton(target_class):
    target = target_class()

    result = target(
        SingletonDocumentRepr(
            data=ResourceRepr(
                type="dns_records",
                id=None,
                attributes=[
                    ("name", "www"),
                    ("ttl", 3600),
                ],
                relationships=[
                    (
                        "zone",
                        LinkageRepr(data=ResourceIdRepr(type="dns_zones", id="VX09kwR3KxNo")),
                    ),
                    (
                        "tags",
                        LinkageRepr(
                            data=[
                                ResourceIdRepr(type="tags", id="1"),
                                ResourceIdRepr(type="tags", id="2"),
                            ]
                        ),
                    ),
                    ("owner", LinkageRepr(data=None)),
                ],
            ),
        ),
    )

    assert result == {
        "data": {
            "type": "dns_records",
            "attributes": {
                "name": "www",
                "ttl": 3600,
            },
            "relationships": {
                "zone": {"data": {"type": "dns_zones", "id": "VX09kwR3KxNo"}},
                "tags": {
                    "data": [
                        {"type": "tags", "id": "1"},
                        {"type": "tags", "id": "2"},
                    ]
                },
                "owner": {"data": None},
            },
        },
    }


def test_singleton_with_id(target_class):
    result = target_class()(
        SingletonDocumentRepr(
            data=ResourceRepr(type="tickets", id="VX09kwR3KxNo", attributes=[("unread", False)])
        )
    )

    assert result == {
        "data": {"type": "tickets", "id": "VX09kwR3KxNo", "attributes": {"unread": False}}
    }


def test_linkage(target_class):
    result = target_class()(LinkageRepr(data=[ResourceIdRepr(type="tickets", id="1")]))

    assert result == {"data": [{"type": "tickets", "id": "1"}]}


def test_attribute_values(target_class):
    target = target_class()

    result = target(
        SingletonDocumentRepr(
            data=ResourceRepr(
                type="invoices",
                id="1",
                attributes=[
                    ("due", datetime.date(2020, 1, 31)),
                    (
                        "sent",
                        datetime.datetime(2020, 1, 1, 12, 0, tzinfo=datetime.timezone.utc),
                    ),
                    ("total", decimal.Decimal("12.50")),
                    ("lines", [{"amount": decimal.Decimal("1.5")}]),
                    ("pdf", b"%PDF"),
                ],
            ),
        ),
    )

    assert result["data"]["attributes"] == {
        "due": "2020-01-31",
        "sent": "2020-01-01T12:00:00+00:00",
        "total": "12.50",
        "lines": [{"amount": "1.5"}],
        "pdf": "JVBERg==",
    }


def test_naive_datetime(target_class):
    naive = ResourceRepr(
        type="invoices", id="1", attributes=[("sent", datetime.datetime(2020, 1, 1, 12, 0))]
    )

    with pytest.raises(ValueError):
        target_class()(SingletonDocumentRepr(data=naive))

    result = target_class(assume_naive_timezone_as=datetime.timezone.utc)(
        SingletonDocumentRepr(data=naive)
    )
    assert result["data"]["attributes"]["sent"] == "2020-01-01T12:00:00+00:00"


def test_unsupported_type(target_class):
    with pytest.raises(TypeError) as e:
        target_class()(
            SingletonDocumentRepr(
                data=ResourceRepr(type="tickets", id="1", attributes=[("x", object())])
            )
        )

    assert str(e.value).startswith("/data/attributes/x: unsupported type")
