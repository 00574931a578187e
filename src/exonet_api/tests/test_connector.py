import logging

import pytest
import requests
from requests_mock import ANY

from ..client import Client
from ..exceptions import (
    ApiError,
    AuthenticationError,
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    ParseError,
    ServerError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from ..structures import ApiResource, ApiResourceIdentifier, ApiResourceSet
from .testing import API_URL, SpyAuth, collection_json, make_client, resource_json


@pytest.fixture
def client():
    return make_client()


@pytest.fixture
def target(client):
    return client.connector


def test_default_headers(target, requests_mock):
    requests_mock.get(API_URL + "tickets/1", json={"data": resource_json("tickets", "1")})

    target.get("tickets/1")

    headers = requests_mock.last_request.headers
    assert headers["Authorization"] == "Bearer test-token"
    assert headers["Accept"] == "application/vnd.Exonet.v1+json"
    assert headers["Content-Type"] == "application/json"
    assert headers["User-Agent"] == f"exonet-api-python/{Client.CLIENT_VERSION}"


def test_get_resource(target, requests_mock):
    attributes = {"last_message_subject": "Help", "unread": True, "tags": ["a", "b"]}
    requests_mock.get(
        API_URL + "tickets/1", json={"data": resource_json("tickets", "1", attributes)}
    )

    result = target.get("tickets/1")

    assert isinstance(result, ApiResource)
    assert result.type == "tickets"
    assert result.id == "1"
    assert result.attributes == attributes


def test_get_collection(target, requests_mock):
    requests_mock.get(
        API_URL + "tickets",
        json=collection_json([resource_json("tickets", "2"), resource_json("tickets", "1")]),
    )

    result = target.get("tickets")

    assert isinstance(result, ApiResourceSet)
    assert len(result) == 2
    assert [ticket.id for ticket in result] == ["2", "1"]


def test_get_identifier(target, requests_mock):
    requests_mock.get(
        API_URL + "tickets/1/relationships/customer",
        json={"data": {"type": "customers", "id": "7"}},
    )

    result = target.get("tickets/1/relationships/customer")

    assert type(result) is ApiResourceIdentifier
    assert (result.type, result.id) == ("customers", "7")


def test_get_resource_with_null_attributes(target, requests_mock):
    requests_mock.get(
        API_URL + "tickets/1", json={"data": {"type": "tickets", "id": "1", "attributes": None}}
    )

    result = target.get("tickets/1")

    assert type(result) is ApiResourceIdentifier
    assert (result.type, result.id) == ("tickets", "1")


def test_get_absolute_url(target, requests_mock):
    requests_mock.get("https://other.example.com/tickets", json=collection_json([]))

    assert len(target.get("https://other.example.com/tickets")) == 0
    assert requests_mock.call_count == 1


def test_get_recursive(target, requests_mock):
    page_b = API_URL + "tickets?page[number]=2"
    page_c = API_URL + "tickets?page[number]=3"
    requests_mock.get(
        API_URL + "tickets",
        json=collection_json(
            [resource_json("tickets", "1"), resource_json("tickets", "2")], page_b
        ),
    )
    requests_mock.get(page_b, json=collection_json([resource_json("tickets", "3")], page_c))
    requests_mock.get(page_c, json=collection_json([resource_json("tickets", "4")]))

    result = target.get_recursive("tickets")

    assert isinstance(result, ApiResourceSet)
    assert [ticket.id for ticket in result] == ["1", "2", "3", "4"]
    assert requests_mock.call_count == 3
    # requests percent-encodes the brackets of the next links
    assert [(r.path, r.qs) for r in requests_mock.request_history] == [
        ("/tickets", {}),
        ("/tickets", {"page[number]": ["2"]}),
        ("/tickets", {"page[number]": ["3"]}),
    ]


def test_get_recursive_without_links(target, requests_mock):
    requests_mock.get(API_URL + "tickets", json={"data": [resource_json("tickets", "1")]})

    assert [ticket.id for ticket in target.get_recursive("tickets")] == ["1"]
    assert requests_mock.call_count == 1


def test_get_recursive_stops_at_error(target, requests_mock):
    page_b = API_URL + "tickets?page[number]=2"
    requests_mock.get(API_URL + "tickets", json=collection_json([], page_b))
    requests_mock.get(page_b, status_code=500)

    with pytest.raises(ServerError):
        target.get_recursive("tickets")
    assert requests_mock.call_count == 2


def test_get_recursive_requires_collections(target, requests_mock):
    requests_mock.get(API_URL + "tickets/1", json={"data": resource_json("tickets", "1")})

    with pytest.raises(ParseError):
        target.get_recursive("tickets/1")


def test_post(target, requests_mock):
    requests_mock.post(
        API_URL + "tickets", status_code=201, json={"data": resource_json("tickets", "1")}
    )

    result = target.post("tickets", {"data": {"type": "tickets", "attributes": {"a": 1}}})

    assert isinstance(result, ApiResource)
    assert requests_mock.last_request.json() == {
        "data": {"type": "tickets", "attributes": {"a": 1}}
    }


def test_post_without_content(target, requests_mock):
    requests_mock.post(API_URL + "tickets", status_code=204)

    assert target.post("tickets", {"data": {"type": "tickets"}}) is None


def test_patch(target, requests_mock):
    requests_mock.patch(API_URL + "tickets/1", status_code=204)

    assert target.patch("tickets/1", {"data": None}) is True
    assert requests_mock.last_request.json() == {"data": None}


def test_delete_with_body(target, requests_mock):
    requests_mock.delete(API_URL + "tickets/1/relationships/tags", status_code=204)

    body = {"data": [{"type": "tags", "id": "1"}]}
    assert target.delete("tickets/1/relationships/tags", body) is True
    assert requests_mock.last_request.json() == body


@pytest.mark.parametrize(
    "call",
    [
        lambda c: c.get("tickets"),
        lambda c: c.get_recursive("tickets"),
        lambda c: c.post("tickets", {"data": None}),
        lambda c: c.patch("tickets/1", {"data": None}),
        lambda c: c.delete("tickets/1"),
    ],
)
def test_no_auth_dispatches_nothing(requests_mock, call):
    requests_mock.register_uri(ANY, ANY, json={"data": []})
    client = Client(None, API_URL)

    with pytest.raises(AuthenticationError):
        call(client.connector)

    assert requests_mock.call_count == 0


def test_token_is_fetched_per_request(requests_mock):
    auth = SpyAuth()
    client = make_client(auth)
    requests_mock.get(API_URL + "tickets", json=collection_json([]))

    client.connector.get("tickets")
    client.connector.get("tickets")

    assert auth.calls == 2


@pytest.mark.parametrize(
    ("status_code", "error_class"),
    [
        (301, ApiError),
        (400, BadRequestError),
        (401, UnauthorizedError),
        (403, ForbiddenError),
        (404, NotFoundError),
        (409, ApiError),
        (422, ValidationError),
        (500, ServerError),
        (503, ServerError),
    ],
)
def test_error_classification(target, requests_mock, status_code, error_class):
    requests_mock.get(API_URL + "tickets/1", status_code=status_code, text="")

    with pytest.raises(error_class) as e:
        target.get("tickets/1")

    assert type(e.value) is error_class
    assert e.value.status_code == status_code
    assert e.value.errors == ()
    assert str(e.value) == f"The API returned an unexpected status code ({status_code})"


def test_error_body(target, requests_mock):
    requests_mock.get(
        API_URL + "tickets/1",
        status_code=404,
        json={
            "errors": [
                {
                    "status": 404,
                    "code": "101.10001",
                    "title": "Not Found",
                    "detail": "The ticket does not exist.",
                }
            ]
        },
    )

    with pytest.raises(NotFoundError) as e:
        target.get("tickets/1")

    assert str(e.value) == "The ticket does not exist."
    assert e.value.code == "101.10001"
    assert e.value.detail == "The ticket does not exist."


def test_validation_errors(target, requests_mock):
    requests_mock.post(
        API_URL + "dns_records",
        status_code=422,
        json={
            "errors": [
                {
                    "status": 422,
                    "code": "102.10001",
                    "detail": "The name field is required.",
                    "variables": {"field": "name"},
                },
                {
                    "status": 422,
                    "code": "102.10002",
                    "detail": "The content must be an IP address.",
                    "variables": {"field": "content"},
                },
                {"status": 422, "code": "102.10003", "detail": "The zone is locked."},
            ]
        },
    )

    with pytest.raises(ValidationError) as e:
        target.post("dns_records", {"data": {"type": "dns_records"}})

    assert str(e.value) == "There are 3 validation errors."
    assert len(e.value.errors) == 3
    assert e.value.field_errors == {
        "name": ["The name field is required."],
        "content": ["The content must be an IP address."],
        "generic": ["The zone is locked."],
    }


def test_error_is_logged(client, target, requests_mock, caplog):
    requests_mock.delete(API_URL + "tickets/1", status_code=403, json={"errors": []})

    with caplog.at_level(logging.ERROR, logger="exonet_api"):
        with pytest.raises(ForbiddenError):
            target.delete("tickets/1")

    (record,) = [r for r in caplog.records if r.name.startswith("exonet_api")]
    assert record.levelno == logging.ERROR
    assert record.statusCode == 403
    assert record.url == API_URL + "tickets/1"


def test_requests_are_logged(target, requests_mock, caplog):
    requests_mock.get(API_URL + "tickets", json=collection_json([]))

    with caplog.at_level(logging.DEBUG, logger="exonet_api"):
        target.get("tickets")

    records = [r for r in caplog.records if r.name.startswith("exonet_api")]
    assert [(r.levelno, r.getMessage()) for r in records] == [
        (logging.DEBUG, "Sending [GET] request"),
        (logging.DEBUG, "Request completed"),
    ]
    assert records[0].url == API_URL + "tickets"
    assert records[1].statusCode == 200


def test_custom_logger(requests_mock):
    logger = logging.getLogger("custom")
    records = []

    class Handler(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = Handler()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        client = make_client(logger=logger)
        requests_mock.get(API_URL + "tickets", json=collection_json([]))
        client.connector.get("tickets")
    finally:
        logger.removeHandler(handler)

    assert [r.getMessage() for r in records] == ["Sending [GET] request", "Request completed"]


@pytest.mark.parametrize(
    "body",
    [b"<html>Bad gateway</html>", b'{"meta": {}}', b"[]", b'{"data": {"id": "1"}}'],
)
def test_parse_error(target, requests_mock, body):
    requests_mock.get(API_URL + "tickets/1", content=body)

    with pytest.raises(ParseError) as e:
        target.get("tickets/1")

    assert e.value.errors


def test_transport_error(target, requests_mock):
    requests_mock.get(API_URL + "tickets", exc=requests.exceptions.ConnectTimeout)

    with pytest.raises(TransportError) as e:
        target.get("tickets")

    assert e.value.url == API_URL + "tickets"
    assert isinstance(e.value.__cause__, requests.exceptions.ConnectTimeout)


def test_timeout_is_passed_on(requests_mock):
    client = make_client(timeout=2.5)
    requests_mock.get(API_URL + "tickets", json=collection_json([]))

    client.connector.get("tickets")

    assert requests_mock.last_request.timeout == 2.5
