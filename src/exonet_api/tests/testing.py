import typing

from ..client import Client

API_URL = "https://unit-test.example.com/"


class SpyAuth:
    """
    An authentication provider that counts how often a token was asked for.
    """

    token: str
    calls: int

    def get_token(self) -> str:
        self.calls += 1
        return self.token

    def __init__(self, token: str = "test-token"):
        self.token = token
        self.calls = 0


def make_client(auth: typing.Optional[typing.Any] = None, **kwargs: typing.Any) -> Client:
    return Client(SpyAuth() if auth is None else auth, API_URL, **kwargs)


def resource_json(
    type: str,
    id: typing.Optional[str],
    attributes: typing.Optional[typing.Mapping[str, typing.Any]] = None,
    relationships: typing.Optional[typing.Mapping[str, typing.Any]] = None,
) -> typing.Dict[str, typing.Any]:
    retval: typing.Dict[str, typing.Any] = {
        "type": type,
        "id": id,
        "attributes": dict(attributes or {}),
    }
    if relationships is not None:
        retval["relationships"] = {k: {"data": v} for k, v in relationships.items()}
    return retval


def collection_json(
    items: typing.Sequence[typing.Mapping[str, typing.Any]], next: typing.Optional[str] = None
) -> typing.Dict[str, typing.Any]:
    return {"data": list(items), "links": {"next": next}}
