import typing


class AuthProvider(typing.Protocol):
    """
    Anything that hands out the bearer token to put in the ``Authorization`` header.
    """

    def get_token(self) -> str:
        ...  # pragma: nocover


class PersonalAccessToken:
    """
    Authenticates with a personal access token created in the Exonet customer portal.

    :param str token: the token.
    """

    _token: str

    def get_token(self) -> str:
        return self._token

    def __repr__(self):
        return "PersonalAccessToken(***)"

    def __init__(self, token: str):
        self._token = token
