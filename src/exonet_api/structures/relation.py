import typing

from ..request import Request


class Relation(Request):
    """
    A read-only reference from a resource to the resources related to it by ``name``. Nothing is
    fetched until :py:meth:`get` is called, and every call fetches again.

    Being a :py:class:`~exonet_api.request.Request`, a relation can be paginated and filtered:

    .. code-block:: python

       ticket.related("emails").size(10).get()
    """

    name: str
    owner: "ApiResourceIdentifier"

    def __init__(self, name: str, owner: "ApiResourceIdentifier"):
        super().__init__(f"{owner.type}/{owner.id}/{name}", owner.client)
        self.name = name
        self.owner = owner


if typing.TYPE_CHECKING:
    from .identifier import ApiResourceIdentifier  # noqa: E402
