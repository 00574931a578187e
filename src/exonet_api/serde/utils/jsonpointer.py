import typing


def _escape(component: str) -> str:
    return component.replace("~", "~0").replace("/", "~1")


class JSONPointer:
    """
    An immutable `JSON Pointer <https://tools.ietf.org/html/rfc6901>`_ used to locate the node
    of a document a representation was built from, or an error was found at.

    .. code-block:: python

       JSONPointer() / "data" / "attributes"  # -> /data/attributes
       (JSONPointer() / "data")[0]             # -> /data/0
    """

    components: typing.Tuple[str, ...]

    def __truediv__(self, component: str) -> "JSONPointer":
        return JSONPointer(*self.components, component)

    def __getitem__(self, index: int) -> "JSONPointer":
        return JSONPointer(*self.components, str(index))

    def __str__(self) -> str:
        if not self.components:
            return "/"
        return "".join("/" + _escape(c) for c in self.components)

    def __repr__(self) -> str:
        return f"JSONPointer({str(self)!r})"

    def __eq__(self, other: typing.Any) -> bool:
        if isinstance(other, JSONPointer):
            return self.components == other.components
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.components)

    def __init__(self, *components: str):
        if len(components) == 1 and components[0].startswith("/"):
            components = tuple(
                c.replace("~1", "/").replace("~0", "~")
                for c in components[0].split("/")[1:]
                if c
            )
        self.components = tuple(components)
