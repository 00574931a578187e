import typing


class UnspecifiedType:
    """
    Marks an argument the caller left out, for methods where ``None`` is a meaningful value
    (``relationship(name, None)`` clears a to-one relationship, ``relationship(name)`` reads it).
    """

    _singleton: typing.ClassVar[typing.Optional["UnspecifiedType"]] = None

    def __bool__(self):
        return False

    def __repr__(self):
        return "UNSPECIFIED"

    def __new__(cls) -> "UnspecifiedType":
        if cls._singleton is None:
            cls._singleton = object.__new__(cls)
        return cls._singleton


UNSPECIFIED = UnspecifiedType()
