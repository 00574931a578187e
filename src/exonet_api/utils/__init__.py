from .types import UNSPECIFIED, UnspecifiedType  # noqa
