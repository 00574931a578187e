from .identifier import ApiResourceIdentifier  # noqa
from .relation import Relation  # noqa
from .relationship import UNSET, Many, Relationship, RelationshipValue, Single, Unset  # noqa
from .resource import ApiResource  # noqa
from .resource_set import ApiResourceSet  # noqa
