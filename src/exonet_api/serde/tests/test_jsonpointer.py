import pytest

from ..utils import JSONPointer


@pytest.mark.parametrize(
    ("pointer", "expected"),
    [
        (JSONPointer(), "/"),
        (JSONPointer() / "data", "/data"),
        ((JSONPointer() / "data")[0] / "id", "/data/0/id"),
        (JSONPointer("data", "a/b", "c~d"), "/data/a~1b/c~0d"),
    ],
)
def test_str(pointer, expected):
    assert str(pointer) == expected
    assert JSONPointer(expected) == pointer
    assert pointer == expected


def test_hash():
    assert hash(JSONPointer("/data/0")) == hash(JSONPointer("data", "0"))
    assert {JSONPointer("/data"): 1}[JSONPointer() / "data"] == 1
