from __future__ import annotations


class NilType:
    """The type of `nil`. Falsy, equal only to itself."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "nil"
    def __bool__(self): return False

    def __eq__(self, other):
        return isinstance(other, NilType)

    def __hash__(self):
        return hash(NilType)

    def __reduce__(self):
        return NilType, ()


Nil = NilType()


def is_truthy(value) -> bool:
    """Only nil and false are falsy; 0, "" and () are all true."""
    return not (value is Nil or value is False)
