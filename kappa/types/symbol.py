from __future__ import annotations
import sys

AUTO_GENSYM_SUFFIX = "#"


class Symbol:
    """An interned identifier such as `foo`, `.+` or `&`.

    Names ending in '#' (other than '#' itself) are auto-gensym templates:
    inside a syntax-quote each one is replaced by a fresh unique symbol.
    """

    __slots__ = ("id",)

    def __init__(self, name: str):
        if not isinstance(name, str) or not name:
            raise ValueError(f"Symbol name must be a non-empty string, got {name!r}")
        self.id = sys.intern(name)

    @property
    def is_auto_gensym(self) -> bool:
        return len(self.id) > 1 and self.id.endswith(AUTO_GENSYM_SUFFIX)

    def gensym_prefix(self) -> str:
        """Prefix for the unique symbol replacing an auto-gensym, e.g. `x#` -> `x__`."""
        return self.id[:-len(AUTO_GENSYM_SUFFIX)] + "__"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.id is other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id
