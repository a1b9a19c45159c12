"""Class-name generation: canonical declaration strings mapped to stable short names.

The canonical form strips forced-priority markers, splits on ``;``, trims,
drops empties, sorts, and re-joins with ``"; "``. The generated name
therefore does not depend on the order tokens appeared in the source.
"""

from __future__ import annotations

from nml.model.declaration import IMPORTANT

__all__ = ["ClassRegistry", "canonicalize", "hash_canonical", "to_base36"]

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def canonicalize(declarations: str) -> str:
    """Return the order-independent canonical form of a declaration string."""
    cleaned = declarations.replace(IMPORTANT, "")
    parts = sorted(" ".join(p.split()) for p in cleaned.split(";"))
    return "; ".join(p for p in parts if p)


def hash_canonical(canonical: str) -> int:
    """Rolling ``h * 31 + c`` hash over UTF-16 code units, in signed 32-bit arithmetic."""
    h = 0
    data = canonical.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = ((h << 5) - h + unit) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 0x100000000
    return h


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits: list[str] = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


class ClassRegistry:
    """Compile-scoped mapping of canonical declaration strings to class names.

    The same canonical string always yields the same name; a name already bound
    to a different canonical string is never reused (a numeric suffix is added).
    """

    def __init__(self, prefix: str = "n-") -> None:
        self._prefix = prefix
        self._by_canonical: dict[str, str] = {}
        self._by_name: dict[str, str] = {}

    def class_for(self, declarations: str) -> str:
        """Return the class name for *declarations*, registering it if new."""
        canonical = canonicalize(declarations)
        if not canonical:
            raise ValueError("cannot generate a class for an empty declaration set")
        existing = self._by_canonical.get(canonical)
        if existing is not None:
            return existing

        base = f"{self._prefix}{to_base36(abs(hash_canonical(canonical)))}"
        name = base
        suffix = 0
        while name in self._by_name:
            suffix += 1
            name = f"{base}-{suffix}"

        self._by_canonical[canonical] = name
        self._by_name[name] = canonical
        return name

    def canonical_for(self, name: str) -> str | None:
        return self._by_name.get(name)

    def __contains__(self, canonical: str) -> bool:
        return canonicalize(canonical) in self._by_canonical

    def __len__(self) -> int:
        return len(self._by_canonical)
