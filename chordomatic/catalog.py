"""Static chord catalog: the fixed key list and chord-shape templates."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Final

from chordomatic.chord_shape import ChordShape

KEYS: Final[tuple[str, ...]] = (
    "A", "Ab", "B", "Bb", "C", "C#", "D", "E", "Eb", "F", "F#", "G",
)

#: suffix -> (encoding, barre fret). Templates are shared by every key.
CHORD_TEMPLATES: Final[tuple[tuple[str, str, int], ...]] = (
    ("m", "x32010", 0),
    ("11", "0320xx", 0),
    ("m7", "x22010", 2),
    ("m9", "0320xx", 0),
    ("major", "57756x", 5),
    ("dim7", "02200x", 2),
    ("aug9", "8a89a8", 8),
)


class ChordCatalog:
    """Read-only view over the keys and chord shapes available for selection."""

    def __init__(self, keys: tuple[str, ...], shapes: Mapping[str, ChordShape]) -> None:
        self._keys = keys
        self._shapes = MappingProxyType(dict(shapes))

    @property
    def keys(self) -> tuple[str, ...]:
        return self._keys

    @property
    def suffixes(self) -> tuple[str, ...]:
        return tuple(self._shapes)

    @property
    def shapes(self) -> Mapping[str, ChordShape]:
        return self._shapes

    def knows_key(self, name: str) -> bool:
        return name in self._keys

    def shape(self, suffix: str) -> ChordShape:
        """
        Look up the shape template for ``suffix``.

        Raises:
            KeyError: If no template exists for the suffix.
        """
        return self._shapes[suffix]

    def __iter__(self) -> Iterator[ChordShape]:
        return iter(self._shapes.values())

    def __len__(self) -> int:
        return len(self._shapes)


def build_catalog(
    keys: tuple[str, ...],
    templates: tuple[tuple[str, str, int], ...],
) -> ChordCatalog:
    """
    Validate templates and build a catalog.

    Raises:
        InvalidEncodingError: If any template encoding is malformed.
        ValueError: If a suffix appears twice.
    """
    shapes: dict[str, ChordShape] = {}
    for suffix, encoding, barre in templates:
        if suffix in shapes:
            raise ValueError(f"Duplicate chord suffix '{suffix}' in catalog.")
        shapes[suffix] = ChordShape.from_encoding(suffix, encoding, barre)
    return ChordCatalog(keys, shapes)


@lru_cache(maxsize=1)
def load_catalog() -> ChordCatalog:
    """Return the built-in catalog, validated once per process."""
    return build_catalog(KEYS, CHORD_TEMPLATES)
