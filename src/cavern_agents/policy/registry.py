"""Registry of hunters, derived from the ``short_names`` of Hunter subclasses."""

from __future__ import annotations

from typing import Any, Iterator

from .hunter import Hunter


def _iter_hunter_classes(base: type[Hunter] = Hunter) -> Iterator[type[Hunter]]:
    for subclass in base.__subclasses__():
        yield subclass
        yield from _iter_hunter_classes(subclass)


def _hunter_classes() -> dict[str, type[Hunter]]:
    """Map each short name to the class that declares it."""
    classes: dict[str, type[Hunter]] = {}
    for hunter_class in _iter_hunter_classes():
        # Only names declared on the class itself; subclasses do not inherit a parent's names
        for name in vars(hunter_class).get("short_names", []):
            classes[name] = hunter_class
    return classes


def list_hunter_names() -> tuple[str, ...]:
    return tuple(sorted(_hunter_classes()))


def get_hunter_class(name: str) -> type[Hunter]:
    classes = _hunter_classes()
    if name not in classes:
        available = ", ".join(sorted(classes))
        raise ValueError(f"Unknown hunter '{name}'. Available: {available}")
    return classes[name]


def make_hunter(name: str, **kwargs: Any) -> Hunter:
    """Instantiate a hunter by short name; kwargs override its config."""
    return get_hunter_class(name)(**kwargs)
