"""Read-only multi-value mappings for request headers and query strings.

Both keep the raw data from the ASGI scope and decode lazily. Lookups
return the first value; ``get_list`` returns every value.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs


class _MultiValueMapping(Mapping[str, str]):
    __slots__ = ()

    def _values(self, key: str) -> list[str]:
        raise NotImplementedError

    def __getitem__(self, key: str) -> str:
        values = self._values(key)
        if not values:
            raise KeyError(key)
        return values[0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and bool(self._values(key))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"{type(self).__name__}({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._values(key)
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return self._values(key)


class Headers(_MultiValueMapping):
    """Case-insensitive request headers backed by raw ASGI byte pairs."""

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        self._raw = raw

    def _values(self, key: str) -> list[str]:
        wanted = key.lower().encode("latin-1")
        return [value.decode("latin-1") for name, value in self._raw if name.lower() == wanted]

    def __iter__(self) -> Iterator[str]:
        names = dict.fromkeys(name.decode("latin-1").lower() for name, _ in self._raw)
        return iter(names)

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Raw header byte pairs, as received."""
        return self._raw


class QueryParams(_MultiValueMapping):
    """Parsed query string parameters. Blank values are kept."""

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: bytes = b"") -> None:
        self._raw = query_string
        self._data = parse_qs(query_string.decode("latin-1"), keep_blank_values=True)

    def _values(self, key: str) -> list[str]:
        return list(self._data.get(key, ()))

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    @property
    def raw(self) -> bytes:
        """The undecoded query string."""
        return self._raw
