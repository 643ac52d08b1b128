"""Case-insensitive request headers, decoded once at construction."""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Request headers keyed by lowercased field name.

    Repeated fields fold into one value: ``Cookie`` lines join with
    ``"; "`` (HTTP/2 sends one line per cookie), any other field with
    ``", "``.
    """

    __slots__ = ("_fields",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        fields: dict[str, str] = {}
        for name_b, value_b in raw:
            name = name_b.decode("latin-1").lower()
            value = value_b.decode("latin-1")
            if name in fields:
                value = fields[name] + ("; " if name == "cookie" else ", ") + value
            fields[name] = value
        self._fields = fields

    @classmethod
    def from_dict(cls, headers: Mapping[str, str]) -> "Headers":
        """Build headers from a plain ``name -> value`` mapping."""
        return cls((name.encode("latin-1"), value.encode("latin-1")) for name, value in headers.items())

    def __getitem__(self, key: str) -> str:
        return self._fields[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Headers({self._fields!r})"
