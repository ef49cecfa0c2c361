from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator


@dataclass(frozen=True, slots=True)
class HeaderColumn:
    index: int
    text: str
    key: str


class HeaderIndex:
    """Ordered header columns of one sheet with a case-insensitive position lookup.

    Header text is trimmed; lookups compare lower-cased text. When two columns
    share a name the last one wins for ``position()``.
    """

    def __init__(self, columns: list[HeaderColumn]) -> None:
        self.columns = columns
        self._positions: dict[str, int] = {}
        for column in columns:
            self._positions[column.key] = column.index

    @classmethod
    def from_cells(cls, cells: Iterable[Any]) -> HeaderIndex:
        columns: list[HeaderColumn] = []
        for index, cell in enumerate(cells):
            text = "" if cell is None else str(cell).strip()
            columns.append(HeaderColumn(index=index, text=text, key=text.lower()))
        return cls(columns)

    def position(self, name: str) -> int | None:
        return self._positions.get(name.strip().lower())

    def __iter__(self) -> Iterator[HeaderColumn]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    @property
    def texts(self) -> list[str]:
        return [column.text for column in self.columns]
