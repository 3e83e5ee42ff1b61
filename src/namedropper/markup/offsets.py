from bisect import bisect_right
from collections.abc import Iterator, Mapping


class AdjustmentTable(Mapping):
    """Stripped-text offset -> cumulative number of markup characters removed.

    Keys are kept in two parallel sorted lists so that the floor lookup is a
    binary search. Built once by the stripper and read-only afterwards.
    """

    def __init__(self, pairs: list[tuple[int, int]] | None = None) -> None:
        self._positions: list[int] = []
        self._removed: list[int] = []
        for position, removed in pairs or ():
            self._add(position, removed)

    def _add(self, position: int, removed: int) -> None:
        if not self._positions or position > self._positions[-1]:
            self._positions.append(position)
            self._removed.append(removed)
        elif position == self._positions[-1]:
            # back-to-back tags land on the same stripped offset
            self._removed[-1] = removed
        else:
            raise ValueError(f"Adjustment positions must increase: {position} after {self._positions[-1]}")

    def __getitem__(self, position: int) -> int:
        i = bisect_right(self._positions, position)
        if i and self._positions[i - 1] == position:
            return self._removed[i - 1]
        raise KeyError(position)

    def __iter__(self) -> Iterator[int]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        return f"AdjustmentTable({dict(self)!r})"

    def floor(self, position: int) -> int:
        """Removed-character count at the greatest key <= position, 0 if there is none."""
        i = bisect_right(self._positions, position)
        if i < 1:
            return 0
        return self._removed[i - 1]

    @property
    def total_removed(self) -> int:
        return self._removed[-1] if self._removed else 0


def remap(stripped_offset: int, table: AdjustmentTable, base_offset: int = 0) -> int:
    """Convert an offset in stripped-text coordinates to a document offset."""
    return stripped_offset + table.floor(stripped_offset) + base_offset
