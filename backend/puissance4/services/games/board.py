from typing import List, Tuple

from .errors import ColumnFullError, InvalidColumnError

EMPTY = 0
CONNECT = 4

# (row step, column step): horizontal, vertical, "/" and "\"
DIRECTIONS = ((0, 1), (1, 0), (1, 1), (1, -1))


class Board:
    """Row-major grid; row 0 is the bottom row.

    Cells hold EMPTY or a player's 1-based mark. Marks only ever land on the
    lowest empty row of a column, so occupied cells stay bottom-contiguous.
    """

    def __init__(self, width: int = 7, height: int = 6):
        if width < 1 or height < 1:
            raise ValueError(f'Board must be at least 1x1, got {width}x{height}')
        self.width = width
        self.height = height
        self._cells: List[List[int]] = [[EMPTY] * width for _ in range(height)]

    def clear(self) -> None:
        self._cells = [[EMPTY] * self.width for _ in range(self.height)]

    def cell(self, row: int, column: int) -> int:
        return self._cells[row][column]

    def is_valid_column(self, column) -> bool:
        # bool is an int subclass; True must not mean column 1
        if isinstance(column, bool) or not isinstance(column, int):
            return False
        return 0 <= column < self.width

    def lowest_empty_row(self, column: int):
        for row in range(self.height):
            if self._cells[row][column] == EMPTY:
                return row
        return None

    def drop(self, column, mark: int) -> int:
        """Place `mark` in `column` and return the row it landed on."""
        if not self.is_valid_column(column):
            raise InvalidColumnError()
        row = self.lowest_empty_row(column)
        if row is None:
            raise ColumnFullError()
        self._cells[row][column] = mark
        return row

    def count_line(self, row: int, column: int, d_row: int, d_col: int) -> int:
        """Contiguous marks through (row, column) along one direction, both senses."""
        mark = self._cells[row][column]
        count = 1
        for sign in (1, -1):
            r, c = row + sign * d_row, column + sign * d_col
            while 0 <= r < self.height and 0 <= c < self.width and self._cells[r][c] == mark:
                count += 1
                r += sign * d_row
                c += sign * d_col
        return count

    def is_winning_cell(self, row: int, column: int) -> bool:
        if self._cells[row][column] == EMPTY:
            return False
        return any(self.count_line(row, column, dr, dc) >= CONNECT for dr, dc in DIRECTIONS)

    def is_full(self) -> bool:
        return all(cell != EMPTY for row in self._cells for cell in row)

    def rows(self) -> Tuple[Tuple[int, ...], ...]:
        return tuple(tuple(row) for row in self._cells)

    def render(self) -> str:
        return '\n'.join(' '.join(str(cell) for cell in row) for row in reversed(self._cells))

    def __str__(self):
        return self.render()
