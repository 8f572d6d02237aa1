"""Sudoku puzzles encoded as CNF formulas.

A puzzle of block dimension `dim` has a `dim*dim` by `dim*dim` grid. Cells
hold 1..size, or 0 for a blank.
"""

from __future__ import annotations

from itertools import combinations
from typing import Iterable, List, Optional, Sequence, Tuple

from core import BoolLiteral, Clause, Formula, Variable
from env import Bool, Environment
from errors import SudokuParseError
from solver import solve

Cell = Tuple[int, int]


class Sudoku:
    """
    An immutable, possibly partially filled Sudoku grid.

    occupies(i, j, k) is the variable "value k+1 is in row i, column j",
    all indices 0-based.
    """

    def __init__(self, dim: int, square: Optional[Sequence[Sequence[int]]] = None):
        if dim < 1:
            raise ValueError(f"dimension must be positive, got {dim}")
        self.dim = dim
        self.size = dim * dim
        if square is None:
            square = [[0] * self.size for _ in range(self.size)]
        self.square: Tuple[Tuple[int, ...], ...] = tuple(tuple(row) for row in square)
        self._check_rep()

    def _check_rep(self) -> None:
        assert len(self.square) == self.size, "Sudoku: wrong number of rows"
        for row in self.square:
            assert len(row) == self.size, "Sudoku: wrong number of columns"
            for value in row:
                assert 0 <= value <= self.size, f"Sudoku: value {value} out of range"

    @staticmethod
    def from_lines(dim: int, lines: Iterable[str]) -> Sudoku:
        """
        One line per row, one character per cell: a digit if known, "."
        otherwise. Only dimensions up to 3 fit this format.
        """
        size = dim * dim
        rows: List[List[int]] = []
        for line_no, raw_line in enumerate(lines, start=1):
            line = raw_line.rstrip("\r\n")
            if not line.strip():
                continue
            if len(rows) >= size:
                raise SudokuParseError("too many rows", line=line_no)
            if len(line) != size:
                raise SudokuParseError(f"expected {size} columns, got {len(line)}", line=line_no)
            row: List[int] = []
            for ch in line:
                if ch == ".":
                    row.append(0)
                elif ch in "123456789" and int(ch) <= size:
                    row.append(int(ch))
                else:
                    raise SudokuParseError(f"unexpected character {ch!r}", line=line_no)
            rows.append(row)
        if len(rows) != size:
            raise SudokuParseError(f"expected {size} rows, got {len(rows)}")
        return Sudoku(dim, rows)

    @staticmethod
    def from_file(dim: int, path: str) -> Sudoku:
        with open(path, "r") as f:
            return Sudoku.from_lines(dim, f)

    def __repr__(self) -> str:
        return f"Sudoku(dim={self.dim})\n{self}"

    def __str__(self) -> str:
        lines = []
        for row in self.square:
            lines.append(" ".join(str(v) if v else "." for v in row))
        return "\n".join(lines) + "\n"

    def __eq__(self, other) -> bool:
        return isinstance(other, Sudoku) and self.dim == other.dim and self.square == other.square

    def __hash__(self) -> int:
        return hash((self.dim, self.square))

    def is_solved(self) -> bool:
        """Every cell filled and every row, column and block a permutation."""
        expected = set(range(1, self.size + 1))
        return all({self.square[i][j] for i, j in group} == expected for group in self._groups())

    @staticmethod
    def occupies(i: int, j: int, k: int) -> Variable:
        return Variable(f"occupies({i},{j},{k})")

    def _rows(self) -> List[List[Cell]]:
        return [[(i, j) for j in range(self.size)] for i in range(self.size)]

    def _columns(self) -> List[List[Cell]]:
        return [[(i, j) for i in range(self.size)] for j in range(self.size)]

    def _blocks(self) -> List[List[Cell]]:
        blocks = []
        for x_block in range(self.dim):
            for y_block in range(self.dim):
                blocks.append([
                    (x_block * self.dim + i, y_block * self.dim + j)
                    for i in range(self.dim)
                    for j in range(self.dim)
                ])
        return blocks

    def _groups(self) -> List[List[Cell]]:
        return self._rows() + self._columns() + self._blocks()

    def to_formula(self) -> Formula:
        """
        The puzzle as CNF: known cells as unit clauses, at most one value per
        cell, and every row, column and block holding each value exactly once.
        """
        clauses: List[Clause] = []

        for i in range(self.size):
            for j in range(self.size):
                if self.square[i][j]:
                    clauses.append(Clause(BoolLiteral.make_pos(self.occupies(i, j, self.square[i][j] - 1))))

        for i in range(self.size):
            for j in range(self.size):
                for k, kp in combinations(range(self.size), 2):
                    clauses.append(Clause(
                        BoolLiteral.make_neg(self.occupies(i, j, k)),
                        BoolLiteral.make_neg(self.occupies(i, j, kp)),
                    ))

        for group in self._groups():
            for k in range(self.size):
                # at least once
                clauses.append(Clause(*[BoolLiteral.make_pos(self.occupies(i, j, k)) for i, j in group]))
                # at most once
                for (i, j), (ip, jp) in combinations(group, 2):
                    clauses.append(Clause(
                        BoolLiteral.make_neg(self.occupies(i, j, k)),
                        BoolLiteral.make_neg(self.occupies(ip, jp, k)),
                    ))

        return Formula(*clauses)

    def interpret_solution(self, environment: Optional[Environment]) -> Optional[Sudoku]:
        """
        The grid filled in from a satisfying environment of to_formula(),
        or None when there is no solution.
        """
        if environment is None:
            return None
        square = [[0] * self.size for _ in range(self.size)]
        for i in range(self.size):
            for j in range(self.size):
                for k in range(self.size):
                    if environment.get(self.occupies(i, j, k)) is Bool.TRUE:
                        square[i][j] = k + 1
        return Sudoku(self.dim, square)

    def solve(self) -> Optional[Sudoku]:
        return self.interpret_solution(solve(self.to_formula()))
