"""A small dense matrix with exact Gauss-Jordan inversion and determinants."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence


class MatrixError(ArithmeticError):
    """Base class of matrix errors."""


class NotInvertibleMatrixError(MatrixError):
    """The matrix has no inverse."""


class IncompatibleMatrixError(MatrixError):
    """The operands' shapes do not fit the operation."""


class NotSquareMatrixError(MatrixError):
    """The operation needs a square matrix."""


def _fmt(value: Any) -> str:
    if isinstance(value, float):
        return format(value, "g")
    return str(value)


class DMatrix:
    """A rows x columns matrix over any numeric type.

    Shapes smaller than 1 are raised to 1. Elements are read and written
    with ``m[i, j]``; ``m[i]`` gives a row as a tuple.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self, n: int = 0, m: int = 0, *, data: Optional[Iterable[Sequence[Any]]] = None
    ) -> None:
        if data is not None:
            rows = [list(row) for row in data]
            if not rows or not rows[0] or any(len(r) != len(rows[0]) for r in rows):
                raise ValueError("data must be a non-empty rectangular table")
            self._rows: List[List[Any]] = rows
        else:
            n, m = max(n, 1), max(m, 1)
            self._rows = [[0] * m for _ in range(n)]

    @property
    def rows(self) -> int:
        return len(self._rows)

    @property
    def columns(self) -> int:
        return len(self._rows[0])

    def __getitem__(self, index):
        if isinstance(index, tuple):
            i, j = index
            return self._rows[i][j]
        return tuple(self._rows[index])

    def __setitem__(self, index, value) -> None:
        if isinstance(index, tuple):
            i, j = index
            self._rows[i][j] = value
            return
        row = list(value)
        if len(row) != self.columns:
            raise IncompatibleMatrixError("row length does not match")
        self._rows[index] = row

    def _copy_rows(self) -> List[List[Any]]:
        return [list(row) for row in self._rows]

    def det(self):
        """Determinant by elimination; zero when no pivot is found."""
        if self.rows != self.columns:
            raise NotSquareMatrixError("determinant of a non-square matrix")
        n = self.rows
        aux = self._copy_rows()
        d = 1
        for i in range(n):
            k = next((k for k in range(i, n) if aux[k][i] != 0), None)
            if k is None:
                return 0
            val = aux[k][i]
            aux[k] = [v / val for v in aux[k]]
            d = d * val
            if k != i:
                aux[k], aux[i] = aux[i], aux[k]
                d = -d
            for j in range(i + 1, n):
                tmp = aux[j][i]
                if tmp != 0:
                    aux[j] = [a - tmp * b for a, b in zip(aux[j], aux[i])]
        return d

    def inv(self) -> DMatrix:
        """Inverse by Gauss-Jordan elimination."""
        if self.rows != self.columns:
            raise NotInvertibleMatrixError("non-square matrix")
        n = self.rows
        aux1 = self._copy_rows()
        aux2 = DMatrix.identity(n)._rows
        for i in range(n):
            k = next((k for k in range(i, n) if aux1[k][i] != 0), None)
            if k is None:
                raise NotInvertibleMatrixError("singular matrix")
            val = aux1[k][i]
            aux1[k] = [v / val for v in aux1[k]]
            aux2[k] = [v / val for v in aux2[k]]
            if k != i:
                aux1[k], aux1[i] = aux1[i], aux1[k]
                aux2[k], aux2[i] = aux2[i], aux2[k]
            for j in range(n):
                if j == i:
                    continue
                tmp = aux1[j][i]
                aux1[j] = [a - tmp * b for a, b in zip(aux1[j], aux1[i])]
                aux2[j] = [a - tmp * b for a, b in zip(aux2[j], aux2[i])]
        return DMatrix(data=aux2)

    def transpose(self) -> DMatrix:
        return DMatrix(data=zip(*self._rows))

    def __mul__(self, other):
        if isinstance(other, DMatrix):
            if self.columns != other.rows:
                raise IncompatibleMatrixError("inner dimensions differ")
            cols = list(zip(*other._rows))
            result = []
            for row in self._rows:
                out = []
                for col in cols:
                    acc = 0
                    for a, b in zip(row, col):
                        acc += a * b
                    out.append(acc)
                result.append(out)
            return DMatrix(data=result)
        return DMatrix(data=[[v * other for v in row] for row in self._rows])

    def __rmul__(self, other):
        return DMatrix(data=[[other * v for v in row] for row in self._rows])

    def _check_same_shape(self, other: DMatrix) -> None:
        if self.rows != other.rows or self.columns != other.columns:
            raise IncompatibleMatrixError("shapes differ")

    def __add__(self, other):
        if not isinstance(other, DMatrix):
            return NotImplemented
        self._check_same_shape(other)
        return DMatrix(
            data=[[a + b for a, b in zip(r1, r2)] for r1, r2 in zip(self._rows, other._rows)]
        )

    def __sub__(self, other):
        if not isinstance(other, DMatrix):
            return NotImplemented
        self._check_same_shape(other)
        return DMatrix(
            data=[[a - b for a, b in zip(r1, r2)] for r1, r2 in zip(self._rows, other._rows)]
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, DMatrix):
            return NotImplemented
        return self._rows == other._rows

    def __str__(self) -> str:
        return "{" + ",".join(
            "{" + ",".join(_fmt(v) for v in row) + "}" for row in self._rows
        ) + "}"

    def __repr__(self) -> str:
        return f"DMatrix(data={self._rows!r})"

    @classmethod
    def identity(cls, n: int) -> DMatrix:
        """The n x n identity matrix."""
        m = cls(n, n)
        for i in range(m.rows):
            m._rows[i][i] = 1
        return m