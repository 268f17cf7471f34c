#!/usr/bin/env python3
"""
Fixed-dimension vector type used by the physics core.

Vectors are immutable values: every operation returns a new Vector and the
components live in a tuple, so two instances never share mutable storage.
Arithmetic between vectors of different dimensions raises ValueError.
"""
import math
from typing import Iterable, Iterator, Tuple


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


class Vector:
    """
    An ordered, fixed-length sequence of real components.

    Example:
        >>> Vector(3.0, 4.0).norm()
        5.0
    """

    __slots__ = ("_components",)

    def __init__(self, *components: float):
        if not components:
            raise ValueError("a Vector needs at least one component")
        self._components: Tuple[float, ...] = tuple(float(c) for c in components)

    # -----------------------
    # Accessors
    # -----------------------

    @property
    def components(self) -> Tuple[float, ...]:
        return self._components

    @property
    def dimension(self) -> int:
        return len(self._components)

    @property
    def x(self) -> float:
        return self._components[0]

    @property
    def y(self) -> float:
        return self._components[1]

    def as_tuple(self) -> Tuple[float, ...]:
        return self._components

    def __len__(self) -> int:
        return len(self._components)

    def __getitem__(self, index: int) -> float:
        return self._components[index]

    def __iter__(self) -> Iterator[float]:
        return iter(self._components)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self._components == other._components

    def __hash__(self) -> int:
        return hash(self._components)

    def __repr__(self) -> str:
        return "Vector(" + ", ".join(repr(c) for c in self._components) + ")"

    # -----------------------
    # Vector algebra
    # -----------------------

    def norm(self) -> float:
        """Euclidean norm sqrt(sum of squared components); 0 for the zero vector."""
        return math.sqrt(sum(c * c for c in self._components))

    def normalized(self) -> "Vector":
        """
        Unit vector in the same direction.

        The zero vector has no direction: its components come back as NaN so
        that the degeneracy propagates into whatever uses the result.
        """
        n = self.norm()
        if n == 0.0:
            return Vector(*([math.nan] * self.dimension))
        return self.scalar_product(1.0 / n)

    def scalar_product(self, k: float) -> "Vector":
        return Vector(*(c * k for c in self._components))

    def negative(self) -> "Vector":
        return self.scalar_product(-1.0)

    @staticmethod
    def add(*vectors: "Vector") -> "Vector":
        """Component-wise sum of one or more vectors of equal dimension."""
        return Vector.sum(vectors)

    @staticmethod
    def sum(vectors: Iterable["Vector"]) -> "Vector":
        """
        Sum a non-empty sequence or iterator of vectors.

        Raises ValueError on empty input or when dimensions disagree.
        """
        it = iter(vectors)
        try:
            first = next(it)
        except StopIteration:
            raise ValueError("cannot sum an empty sequence of vectors") from None
        totals = list(first._components)
        dim = len(totals)
        for v in it:
            if v.dimension != dim:
                raise ValueError(f"dimension mismatch: {dim} vs {v.dimension}")
            for i, c in enumerate(v._components):
                totals[i] += c
        return Vector(*totals)

    # -----------------------
    # Operators
    # -----------------------

    def __add__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector.add(self, other)

    def __sub__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector.add(self, other.negative())

    def __neg__(self) -> "Vector":
        return self.negative()

    def __mul__(self, k: float) -> "Vector":
        if isinstance(k, Vector):
            return NotImplemented
        return self.scalar_product(k)

    __rmul__ = __mul__
