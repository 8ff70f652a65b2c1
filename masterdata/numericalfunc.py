"""Numerical functions used by master data for costs, levels and prices."""

from __future__ import annotations

import enum
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Mapping

from .tables import TableReader

FUNCTION_TABLE = "EntityMNumericalFunctionTable.json"
PARAMETER_GROUP_TABLE = "EntityMNumericalFunctionParameterGroupTable.json"

_MOD32 = 1 << 32


def _i32(value: int) -> int:
    return (value + (1 << 31)) % _MOD32 - (1 << 31)


def _quot(dividend: int, divisor: int) -> int:
    quotient = abs(dividend) // abs(divisor)
    return quotient if (dividend >= 0) == (divisor > 0) else -quotient


class FunctionShape(enum.Enum):
    """The formula a numerical function applies to its parameters."""

    LINEAR = "linear"
    MONOMIAL = "monomial"
    LINEAR_PERMIL = "linear_permil"
    POLYNOMIAL_THIRD = "polynomial_third"
    POLYNOMIAL_THIRD_PERMIL = "polynomial_third_permil"


@dataclass(frozen=True)
class NumericalFunc:
    """A function shape with its parameters; unknown shapes evaluate to zero."""

    shape: FunctionShape | None
    params: tuple[int, ...] = ()

    def evaluate(self, value: int) -> int:
        """Apply the function with 32-bit signed integer arithmetic."""
        p = self.params
        v = _i32(value)
        if self.shape is FunctionShape.LINEAR:
            return _i32(p[1] + _i32(p[0] * v))
        if self.shape is FunctionShape.MONOMIAL:
            base = _i32(v - 1)
            exponent = p[1] if p[1] > 1 else 1
            result = _i32(pow(base, exponent, _MOD32))
            return _i32(result * p[0])
        if self.shape is FunctionShape.LINEAR_PERMIL:
            return _i32(_quot(_i32(p[0] * v), 1000) + p[1])
        if self.shape is FunctionShape.POLYNOMIAL_THIRD:
            acc = _i32(p[1] + _i32(p[0] * v))
            acc = _i32(p[2] + _i32(acc * v))
            return _i32(p[3] + _i32(acc * v))
        if self.shape is FunctionShape.POLYNOMIAL_THIRD_PERMIL:
            cubic = _quot(_i32(_i32(_i32(p[0] * v) * v) * v), 1000)
            square = _quot(_i32(_i32(p[1] * v) * v), 1000)
            linear = _quot(_i32(p[2] * v), 1000)
            return _i32(_i32(_i32(cubic + square) + linear) + p[3])
        return 0


@dataclass
class FunctionResolver:
    """Looks up numerical functions by id."""

    functions: dict[int, NumericalFunc] = field(default_factory=dict)

    def resolve(self, function_id: int) -> NumericalFunc | None:
        return self.functions.get(function_id)


def load_function_resolver(
    tables: TableReader, kinds: Mapping[int, FunctionShape]
) -> FunctionResolver:
    """Build the resolver; ``kinds`` maps the table's function type numbers to shapes."""
    groups: dict[int, list[tuple[int, int]]] = defaultdict(list)
    for raw in tables.read(PARAMETER_GROUP_TABLE):
        groups[int(raw.get("NumericalFunctionParameterGroupId", 0))].append(
            (int(raw.get("ParameterIndex", 0)), int(raw.get("ParameterValue", 0)))
        )

    functions: dict[int, NumericalFunc] = {}
    for raw in tables.read(FUNCTION_TABLE):
        entries = groups.get(int(raw.get("NumericalFunctionParameterGroupId", 0)), [])
        params = [0] * len(entries)
        for index, value in sorted(entries, key=lambda entry: entry[0]):
            if 0 <= index < len(params):
                params[index] = value
        shape = kinds.get(int(raw.get("NumericalFunctionType", 0)))
        functions[int(raw.get("NumericalFunctionId", 0))] = NumericalFunc(shape, tuple(params))
    return FunctionResolver(functions)