"""Element counts and sub-shapes of declared types."""

import functools
import typing as tp

from oracle_mocks.errors import Path
from oracle_mocks.types import (
    Array, DeclaredType, Primitive, String, Struct, Tuple, FIELD,
)

class SubShape(tp.NamedTuple):
  label: tp.Union[int, str]  # index, or field name for structs
  type: DeclaredType
  count: int
  offset: int  # start within the parent's flat slice

@functools.lru_cache(maxsize=None)
def element_count(t: DeclaredType) -> int:
  """Number of primitive slots `t` occupies when flattened."""
  match t:
    case Primitive():
      return 1
    case Array(element, length):
      return length * element_count(element)
    case Tuple(fields):
      return sum(element_count(f) for f in fields)
    case Struct(_, fields):
      return sum(element_count(f) for _, f in fields)
    case String(length):
      return length
  raise TypeError(f'Not a declared type: {t!r}')

def _children(t: DeclaredType) -> list[tuple[tp.Union[int, str], DeclaredType]]:
  match t:
    case Primitive():
      return []
    case Array(element, length):
      return [(i, element) for i in range(length)]
    case Tuple(fields):
      return list(enumerate(fields))
    case Struct(_, fields):
      return list(fields)
    case String(length):
      return [(i, FIELD) for i in range(length)]
  raise TypeError(f'Not a declared type: {t!r}')

def sub_shapes(t: DeclaredType) -> list[SubShape]:
  """The immediate sub-shapes of `t`, in flattening order."""
  result = []
  offset = 0
  for label, child in _children(t):
    count = element_count(child)
    result.append(SubShape(label, child, count, offset))
    offset += count
  return result

def leaf_paths(t: DeclaredType) -> list[Path]:
  """The path to every flat slot of `t`, in flattening order."""
  if isinstance(t, Primitive):
    return [()]

  paths = []
  for label, child in _children(t):
    paths.extend((label,) + p for p in leaf_paths(child))
  return paths
