"""Rebuilds structured values from a flat sequence.

`reshape_from` is the recursive step and reports how many elements it
consumed; `reshape` is the top-level entry point and insists that the whole
sequence is used. Nothing is ever padded or truncated.
"""

import operator
import typing as tp

from oracle_mocks import shapes
from oracle_mocks.errors import (
    ArityMismatch, ExhaustedSequence, Path, ShapeMismatch,
)
from oracle_mocks.types import (
    Array, DeclaredType, Primitive, String, Struct, Tuple,
)

def _read(seq: tp.Sequence, offset: int, path: Path):
  if offset >= len(seq):
    raise ExhaustedSequence(offset, len(seq), path)
  return seq[offset]

def _to_char(element, path: Path) -> str:
  try:
    return chr(operator.index(element))
  except (TypeError, ValueError, OverflowError):
    raise ShapeMismatch(
        path, 'a character code point', repr(element)) from None

def _reshape(seq: tp.Sequence, offset: int, t: DeclaredType, path: Path):
  match t:
    case Primitive():
      return _read(seq, offset, path), 1

    case Array(element, length):
      values = []
      consumed = 0
      for i in range(length):
        value, n = _reshape(seq, offset + consumed, element, path + (i,))
        values.append(value)
        consumed += n
      return values, consumed

    case Tuple(fields):
      values = []
      consumed = 0
      for i, field_type in enumerate(fields):
        value, n = _reshape(seq, offset + consumed, field_type, path + (i,))
        values.append(value)
        consumed += n
      return tuple(values), consumed

    case Struct(_, fields):
      values = {}
      consumed = 0
      for k, field_type in fields:
        value, n = _reshape(seq, offset + consumed, field_type, path + (k,))
        values[k] = value
        consumed += n
      return values, consumed

    case String(length):
      chars = [
          _to_char(_read(seq, offset + i, path + (i,)), path + (i,))
          for i in range(length)
      ]
      return ''.join(chars), length

  raise TypeError(f'Not a declared type: {t!r}')

def reshape_from(
    seq: tp.Sequence,
    offset: int,
    t: DeclaredType,
) -> tuple[tp.Any, int]:
  """Reads one value of type `t` starting at `seq[offset]`.

  Returns:
    The structured value and the number of elements consumed, which is
    always `element_count(t)`.

  Raises:
    ExhaustedSequence: if `seq` ends before the value is complete.
  """
  if offset < 0:
    raise ValueError(f'offset must be non-negative, got {offset}')
  value, consumed = _reshape(seq, offset, t, ())
  assert consumed == shapes.element_count(t)
  return value, consumed

def reshape(seq: tp.Sequence, t: DeclaredType):
  """Reshapes an entire flat sequence into a value of type `t`.

  Raises:
    ExhaustedSequence: if `seq` is shorter than `element_count(t)`.
    ArityMismatch: if `seq` is longer than `element_count(t)`.
  """
  expected = shapes.element_count(t)
  try:
    value, consumed = reshape_from(seq, 0, t)
  except ExhaustedSequence as e:
    e.expected = expected
    raise

  if consumed != len(seq):
    raise ArityMismatch(expected, len(seq))
  return value
