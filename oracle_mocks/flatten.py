"""Flattens structured values into their canonical flat sequence."""

import typing as tp

import numpy as np

from oracle_mocks.errors import Path, ShapeMismatch
from oracle_mocks.types import (
    Array, DeclaredType, Primitive, String, Struct, Tuple,
)

def _describe(value) -> str:
  if isinstance(value, np.ndarray):
    return f'ndarray of shape {value.shape}'
  if isinstance(value, (str, tp.Sequence, tp.Mapping)):
    return f'{type(value).__name__} of length {len(value)}'
  return f'{type(value).__name__} {value!r}'

def _is_composite(value) -> bool:
  if isinstance(value, np.ndarray):
    return value.ndim > 0
  # Strings and bytes are opaque primitives, not containers.
  if isinstance(value, (str, bytes)):
    return False
  return isinstance(value, (tp.Sequence, tp.Mapping))

def _as_sequence(value, length: int, kind: str, path: Path) -> tp.Sequence:
  if isinstance(value, np.ndarray):
    if value.ndim == 0:
      raise ShapeMismatch(path, f'{kind} of length {length}', _describe(value))
  elif isinstance(value, (str, bytes)) or not isinstance(value, tp.Sequence):
    raise ShapeMismatch(path, f'{kind} of length {length}', _describe(value))

  if len(value) != length:
    raise ShapeMismatch(path, f'{kind} of length {length}', _describe(value))
  return value

def _flatten(value, t: DeclaredType, path: Path, out: list):
  match t:
    case Primitive():
      if _is_composite(value):
        raise ShapeMismatch(path, f'primitive {t}', _describe(value))
      out.append(value)

    case Array(element, length):
      items = _as_sequence(value, length, 'array', path)
      for i in range(length):
        _flatten(items[i], element, path + (i,), out)

    case Tuple(fields):
      items = _as_sequence(value, len(fields), 'tuple', path)
      for i, field_type in enumerate(fields):
        _flatten(items[i], field_type, path + (i,), out)

    case Struct(name, fields):
      if not isinstance(value, tp.Mapping):
        raise ShapeMismatch(path, f'struct {name}', _describe(value))
      names = [k for k, _ in fields]
      missing = [k for k in names if k not in value]
      extra = [k for k in value if k not in names]
      if missing or extra:
        raise ShapeMismatch(
            path, f'struct {name} with fields {names}',
            f'missing {missing}, extra {extra}')
      for k, field_type in fields:
        _flatten(value[k], field_type, path + (k,), out)

    case String(length):
      if not isinstance(value, str):
        raise ShapeMismatch(path, str(t), _describe(value))
      if len(value) != length:
        raise ShapeMismatch(path, str(t), _describe(value))
      out.extend(ord(c) for c in value)

    case _:
      raise TypeError(f'Not a declared type: {t!r}')

def flatten(value, t: DeclaredType) -> list:
  """Flattens `value` depth-first, left-to-right, according to `t`.

  Raises:
    ShapeMismatch: at the first sub-structure whose kind or length
      disagrees with `t`.
  """
  out = []
  _flatten(value, t, (), out)
  return out
