"""Declared types for oracle return values.

A declared type is a closed tagged variant:

  Primitive | Array | Tuple | Struct | String

Types are frozen dataclasses, so they hash and compare structurally. `str()`
renders the same Noir-like syntax that `parsing.parse_type` reads.
"""

import dataclasses
import typing as tp

@dataclasses.dataclass(frozen=True)
class Primitive:
  """A single opaque slot, e.g. a field element."""
  kind: str = 'Field'

  def __str__(self):
    return self.kind

@dataclasses.dataclass(frozen=True)
class Array:
  """Fixed-length homogeneous array."""
  element: 'DeclaredType'
  length: int

  def __post_init__(self):
    _check_type(self.element, 'array element')
    # bool is an int subclass but never a valid length.
    if not isinstance(self.length, int) or isinstance(self.length, bool):
      raise ValueError(f'Array length must be an int, got {self.length!r}')
    if self.length < 0:
      raise ValueError(f'Array length must be non-negative, got {self.length}')

  def __str__(self):
    return f'[{self.element}; {self.length}]'

@dataclasses.dataclass(frozen=True)
class Tuple:
  """Fixed-arity heterogeneous tuple."""
  fields: tp.Tuple['DeclaredType', ...] = ()

  def __post_init__(self):
    fields = tuple(self.fields)
    for i, t in enumerate(fields):
      _check_type(t, f'tuple field {i}')
    object.__setattr__(self, 'fields', fields)

  def __str__(self):
    if len(self.fields) == 1:
      return f'({self.fields[0]},)'
    return '(' + ', '.join(map(str, self.fields)) + ')'

@dataclasses.dataclass(frozen=True)
class Struct:
  """Named fields, flattened in declaration order."""
  name: str
  fields: tp.Tuple[tp.Tuple[str, 'DeclaredType'], ...] = ()

  def __post_init__(self):
    fields = tuple((k, t) for k, t in self.fields)
    seen = set()
    for k, t in fields:
      if k in seen:
        raise ValueError(f'Duplicate field "{k}" in struct {self.name}')
      seen.add(k)
      _check_type(t, f'{self.name}.{k}')
    object.__setattr__(self, 'fields', fields)

  @property
  def field_names(self) -> list[str]:
    return [k for k, _ in self.fields]

  def __str__(self):
    body = ', '.join(f'{k}: {t}' for k, t in self.fields)
    return f'{self.name} {{ {body} }}'

@dataclasses.dataclass(frozen=True)
class String:
  """Fixed-length string, one slot per character code point."""
  length: int

  def __post_init__(self):
    if not isinstance(self.length, int) or isinstance(self.length, bool):
      raise ValueError(f'String length must be an int, got {self.length!r}')
    if self.length < 0:
      raise ValueError(f'String length must be non-negative, got {self.length}')

  def __str__(self):
    return f'str<{self.length}>'

DeclaredType = tp.Union[Primitive, Array, Tuple, Struct, String]
TYPES = (Primitive, Array, Tuple, Struct, String)

def is_type(obj) -> bool:
  return isinstance(obj, TYPES)

def _check_type(obj, where: str):
  if not is_type(obj):
    raise TypeError(f'Expected a declared type for {where}, got {obj!r}')

FIELD = Primitive('Field')
BOOL = Primitive('bool')

def struct(name: str, **fields: DeclaredType) -> Struct:
  """Convenience constructor; keyword order is field order."""
  return Struct(name, tuple(fields.items()))
