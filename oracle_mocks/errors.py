"""Errors raised while flattening and reshaping.

These are structural errors: the same inputs always reproduce them, so they
are never retried.
"""

import copy
import typing as tp

Path = tp.Tuple[tp.Union[int, str], ...]

def format_path(path: Path) -> str:
  """Renders a value path, e.g. (1, 0, 'x') -> '[1][0].x'."""
  if not path:
    return '<root>'
  parts = []
  for p in path:
    if isinstance(p, str):
      parts.append(f'.{p}')
    else:
      parts.append(f'[{p}]')
  return ''.join(parts)


class ReshapeError(ValueError):
  """Base class for flatten/reshape failures."""

  oracle: tp.Optional[str] = None

  def describe(self) -> str:
    raise NotImplementedError

  def __str__(self):
    message = self.describe()
    if self.oracle is not None:
      message = f'oracle "{self.oracle}": {message}'
    return message

  def with_oracle(self, name: str) -> 'ReshapeError':
    """Returns a copy attributed to the named oracle."""
    error = copy.copy(self)
    error.oracle = name
    return error


class ShapeMismatch(ReshapeError):
  """A value does not match its declared type at some nesting level."""

  def __init__(self, path: Path, expected: str, actual: str):
    super().__init__(path, expected, actual)
    self.path = tuple(path)
    self.expected = expected
    self.actual = actual

  def describe(self):
    return (f'shape mismatch at {format_path(self.path)}: '
            f'expected {self.expected}, got {self.actual}')


class ExhaustedSequence(ReshapeError):
  """Reshaping tried to read past the end of the flat sequence."""

  def __init__(
      self,
      offset: int,
      available: int,
      path: Path = (),
      expected: tp.Optional[int] = None,
  ):
    super().__init__(offset, available, path, expected)
    self.offset = offset
    self.available = available
    self.path = tuple(path)
    self.expected = expected

  def describe(self):
    message = (f'flat sequence exhausted at offset {self.offset} '
               f'(reading {format_path(self.path)}, '
               f'{self.available} elements available)')
    if self.expected is not None:
      message += f'; expected {self.expected} elements, got {self.available}'
    return message


class ArityMismatch(ReshapeError):
  """A top-level reshape left elements unconsumed."""

  def __init__(self, expected: int, actual: int):
    super().__init__(expected, actual)
    self.expected = expected
    self.actual = actual

  def describe(self):
    return (f'expected {self.expected} elements, got {self.actual} '
            f'({self.actual - self.expected} left over)')
