"""Mocked oracle registrations.

An `OracleMock` holds the canned flat result for one named oracle. Whoever
dispatches oracle calls keeps hold of the mock and asks it for a result
shaped by the oracle's declared return type:

  mock = OracleMock('get_pair').returns_flat([0, 1, 2, 3, 4, 5, 6, 7])
  value = mock.result(parse_type('(Field, [[Field; 3]; 2], Field)'))
"""

import typing as tp

from absl import logging
import numpy as np
import tree

from oracle_mocks.errors import ReshapeError
from oracle_mocks.flatten import flatten
from oracle_mocks.reshape import reshape
from oracle_mocks.types import DeclaredType

class MockError(RuntimeError):
  """An oracle mock was used in a way its registration doesn't allow."""

def _to_python(x):
  if isinstance(x, np.ndarray):
    return x.tolist()
  if isinstance(x, np.generic):
    return x.item()
  return x

def normalize_params(params: tp.Sequence) -> list:
  """Converts numpy leaves so params compare by value."""
  return tree.map_structure(_to_python, list(params))

class OracleMock:

  def __init__(self, name: str):
    self.name = name
    self.clear()

  def clear(self) -> 'OracleMock':
    """Forgets params, returns, use count and recorded params."""
    self._params: tp.Optional[list] = None
    self._returns: tp.Optional[list] = None
    self._times: tp.Optional[int] = None
    self.last_params: tp.Optional[list] = None
    return self

  def __repr__(self):
    return f'OracleMock({self.name!r})'

  def with_params(self, *params) -> 'OracleMock':
    self._params = normalize_params(params)
    return self

  def returns(self, value, t: DeclaredType) -> 'OracleMock':
    """Stores a structured value as its flat sequence."""
    try:
      self._returns = flatten(value, t)
    except ReshapeError as e:
      raise e.with_oracle(self.name) from None
    logging.info(
        f'Mock "{self.name}" returns {len(self._returns)} elements as {t}')
    return self

  def returns_flat(self, elements: tp.Iterable) -> 'OracleMock':
    self._returns = list(elements)
    logging.info(f'Mock "{self.name}" returns {len(self._returns)} elements')
    return self

  def times(self, n: int) -> 'OracleMock':
    if n < 0:
      raise ValueError(f'times must be non-negative, got {n}')
    self._times = n
    return self

  @property
  def exhausted(self) -> bool:
    return self._times is not None and self._times <= 0

  @property
  def flat_returns(self) -> tp.Optional[list]:
    if self._returns is None:
      return None
    return list(self._returns)

  def matches(self, params: tp.Sequence) -> bool:
    if self.exhausted:
      return False
    if self._params is None:
      return True
    return self._params == normalize_params(params)

  def result(self, t: DeclaredType):
    """Reshapes the stored flat sequence into a value of type `t`.

    Does not consume a use; repeated calls give equal values.
    """
    if self._returns is None:
      raise MockError(f'Mock "{self.name}" has no return value set')

    try:
      return reshape(self._returns, t)
    except ReshapeError as e:
      logging.warning(f'Mock "{self.name}" failed to reshape into {t}: {e}')
      raise e.with_oracle(self.name) from None

  def call(self, params: tp.Sequence, t: DeclaredType):
    """Handles one oracle invocation with the given params."""
    if self.exhausted:
      raise MockError(f'Mock "{self.name}" has been used up')
    if not self.matches(params):
      raise MockError(
          f'Mock "{self.name}" expected params {self._params}, '
          f'got {normalize_params(params)}')

    value = self.result(t)
    self.last_params = normalize_params(params)

    if self._times is not None:
      self._times -= 1
      if self._times == 0:
        logging.info(f'Mock "{self.name}" exhausted')
    return value
