"""Reshapes a flat list given on the command line. See scripts/reshape.py."""

import dataclasses
import typing as tp

from absl import logging

from oracle_mocks import parsing, shapes
from oracle_mocks.mock import OracleMock

@dataclasses.dataclass
class Config:
  return_type: str = 'Field'  # e.g. "(Field, [[Field; 3]; 2], Field)"
  values: str = ''  # comma separated flat elements
  oracle: str = 'oracle'  # name reported in errors

def parse_value(token: str) -> tp.Union[int, str]:
  token = token.strip()
  try:
    return int(token, 0)
  except ValueError:
    return token

def parse_values(text: str) -> list:
  if not text.strip():
    return []
  return [parse_value(token) for token in text.split(',')]

def run(config: Config):
  t = parsing.parse_type(config.return_type)
  values = parse_values(config.values)
  logging.info(
      f'Reshaping {len(values)} elements into {t} '
      f'({shapes.element_count(t)} slots) for oracle "{config.oracle}"')

  mock = OracleMock(config.oracle).returns_flat(values)
  return mock.result(t)
