"""Parses Noir-like type expressions.

  Field, bool, u8, i32      primitives
  [T; N]                    array
  (T, U), (T,), ()          tuple
  str<N>                    string

`parse_type(str(t)) == t` for every type built without structs.
"""

import re

from oracle_mocks.types import Array, DeclaredType, Primitive, String, Tuple

_TOKEN = re.compile(r'\s*(?:(\d+)|([A-Za-z_][A-Za-z0-9_]*)|(\S))')
_INTEGER_KIND = re.compile(r'[ui](\d+)')

class TypeSyntaxError(ValueError):

  def __init__(self, message: str, text: str, position: int):
    super().__init__(f'{message} at position {position} in {text!r}')
    self.text = text
    self.position = position

def _tokenize(text: str) -> list[tuple[str, int]]:
  tokens = []
  pos = 0
  text = text.rstrip()
  while pos < len(text):
    match = _TOKEN.match(text, pos)
    tokens.append((match.group(match.lastindex), match.start(match.lastindex)))
    pos = match.end()
  return tokens

class _Parser:

  def __init__(self, text: str):
    self.text = text
    self.tokens = _tokenize(text)
    self.index = 0

  def error(self, message: str):
    if self.index < len(self.tokens):
      position = self.tokens[self.index][1]
    else:
      position = len(self.text)
    return TypeSyntaxError(message, self.text, position)

  def peek(self):
    if self.index < len(self.tokens):
      return self.tokens[self.index][0]
    return None

  def next(self) -> str:
    token = self.peek()
    if token is None:
      raise self.error('unexpected end of input')
    self.index += 1
    return token

  def expect(self, token: str):
    if self.peek() != token:
      raise self.error(f'expected "{token}"')
    self.index += 1

  def integer(self) -> int:
    token = self.peek()
    if token is None or not token.isdigit():
      raise self.error('expected an integer')
    self.index += 1
    return int(token)

  def parse_type(self) -> DeclaredType:
    token = self.peek()

    if token == '[':
      self.next()
      element = self.parse_type()
      self.expect(';')
      length = self.integer()
      self.expect(']')
      return Array(element, length)

    if token == '(':
      self.next()
      fields = []
      trailing_comma = False
      while self.peek() != ')':
        fields.append(self.parse_type())
        trailing_comma = False
        if self.peek() == ',':
          self.next()
          trailing_comma = True
        elif self.peek() != ')':
          raise self.error('expected "," or ")"')
      self.next()
      if len(fields) == 1 and not trailing_comma:
        return fields[0]  # parenthesized type
      return Tuple(fields)

    if token == 'str':
      self.next()
      self.expect('<')
      length = self.integer()
      self.expect('>')
      return String(length)

    if token in ('Field', 'bool') or (
        token is not None and _INTEGER_KIND.fullmatch(token)):
      self.next()
      return Primitive(token)

    raise self.error(f'unknown type {token!r}' if token else 'expected a type')

def parse_type(text: str) -> DeclaredType:
  """Parses a type expression such as "(Field, [[Field; 3]; 2])"."""
  parser = _Parser(text)
  t = parser.parse_type()
  if parser.peek() is not None:
    raise parser.error('unexpected trailing input')
  return t
