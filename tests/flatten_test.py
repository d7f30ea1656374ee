import unittest

import numpy as np

from oracle_mocks import shapes
from oracle_mocks.errors import ShapeMismatch
from oracle_mocks.flatten import flatten
from oracle_mocks.types import Array, String, Tuple, FIELD, struct

MATRIX = Array(Array(FIELD, 3), 2)

class FlattenTest(unittest.TestCase):

  def test_primitive(self):
    self.assertEqual(flatten(7, FIELD), [7])

  def test_nested_array(self):
    self.assertEqual(
        flatten([[1, 2, 3], [4, 5, 6]], MATRIX), [1, 2, 3, 4, 5, 6])

  def test_mixed_tuple(self):
    t = Tuple([FIELD, MATRIX, FIELD])
    value = (0, [[1, 2, 3], [4, 5, 6]], 7)
    self.assertEqual(flatten(value, t), list(range(8)))

  def test_numpy_array(self):
    value = np.arange(1, 7).reshape(2, 3)
    flat = flatten(value, MATRIX)
    self.assertEqual(len(flat), 6)
    self.assertEqual([int(x) for x in flat], [1, 2, 3, 4, 5, 6])

  def test_zero_length(self):
    self.assertEqual(flatten([], Array(FIELD, 0)), [])
    self.assertEqual(flatten((), Tuple()), [])

  def test_struct_uses_declared_order(self):
    t = struct('Point', y=FIELD, x=FIELD)
    self.assertEqual(flatten({'x': 1, 'y': 2}, t), [2, 1])

  def test_string(self):
    self.assertEqual(flatten('hi', String(2)), [104, 105])

  def test_count_law(self):
    t = Tuple([String(3), Array(struct('S', a=FIELD, b=MATRIX), 2), FIELD])
    value = (
        'abc',
        [{'a': 0, 'b': [[0] * 3] * 2}, {'a': 9, 'b': [[9] * 3] * 2}],
        5,
    )
    self.assertEqual(len(flatten(value, t)), shapes.element_count(t))

class FlattenMismatchTest(unittest.TestCase):

  def test_short_inner_array(self):
    with self.assertRaises(ShapeMismatch) as cm:
      flatten([[1, 2, 3], [4, 5]], MATRIX)
    self.assertEqual(cm.exception.path, (1,))
    self.assertIn('[1]', str(cm.exception))

  def test_long_outer_array(self):
    with self.assertRaises(ShapeMismatch) as cm:
      flatten([[1, 2, 3]] * 3, MATRIX)
    self.assertEqual(cm.exception.path, ())

  def test_tuple_arity(self):
    with self.assertRaises(ShapeMismatch):
      flatten((1, 2), Tuple([FIELD, FIELD, FIELD]))

  def test_composite_at_primitive(self):
    with self.assertRaises(ShapeMismatch) as cm:
      flatten((1, [2]), Tuple([FIELD, FIELD]))
    self.assertEqual(cm.exception.path, (1,))

  def test_scalar_for_array(self):
    with self.assertRaises(ShapeMismatch):
      flatten(3, Array(FIELD, 1))
    with self.assertRaises(ShapeMismatch):
      flatten(np.int64(3), Array(FIELD, 1))

  def test_string_is_not_an_array(self):
    with self.assertRaises(ShapeMismatch):
      flatten('abc', Array(FIELD, 3))
    with self.assertRaises(ShapeMismatch):
      flatten(b'abc', Array(FIELD, 3))

  def test_strings_are_opaque_primitives(self):
    self.assertEqual(flatten(['a', 'bc'], Array(FIELD, 2)), ['a', 'bc'])
    self.assertEqual(flatten((b'xy', 1), Tuple([FIELD, FIELD])), [b'xy', 1])

  def test_struct_fields(self):
    t = struct('Point', x=FIELD, y=FIELD)
    with self.assertRaises(ShapeMismatch):
      flatten({'x': 1}, t)
    with self.assertRaises(ShapeMismatch):
      flatten({'x': 1, 'y': 2, 'z': 3}, t)
    with self.assertRaises(ShapeMismatch):
      flatten((1, 2), t)

  def test_nested_path(self):
    t = Tuple([FIELD, struct('S', ys=Array(FIELD, 2))])
    with self.assertRaises(ShapeMismatch) as cm:
      flatten((0, {'ys': [1, 2, 3]}), t)
    self.assertEqual(cm.exception.path, (1, 'ys'))
    self.assertIn('[1].ys', str(cm.exception))

  def test_string_length(self):
    with self.assertRaises(ShapeMismatch):
      flatten('hello', String(4))

if __name__ == '__main__':
  unittest.main()
