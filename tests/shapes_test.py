import unittest

from oracle_mocks import shapes
from oracle_mocks.types import (
    Array, Primitive, String, Struct, Tuple, FIELD, BOOL, struct,
)

MATRIX = Array(Array(FIELD, 3), 2)

class ElementCountTest(unittest.TestCase):

  def test_primitive(self):
    self.assertEqual(shapes.element_count(FIELD), 1)
    self.assertEqual(shapes.element_count(Primitive('u8')), 1)

  def test_nested_array(self):
    self.assertEqual(shapes.element_count(MATRIX), 6)

  def test_tuples(self):
    t = Tuple([FIELD, MATRIX, FIELD, MATRIX])
    self.assertEqual(shapes.element_count(t), 14)
    self.assertEqual(shapes.element_count(Tuple()), 0)

  def test_zero_length(self):
    self.assertEqual(shapes.element_count(Array(FIELD, 0)), 0)
    self.assertEqual(shapes.element_count(Array(MATRIX, 0)), 0)
    self.assertEqual(shapes.element_count(Array(Array(FIELD, 0), 5)), 0)

  def test_struct_and_string(self):
    point = struct('Point', x=FIELD, y=FIELD, label=String(4))
    self.assertEqual(shapes.element_count(point), 6)
    self.assertEqual(shapes.element_count(Array(point, 3)), 18)

  def test_structural_equality(self):
    a = Tuple([BOOL, Array(FIELD, 2)])
    b = Tuple((Primitive('bool'), Array(Primitive('Field'), 2)))
    self.assertEqual(a, b)
    self.assertEqual(hash(a), hash(b))
    self.assertEqual(shapes.element_count(a), shapes.element_count(b))

  def test_not_a_type(self):
    with self.assertRaises(TypeError):
      shapes.element_count('Field')

class SubShapesTest(unittest.TestCase):

  def test_primitive_has_none(self):
    self.assertEqual(shapes.sub_shapes(FIELD), [])

  def test_tuple_offsets(self):
    t = Tuple([FIELD, MATRIX, FIELD])
    subs = shapes.sub_shapes(t)
    self.assertEqual([s.label for s in subs], [0, 1, 2])
    self.assertEqual([s.count for s in subs], [1, 6, 1])
    self.assertEqual([s.offset for s in subs], [0, 1, 7])
    self.assertEqual(subs[1].type, MATRIX)

  def test_struct_labels(self):
    t = struct('Pair', a=MATRIX, b=FIELD)
    subs = shapes.sub_shapes(t)
    self.assertEqual([(s.label, s.count, s.offset) for s in subs],
                     [('a', 6, 0), ('b', 1, 6)])

  def test_counts_sum_to_total(self):
    t = Tuple([String(3), Array(Tuple([FIELD, BOOL]), 4), Tuple()])
    subs = shapes.sub_shapes(t)
    self.assertEqual(sum(s.count for s in subs), shapes.element_count(t))

class LeafPathsTest(unittest.TestCase):

  def test_matrix(self):
    self.assertEqual(
        shapes.leaf_paths(MATRIX),
        [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)])

  def test_struct(self):
    t = Tuple([FIELD, Struct('S', (('x', FIELD), ('ys', Array(FIELD, 2))))])
    self.assertEqual(
        shapes.leaf_paths(t),
        [(0,), (1, 'x'), (1, 'ys', 0), (1, 'ys', 1)])

  def test_length_matches_count(self):
    t = Tuple([String(2), Array(MATRIX, 2), Array(FIELD, 0)])
    self.assertEqual(len(shapes.leaf_paths(t)), shapes.element_count(t))

if __name__ == '__main__':
  unittest.main()
