from oracle_mocks.types import (
    Array, DeclaredType, Primitive, String, Struct, Tuple,
    BOOL, FIELD, struct,
)
from oracle_mocks.errors import (
    ArityMismatch, ExhaustedSequence, ReshapeError, ShapeMismatch,
)
from oracle_mocks.shapes import element_count, leaf_paths, sub_shapes
from oracle_mocks.flatten import flatten
from oracle_mocks.reshape import reshape, reshape_from
from oracle_mocks.parsing import TypeSyntaxError, parse_type
from oracle_mocks.mock import MockError, OracleMock
