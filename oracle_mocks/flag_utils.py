"""Builds fancyflags dicts from config dataclasses and back again."""

import dataclasses
import enum
import typing as tp

from absl import logging
import fancyflags as ff
import tree

T = tp.TypeVar('T')

_ITEM_TYPES = {
    bool: ff.Boolean,
    int: ff.Integer,
    float: ff.Float,
    str: ff.String,
}

def strip_optional(t: type) -> type:
  """Optional[X] -> X; anything else is returned unchanged."""
  args = tp.get_args(t)
  if tp.get_origin(t) is tp.Union and len(args) == 2 and type(None) in args:
    return args[0] if args[1] is type(None) else args[1]
  return t

def _field_default(field: dataclasses.Field):
  if field.default_factory is not dataclasses.MISSING:
    return field.default_factory()
  if field.default is not dataclasses.MISSING:
    return field.default
  return None

def _leaf_item(path: str, field_type: type, default) -> tp.Optional[ff.Item]:
  field_type = strip_optional(field_type)
  make_item = _ITEM_TYPES.get(field_type)
  if make_item is not None:
    return make_item(default)
  if isinstance(field_type, type) and issubclass(field_type, enum.Enum):
    return ff.EnumClass(default=default, enum_class=field_type)
  logging.warning(f'Skipping config field {path} of type {field_type}')
  return None

def get_flags_from_dataclass(
    cls: type, prefix: str = '') -> 'tree.Structure[ff.Item]':
  """Maps each dataclass field to a fancyflags item, recursing into
  nested dataclasses."""
  if not dataclasses.is_dataclass(cls):
    raise TypeError(f'{cls} is not a dataclass')

  items = {}
  hints = tp.get_type_hints(cls)
  for field in dataclasses.fields(cls):
    field_type = hints[field.name]
    path = prefix + field.name
    if dataclasses.is_dataclass(field_type):
      items[field.name] = get_flags_from_dataclass(field_type, path + '.')
      continue

    item = _leaf_item(path, field_type, _field_default(field))
    if item is not None:
      items[field.name] = item
  return items

def dataclass_from_dict(cls: tp.Type[T], nest: tp.Mapping) -> T:
  """Recursively constructs a dataclass from a nested dict."""
  hints = tp.get_type_hints(cls)
  kwargs = {}

  for field in dataclasses.fields(cls):
    field_type = hints[field.name]
    if field.name in nest:
      value = nest[field.name]
      if dataclasses.is_dataclass(field_type):
        value = dataclass_from_dict(field_type, value)
    elif (field.default is dataclasses.MISSING and
          field.default_factory is dataclasses.MISSING):
      raise ValueError(f'No value specified for {cls.__name__}.{field.name}')
    else:
      value = _field_default(field)
    kwargs[field.name] = value

  return cls(**kwargs)
