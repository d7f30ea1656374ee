"""Reshape a flat list of oracle outputs into a declared type.

  python scripts/reshape.py \
    --config.return_type="(Field, [[Field; 3]; 2], Field)" \
    --config.values=0,1,2,3,4,5,6,7
"""

from absl import app
import fancyflags as ff

from oracle_mocks import flag_utils, reshape_lib

CONFIG = ff.DEFINE_dict(
    'config', **flag_utils.get_flags_from_dataclass(reshape_lib.Config))

def main(_):
  config = flag_utils.dataclass_from_dict(reshape_lib.Config, CONFIG.value)
  print(reshape_lib.run(config))

if __name__ == '__main__':
  app.run(main)
