from .record import DynamicRecord  # noqa
from .wrappers import SynchronizedRecord  # noqa
from .config import Config, load_config  # noqa
from .exceptions import DataRecordError, ConfigError  # noqa
from ._shape import is_dense_index  # noqa
