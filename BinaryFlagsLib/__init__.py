from .basic_types import Bits, FlagDefinition, NameStyle, MASK_WIDTH
from .binary_flags import BinaryFlags
from .config import Config, ConfigError, default_app_config
from .flag_iterator import FlagIterator
from .flag_naming import flag_name_from_identifier

__all__ = [
    "BinaryFlags",
    "Bits",
    "Config",
    "ConfigError",
    "FlagDefinition",
    "FlagIterator",
    "MASK_WIDTH",
    "NameStyle",
    "default_app_config",
    "flag_name_from_identifier",
]
