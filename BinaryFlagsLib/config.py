import os
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .basic_types import NameStyle, MASK_WIDTH
from .structured_logger import StructuredLogger, set_detail_level


class ConfigError(Exception):
    """Raised when a configuration file cannot be loaded or holds bad values."""
    pass


class Config:
    NAME_STYLE: str = NameStyle.WORDS.value
    MASK_WIDTH: int = MASK_WIDTH
    LOG_DETAIL_LEVEL: int = 0

    def load_from_yaml(self, file_path=None):
        logger = StructuredLogger(__name__, prefix="Config.load_from_yaml()> ")
        if file_path is None:
            file_path = os.environ.get("BINARYFLAGS_CONFIG_FILE")
        if not file_path:
            return self

        yaml_loader = YAML(typ='safe')

        try:
            with open(file_path, 'r', encoding='utf-8') as file:
                config_values = yaml_loader.load(file)
        except FileNotFoundError:
            logger.error("config file not found", file_path=file_path)
            raise ConfigError(f"Config file not found at {file_path}")
        except YAMLError as e:
            details = str(e)
            if hasattr(e, 'problem_mark') and e.problem_mark is not None:
                mark = e.problem_mark
                details = f"line {mark.line + 1}, column {mark.column + 1}: {getattr(e, 'problem', e)}"
            logger.error("error parsing config YAML", file_path=file_path, details=details)
            raise ConfigError(f"Error parsing config YAML file {file_path}: {details}") from e

        if config_values is None:
            config_values = {}
        if not isinstance(config_values, dict):
            logger.error("config file is not a mapping", file_path=file_path)
            raise ConfigError(f"Config file {file_path} does not contain a valid dictionary.")

        self.load_from_dict(config_values)
        logger.debug("loaded config", file_path=file_path, values=config_values)
        return self

    def load_from_dict(self, config_values):
        # only UPPER_CASE settings are loaded; unknown keys are ignored
        for key, value in config_values.items():
            if isinstance(key, str) and key.isupper() and hasattr(type(self), key) \
                    and not callable(getattr(type(self), key)):
                setattr(self, key, value)
        return self

    def load_from_env(self):
        log_level = os.environ.get('BINARYFLAGS_LOG_LEVEL')
        if log_level and log_level.isdigit():
            self.LOG_DETAIL_LEVEL = int(log_level)
        return self

    def validate(self):
        try:
            NameStyle(self.NAME_STYLE)
        except ValueError:
            raise ConfigError(f"NAME_STYLE must be one of {[s.value for s in NameStyle]}, got {self.NAME_STYLE!r}")
        if isinstance(self.MASK_WIDTH, bool) or not isinstance(self.MASK_WIDTH, int) or self.MASK_WIDTH <= 0:
            raise ConfigError(f"MASK_WIDTH must be a positive integer, got {self.MASK_WIDTH!r}")
        if isinstance(self.LOG_DETAIL_LEVEL, bool) or not isinstance(self.LOG_DETAIL_LEVEL, int) \
                or self.LOG_DETAIL_LEVEL < 0:
            raise ConfigError(f"LOG_DETAIL_LEVEL must be a non-negative integer, got {self.LOG_DETAIL_LEVEL!r}")
        return self

    def apply(self):
        set_detail_level(self.LOG_DETAIL_LEVEL)
        return self

    @property
    def name_style(self) -> NameStyle:
        return NameStyle(self.NAME_STYLE)


# Default global configuration instance
default_app_config = Config()
default_app_config.load_from_yaml()
default_app_config.load_from_env()
default_app_config.validate()
default_app_config.apply()
