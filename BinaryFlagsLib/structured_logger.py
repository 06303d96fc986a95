import inspect
import logging
import structlog
import yaml


def add_caller_info(_, __, event_dict):
    """Add the caller's function name and line number to the log entry."""
    internal_modules = ['structlog', 'logging', 'structured_logger.py']

    frame = inspect.currentframe()
    while frame:
        frame = frame.f_back
        if not frame:
            break
        file_name = frame.f_code.co_filename
        if not any(internal in file_name for internal in internal_modules):
            event_dict["function"] = frame.f_code.co_name
            event_dict["line"] = frame.f_lineno
            break

    return event_dict


class DetailLevelFilter:
    """Drop debug events that are more detailed than the configured level."""

    def __init__(self, default_level=0):
        self.default_level = default_level
        self.module_levels = {}

    def set_level(self, module=None, level=1):
        if module:
            self.module_levels[module] = level
        else:
            self.default_level = level

    def get_level(self, module=None):
        if module and module in self.module_levels:
            return self.module_levels[module]
        return self.default_level

    def __call__(self, logger, method_name, event_dict):
        detail_level = event_dict.pop("_detail_level", 1)
        module = event_dict.get("logger", None)

        # debug (1) < debug2 (2) < debug3 (3)
        if method_name == "debug" and detail_level > self.get_level(module):
            raise structlog.DropEvent

        return event_dict


def add_prefix(_, __, event_dict):
    prefix = event_dict.pop("_prefix", "")
    if prefix and "event" in event_dict:
        event_dict["event"] = f"{prefix}{event_dict['event']}"
    return event_dict


def format_yaml_values(_, __, event_dict):
    """Render dicts, lists and other complex values as YAML."""
    for key, value in list(event_dict.items()):
        if not isinstance(value, (str, int, float, bool, type(None))):
            try:
                yaml_str = yaml.dump(value, default_flow_style=False)
                if '\n' in yaml_str.strip():
                    lines = yaml_str.strip().split('\n')
                    yaml_str = lines[0] + ' |\n  ' + '\n  '.join(lines[1:])
                event_dict[key] = yaml_str.strip()
            except yaml.YAMLError:
                event_dict[key] = str(value)
    return event_dict


class MessageStore:
    """Keep rendered log lines in memory while capture is active."""

    def __init__(self):
        self.messages = []
        self.active = False

    def start_capture(self):
        self.messages = []
        self.active = True

    def stop_capture(self):
        self.active = False
        return list(self.messages)

    def get_messages(self):
        return list(self.messages)

    def clear(self):
        self.messages = []

    def __call__(self, logger, method_name, event_dict):
        if self.active:
            msg = f"{event_dict.get('level', 'info').upper()} "
            if "function" in event_dict:
                msg += f"[{event_dict.get('function', '')}:{event_dict.get('line', '')}] "
            msg += str(event_dict.get("event", ""))

            for key, value in event_dict.items():
                if key not in ("level", "function", "line", "event", "logger", "timestamp"):
                    msg += f" {key}={value}"

            self.messages.append(msg)

        return event_dict


class ConsoleRenderer:
    """Render an event as one line: time, abbreviated level, message, extras."""

    level_abbrevs = {
        'debug': 'DBG',
        'info': 'INF',
        'warning': 'WRN',
        'error': 'ERR',
        'critical': 'CRT',
        'exception': 'EXC',
    }
    level_to_color = {
        'critical': '\x1b[31;1m',
        'exception': '\x1b[31;1m',
        'error': '\x1b[31m',
        'warning': '\x1b[33m',
        'info': '\x1b[32m',
        'debug': '\x1b[34m',
    }
    reset_color = '\x1b[0m'

    def __init__(self, colors=True):
        self.colors = colors

    def __call__(self, logger, method_name, event_dict):
        timestamp = event_dict.pop('timestamp', '')
        level = event_dict.pop('level', 'info')
        event = event_dict.pop('event', '')
        event_dict.pop('logger', None)

        level_str = f"[{self.level_abbrevs.get(level, level[:3].upper())}]"
        if self.colors:
            color = self.level_to_color.get(level, self.reset_color)
            level_str = f"{color}{level_str}{self.reset_color}"

        line = f"{timestamp} {level_str} {event}"
        if event_dict:
            extra = " ".join(f"{key}={value}" for key, value in sorted(event_dict.items()))
            line = f"{line} {extra}"
        return line


message_store = MessageStore()
detail_filter = DetailLevelFilter()
console_renderer = ConsoleRenderer(colors=True)

# Library loggers get their own pipeline; the global structlog config belongs to the application
PROCESSORS = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
    add_prefix,
    add_caller_info,
    detail_filter,
    format_yaml_values,
    message_store,
    console_renderer,
]


class StructuredLogger:
    """structlog wrapper with a message prefix and debug detail levels."""

    def __init__(self, name, prefix=""):
        self.logger = structlog.wrap_logger(
            logging.getLogger(name),
            processors=PROCESSORS,
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
        )
        self.name = name
        self.prefix = prefix

    def _log(self, method, msg, detail_level=1, **kwargs):
        kwargs["_detail_level"] = detail_level
        kwargs["_prefix"] = self.prefix
        getattr(self.logger, method)(msg, **kwargs)

    def debug(self, msg, **kwargs):
        self._log("debug", msg, detail_level=1, **kwargs)

    def debug2(self, msg, **kwargs):
        self._log("debug", msg, detail_level=2, **kwargs)

    def debug3(self, msg, **kwargs):
        self._log("debug", msg, detail_level=3, **kwargs)

    def info(self, msg, **kwargs):
        self._log("info", msg, **kwargs)

    def warning(self, msg, **kwargs):
        self._log("warning", msg, **kwargs)

    def error(self, msg, **kwargs):
        self._log("error", msg, **kwargs)

    def exception(self, msg, **kwargs):
        self._log("exception", msg, **kwargs)


def start_message_capture():
    message_store.start_capture()


def stop_message_capture():
    return message_store.stop_capture()


def get_stored_messages():
    return message_store.get_messages()


def clear_stored_messages():
    message_store.clear()


def set_detail_level(level, module=None):
    """Set the debug detail level globally or for one logger name."""
    detail_filter.set_level(module, level)


def get_detail_level(module=None):
    return detail_filter.get_level(module)
