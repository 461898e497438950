"""Editor telemetry on top of telelog.

Callers use four entry points:

``configure(...)`` -- install a preset, an explicit ``telelog.Config``, or
the environment-driven defaults
``get_logger(name)`` -- cached logger bound to the active configuration
``record_event(name, ...)`` -- one structured ``event::<name>`` line
``span(name, ...)`` -- profile a block, optionally as a tracked component

Settings come from ``MODAL_EDITOR_*`` environment variables, see
:class:`TelemetrySettings`.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MODAL_EDITOR_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "modal_editor")

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class TelemetrySettings:
    """Resolved logging knobs, one field per ``MODAL_EDITOR_*`` variable."""

    level: str = "INFO"
    console: bool = True
    color: bool = True
    json: bool = False
    log_file: Optional[str] = None
    buffered: bool = False
    buffer_size: Optional[int] = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "TelemetrySettings":
        def raw(name: str) -> Optional[str]:
            return environ.get(f"{ENV_PREFIX}{name}")

        def flag(name: str) -> bool:
            value = raw(name)
            return value is not None and value.lower() in _TRUTHY

        buffered = flag("LOG_BUFFERED")
        return cls(
            level=(raw("LOG_LEVEL") or "INFO").upper(),
            console=not flag("DISABLE_CONSOLE"),
            color=not flag("NO_COLOR"),
            json=flag("LOG_JSON"),
            log_file=raw("LOG_FILE") or None,
            buffered=buffered,
            buffer_size=int(raw("LOG_BUFFER_SIZE") or "2048") if buffered else None,
        )

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffered:
            config.with_buffering(True)
            if self.buffer_size is not None:
                config.with_buffer_size(self.buffer_size)
        # Span timings are part of every log, whatever the preset.
        config.with_profiling(True)
        return config


# Each preset overrides the environment defaults; ``log_file`` entries are
# fallbacks used only when MODAL_EDITOR_LOG_FILE is unset.
_PRESET_OVERRIDES: Dict[str, Dict[str, Any]] = {
    "development": {"level": "DEBUG", "console": True, "color": True, "json": False},
    "production": {
        "level": "INFO",
        "console": False,
        "buffered": True,
        "log_file": "modal_editor.log",
    },
    "performance": {
        "level": "DEBUG",
        "console": False,
        "buffered": True,
        "json": True,
        "log_file": "modal_editor-performance.log",
    },
    # The full-screen UI owns the terminal, so logs only ever go to a file.
    "tui": {"console": False},
}

PRESETS = tuple(_PRESET_OVERRIDES)

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def preset_settings(
    preset: str, base: Optional[TelemetrySettings] = None
) -> TelemetrySettings:
    """Return ``base`` (or the environment settings) with ``preset`` applied."""

    try:
        overrides = dict(_PRESET_OVERRIDES[preset.lower()])
    except KeyError:
        raise ValueError(f"Unknown preset '{preset}'.") from None
    settings = base or TelemetrySettings.from_env()
    fallback_file = overrides.pop("log_file", None)
    if settings.log_file is None and fallback_file:
        overrides["log_file"] = fallback_file
    return replace(settings, **overrides)


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration and drop cached loggers.

    Parameters
    ----------
    config:
        Explicit ``telelog.Config`` to adopt as is.
    preset:
        One of :data:`PRESETS`. Mutually exclusive with ``config``. Without
        either, ``MODAL_EDITOR_LOG_PRESET`` is consulted, then the plain
        environment settings.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if config is None:
        preset = preset or os.getenv(f"{ENV_PREFIX}LOG_PRESET")
        settings = preset_settings(preset) if preset else TelemetrySettings.from_env()
        config = settings.to_config()

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return the cached ``telelog.Logger`` called ``name``."""

    global _ACTIVE_CONFIG
    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        if _ACTIVE_CONFIG is None:
            _ACTIVE_CONFIG = TelemetrySettings.from_env().to_config()
        logger = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _emitter(logger: Any, level: str) -> Callable[[str, Dict[str, Any]], None]:
    """Bind ``level`` on ``logger`` to a ``(message, fields)`` callable.

    Prefers telelog's ``<level>_with`` variants, which take key/value pairs,
    and falls back to appending the fields to the message.
    """

    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return lambda message, fields: structured(
            message, [(str(key), _text(value)) for key, value in fields.items()]
        )
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return lambda message, fields: plain(f"{message} {fields}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` attached as fields."""

    emit = _emitter(get_logger(logger_name), level)
    emit(f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by :func:`span`; collects metadata reported on failure."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        fields: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            fields["component"] = self.component_name
        fields["reason"] = reason
        _emitter(self.logger, "error")("span::fail", fields)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the enclosed block under ``name``.

    ``component=True`` also tracks the block as a telelog component named
    ``name``; a string picks another component name. ``metadata`` is added as
    logger context for the duration of the block only. Exceptions are logged
    as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _text(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name if isinstance(component_name, str) else None,
        metadata=dict(context),
    )

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if handle.component_name:
            stack.enter_context(log.track_component(handle.component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


configure()

__all__ = [
    "PRESETS",
    "SpanHandle",
    "TelemetrySettings",
    "configure",
    "get_logger",
    "preset_settings",
    "record_event",
    "span",
]
