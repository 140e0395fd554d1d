from __future__ import annotations

import math
import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from ..utils.logging import parse_level

ENV_PREFIX = "ROCKETVIZ_"


@dataclass
class SettingsConfig:
    """Typed runtime settings; in-memory only."""

    source_base_url: str = "http://127.0.0.1:8080"
    source_path: str = "/data/combined.csv"
    data_dir: str = "data"
    request_timeout_s: int = 10
    viewport_width_px: int = 1100
    viewport_height_px: int = 700
    fit_margin: float = 0.1
    dataset_name: str = "rocket"
    point_size: int = 4
    point_opacity: int = 140
    show_grid: bool = True
    grid_step: Optional[float] = None
    log_level: str = "INFO"
    debug: bool = False


_STR_KEYS = {"source_base_url", "source_path", "data_dir", "dataset_name"}
_POSITIVE_INT_KEYS = {"request_timeout_s", "viewport_width_px", "viewport_height_px"}
_INT_KEYS = {"point_size", "point_opacity"}
_BOOL_KEYS = {"show_grid", "debug"}


class SettingsVM:
    """Keeps app settings state and validation, no I/O here.

    Every value passes through the coercion helpers, so a config reached via
    ``apply_dict`` or ``from_env`` is always usable by the viewer.
    """

    def __init__(self, *, config: Optional[SettingsConfig] = None) -> None:
        self.config = config or SettingsConfig()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SettingsVM":
        """Build settings with ``ROCKETVIZ_<KEY>`` environment overrides applied."""
        env = os.environ if environ is None else environ
        payload: Dict[str, Any] = {}
        for name in (f.name for f in fields(SettingsConfig)):
            value = env.get(f"{ENV_PREFIX}{name.upper()}")
            if value is not None:
                payload[name] = value
        vm = cls()
        vm.apply_dict(payload)
        return vm

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def source_base_url(self) -> str:
        return self.config.source_base_url

    @property
    def source_path(self) -> str:
        return self.config.source_path

    @property
    def data_dir(self) -> str:
        return self.config.data_dir

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @property
    def dataset_name(self) -> str:
        return self.config.dataset_name

    def logging_level(self) -> int:
        """Root log level: ``debug`` wins over ``log_level``."""
        if self.config.debug:
            return parse_level("DEBUG")
        return parse_level(self.config.log_level)

    # ------------------------------------------------------------------
    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply a flat settings mapping to the view-model.

        The whole payload is validated before anything is stored; on error the
        current config is left untouched.
        """

        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed = {f.name for f in fields(SettingsConfig)}
        unknown = set(payload.keys()) - allowed
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        updates = {key: self._coerce_config_value(key, raw) for key, raw in payload.items()}
        if updates:
            self.config = replace(self.config, **updates)

    def to_dict(self) -> dict:
        return asdict(self.config)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _coerce_config_value(self, key: str, raw: Any) -> Any:
        if key in _STR_KEYS:
            return self._coerce_str(key, raw)
        if key in _POSITIVE_INT_KEYS:
            value = self._coerce_int(key, raw, allow_negative=False)
            if value == 0:
                raise ValueError(f"{key} must be positive.")
            return value
        if key in _INT_KEYS:
            return self._coerce_int(key, raw, allow_negative=False)
        if key == "fit_margin":
            margin = self._coerce_float(key, raw)
            if margin < 0:
                raise ValueError("fit_margin must be non-negative.")
            return margin
        if key in _BOOL_KEYS:
            return self._coerce_bool(raw)
        if key == "grid_step":
            return self.coerce_step(raw)
        if key == "log_level":
            text = self._coerce_str(key, raw).upper()
            parse_level(text)
            return text
        raise ValueError(f"Unhandled config field: {key}")

    @staticmethod
    def coerce_step(value: Any) -> Optional[float]:
        """Empty or non-positive values mean an automatic grid step."""
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                value = float(text)
            except ValueError as exc:
                raise ValueError("grid_step must be a number.") from exc
        step = float(value)
        if not math.isfinite(step) or step <= 0:
            return None
        return step

    @staticmethod
    def _coerce_str(name: str, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError(f"{name} must be a string.")
        return value.strip()

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_int(name: str, value: Any, *, allow_negative: bool = True) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        if isinstance(value, (int, float)):
            coerced = int(value)
        elif isinstance(value, str):
            try:
                coerced = int(value.strip())
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{name} must be an integer.") from exc
        else:
            raise ValueError(f"{name} must be an integer.")
        if not allow_negative and coerced < 0:
            raise ValueError(f"{name} must be non-negative.")
        return coerced

    @staticmethod
    def _coerce_float(name: str, value: Any) -> float:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be a number.")
        try:
            coerced = float(value.strip() if isinstance(value, str) else value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{name} must be a number.") from exc
        if not math.isfinite(coerced):
            raise ValueError(f"{name} must be finite.")
        return coerced
