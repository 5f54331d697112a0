from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Dict

import yaml

DEFAULT_SOURCE = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"

DEFAULT_CONFIG: Dict[str, object] = {
    "source": DEFAULT_SOURCE,
    "loaders": {
        "http": "sales_dashboard.loaders.remote.RemoteJSONLoader",
        "file": "sales_dashboard.loaders.local.FileLoader",
    },
    "output_modules": {
        "csv": "sales_dashboard.outputs.csv_output.CSVOutput",
        "excel": "sales_dashboard.outputs.excel_output.ExcelOutput",
        "html": "sales_dashboard.outputs.html_output.HTMLOutput",
    },
    "price_thresholds": [0, 100, 200, 300, 400, 500, 600, 700, 800, 900],
    "page_size": 10,
    "timeout": 30,
    "output_dir": "data",
}

CONFIG_ENV_VAR = "SALES_DASHBOARD_CONFIG"


def default_config_path() -> Path:
    return Path(os.environ.get(CONFIG_ENV_VAR, "config.yaml"))


def _merge_defaults(current: Dict[str, object], defaults: Dict[str, object]) -> Dict[str, object]:
    """Merge missing default keys into the current config recursively."""
    merged = dict(current)
    for key, value in defaults.items():
        if key not in merged:
            merged[key] = copy.deepcopy(value)
        elif isinstance(value, dict) and isinstance(merged[key], dict):
            merged[key] = _merge_defaults(merged[key], value)
    return merged


def load_config(path: Path | str | None = None) -> Dict[str, object]:
    target = Path(path) if path else default_config_path()
    if not target.exists():
        return _merge_defaults({}, DEFAULT_CONFIG)
    with target.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {target} must contain a mapping")
    return _merge_defaults(data, DEFAULT_CONFIG)


def save_config(config: Dict[str, object], path: Path | str | None = None) -> None:
    target = Path(path) if path else default_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as fp:
        yaml.safe_dump(config, fp, sort_keys=False)


def ensure_config_file(path: Path | str | None = None) -> Dict[str, object]:
    target = Path(path) if path else default_config_path()
    if target.exists():
        return load_config(target)
    config = _merge_defaults({}, DEFAULT_CONFIG)
    save_config(config, target)
    return config
