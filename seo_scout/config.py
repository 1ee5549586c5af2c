# === FILE: seo_scout/config.py ===
"""
Loading and validation of crawler options for SEO Scout.
Pydantic describes the schema; YAML and JSON files are both accepted.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_USER_AGENT = "SEO-Scout-Crawler/1.0 (+https://github.com/seo-scout)"


class CrawlOptions(BaseModel):
    """Tunables for one crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_depth: int = Field(3, ge=0, description="Maximum link depth from the start URL.")
    max_pages: int = Field(100, ge=1, description="Hard limit on the number of crawled pages.")
    concurrency: int = Field(5, ge=1, description="Fetches in flight at once.")
    timeout: float = Field(10.0, gt=0, description="Timeout per request attempt (seconds).")
    requests_per_second: float = Field(10.0, gt=0, description="Rate limit for all fetches.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent header.")
    retry_times: int = Field(2, ge=0, description="Retries after a transient fetch failure.")
    retry_delay: float = Field(0.5, ge=0, description="First backoff delay (seconds).")

    def with_overrides(self, **overrides: Any) -> CrawlOptions:
        """Return a validated copy with every non-None override applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        return CrawlOptions(**{**self.model_dump(), **updates})


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> CrawlOptions:
    """
    Read a YAML or JSON file and return validated CrawlOptions.
    Without a path, configs/default.yaml is used when present, defaults otherwise.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return CrawlOptions()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data: Dict[str, Any] = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return CrawlOptions(**data)


__all__ = ["CrawlOptions", "DEFAULT_USER_AGENT", "load_config"]
