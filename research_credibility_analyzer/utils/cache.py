"""JSON file persistence utilities."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def load_cache(cache_file: Path, default: Any = None) -> Any:
    """Load a JSON file if it exists; return ``default`` ({} unless given) otherwise."""
    if default is None:
        default = {}
    if cache_file.exists():
        try:
            with open(cache_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError:
            logger.warning(f"Cache file {cache_file} is corrupted. Starting fresh.")
            return default
        except OSError as e:
            logger.error(f"Failed to load cache file {cache_file}: {e}")
            return default
        if not isinstance(data, type(default)):
            logger.warning(f"Cache file {cache_file} holds {type(data).__name__}, "
                           f"expected {type(default).__name__}. Starting fresh.")
            return default
        return data
    return default


def save_cache(cache_file: Path, data: Any) -> bool:
    """Write data as JSON, replacing the file atomically. Returns True on success."""
    tmp_name = None
    try:
        cache_file.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile('w', encoding='utf-8', dir=cache_file.parent,
                                         suffix='.tmp', delete=False) as f:
            tmp_name = f.name
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_name, cache_file)
        return True
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Failed to save cache file {cache_file}: {e}")
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        return False
