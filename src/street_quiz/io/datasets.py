# street_quiz/io/datasets.py
import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

log = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def _read_geometry_document(file: str):
    with open(file, encoding="utf-8") as f:
        doc = json.load(f)
    if not isinstance(doc, dict):
        raise ValueError(f"{file}: expected an object keyed by street name")
    return MappingProxyType(doc)


def load_geometry_document(file: str | Path):
    """
    Read-only name -> geometry mapping, read once per path for the process.
    A missing or broken document is logged and read as empty; the read is
    retried on the next call.
    """
    try:
        return _read_geometry_document(str(file))
    except (OSError, ValueError) as exc:
        log.warning("precomputed geometries unavailable (%s): %s", file, exc)
        return MappingProxyType({})


def load_name_pool(file: str | Path) -> list[str]:
    with open(file, encoding="utf-8") as f:
        names = json.load(f)
    if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
        raise ValueError(f"{file}: expected a JSON list of street names")
    return names
