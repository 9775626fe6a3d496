"""User-Agent header identifying this library, the interpreter and the platform."""

import platform
from functools import lru_cache

from .. import __version__
from ..config import get_yaml_setting


@lru_cache(maxsize=None)
def user_agent() -> str:
    """Built once per process, e.g. "mapbox-static-python/1.0.0 CPython/3.12.1 (Linux 6.8; x86_64)"."""
    product = get_yaml_setting("user_agent", "product", default="mapbox-static-python")
    system = platform.system() or "Unknown"
    release = platform.release()
    os_component = f"{system} {release}".strip()
    machine = platform.machine() or "unknown"
    return (
        f"{product}/{__version__} "
        f"{platform.python_implementation()}/{platform.python_version()} "
        f"({os_component}; {machine})"
    )
