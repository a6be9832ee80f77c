"""
Small helpers shared across layers
"""

from typing import Any, Optional


def get_url_with_host_and_port(host: str, port: int | str) -> str:
    """
    return f"http://{host}:{port}"
    """
    if host == '0.0.0.0' or host == '::':
        host = 'localhost'
    return f"http://{host}:{port}"


def coerce_id(value: Any) -> Optional[int]:
    """
    Convert a client-supplied identifier to an int

    Accepts ints and integer-valued strings ("3", " 3 "). Booleans, floats
    with a fractional part and anything else return None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def env_flag(value: Optional[str], default: bool = False) -> bool:
    """Interpret an environment variable value as a boolean flag"""
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("true", "1", "yes", "on")
