"""
Source reader: loads module text from disk.
"""
from .errors import SourceReadError


def read_source(path):
    """Read a UTF-8 Lua file, raising SourceReadError on any OS or decode failure."""
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(path, e) from e
