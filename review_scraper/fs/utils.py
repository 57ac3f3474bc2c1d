"""Filesystem utilities."""
import json
import os
import tempfile
from pathlib import Path
from typing import Any


def ensure_directory(path: str | Path) -> Path:
    """
    Create directory (and parents) if it does not exist.
    
    Args:
        path: Directory path
        
    Returns:
        Directory as Path
    """
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def file_exists(path: str | Path) -> bool:
    """
    Check that a regular file exists and is readable.
    
    Any OS error counts as "missing".
    """
    try:
        p = Path(path)
        return p.is_file() and os.access(p, os.R_OK)
    except OSError:
        return False


def atomic_write_text(path: str | Path, text: str, encoding: str = "utf-8") -> Path:
    """
    Write text to a file atomically.
    
    Content goes to a temporary file in the same directory which then
    replaces the target, so readers never observe a half-written file.
    
    Args:
        path: Destination file
        text: Content to write
        encoding: Text encoding
        
    Returns:
        Destination as Path
        
    Raises:
        OSError: If the file cannot be written
    """
    target = Path(path)
    directory = target.parent if str(target.parent) else Path(".")
    ensure_directory(directory)
    
    fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
    
    return target


def atomic_write_json(path: str | Path, data: Any, indent: int | None = None) -> Path:
    """
    Serialize data as JSON and write it atomically.
    
    Args:
        path: Destination file
        data: JSON-serializable value
        indent: Optional indentation
        
    Returns:
        Destination as Path
    """
    return atomic_write_text(path, json.dumps(data, ensure_ascii=False, indent=indent))
