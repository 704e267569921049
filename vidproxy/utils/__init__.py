from .filename import build_filename, sanitize_title

__all__ = ["build_filename", "sanitize_title"]
