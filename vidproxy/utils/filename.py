import re

_UNSAFE = re.compile(r'[^a-zA-Z0-9]')


def sanitize_title(title: str) -> str:
    """Filename stem: every non-alphanumeric character becomes '_', lowercased"""
    return _UNSAFE.sub('_', title).lower()


def build_filename(title: str, extension: str) -> str:
    return f"{sanitize_title(title)}.{extension}"
