from dataclasses import dataclass
from typing import Optional

@dataclass
class RuntimeState:
    """Centralized runtime state"""
    ytdlp_version: str = "unknown"
    js_runtime: Optional[str] = None

state = RuntimeState()
