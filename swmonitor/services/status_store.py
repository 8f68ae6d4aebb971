from dataclasses import dataclass, field
from typing import Optional, List

@dataclass
class StatusStore:
    """Diagnostic side-channel: short console-style lines plus the last error/signal seen."""
    last_error: Optional[str] = None
    last_signal: Optional[str] = None
    logs: List[str] = field(default_factory=list)

    def set_error(self, code: Optional[str]):
        self.last_error = code

    def log(self, msg: str):
        self.logs.append(msg)
        if len(self.logs) > 200:
            self.logs = self.logs[-200:]
