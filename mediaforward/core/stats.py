"""In-memory forwarding counters, reset on restart."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass
class ForwardStats:
    forwarded: int = 0
    failed: int = 0
    ignored: int = 0
    last_error: Optional[str] = None
    last_error_at: Optional[datetime] = None
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def record_success(self) -> None:
        self.forwarded += 1

    def record_failure(self, error: BaseException) -> None:
        self.failed += 1
        self.last_error = f"{type(error).__name__}: {error}"
        self.last_error_at = datetime.now(timezone.utc)

    def record_ignored(self) -> None:
        self.ignored += 1

    def as_dict(self) -> Dict[str, Any]:
        return {
            "forwarded": self.forwarded,
            "failed": self.failed,
            "ignored": self.ignored,
            "last_error": self.last_error,
            "last_error_at": self.last_error_at.isoformat() if self.last_error_at else None,
            "started_at": self.started_at.isoformat(),
        }
