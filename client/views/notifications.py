import time
from dataclasses import dataclass
from typing import Callable, Optional

TOAST_TTL = 5.0

SUCCESS = "success"
ERROR = "error"
WARNING = "warning"
INFO = "info"
KINDS = (SUCCESS, ERROR, WARNING, INFO)

ICONS = {
    SUCCESS: "check-circle",
    ERROR: "exclamation-circle",
    WARNING: "exclamation-triangle",
    INFO: "info-circle",
}


@dataclass(frozen=True)
class Toast:
    message: str
    kind: str
    shown_at: float

    @property
    def icon(self) -> str:
        return ICONS.get(self.kind, ICONS[INFO])


class Notifier:
    """
    Holds at most one toast. Showing a new one replaces the old; a toast
    disappears ``ttl`` seconds after it was shown or when dismissed.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, ttl: float = TOAST_TTL) -> None:
        self.clock = clock
        self.ttl = ttl
        self._toast: Optional[Toast] = None

    def show(self, message: str, kind: str = INFO) -> Toast:
        if kind not in KINDS:
            kind = INFO
        self._toast = Toast(message, kind, self.clock())
        return self._toast

    def dismiss(self) -> None:
        self._toast = None

    @property
    def current(self) -> Optional[Toast]:
        if self._toast is not None and self.clock() - self._toast.shown_at >= self.ttl:
            self._toast = None
        return self._toast
