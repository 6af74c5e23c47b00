"""Alert/confirm prompt abstraction."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

Callback = Callable[[], None]


def _noop() -> None:
    return None


@dataclass
class PromptRequest:
    title: str
    message: str
    on_confirm: Callback = _noop
    on_cancel: Optional[Callback] = None
    show_cancel: bool = False

    def as_dict(self) -> dict:
        return {"title": self.title, "message": self.message, "show_cancel": self.show_cancel}


class Prompt(Protocol):
    def show(self, request: PromptRequest) -> None:
        ...


@dataclass
class RecordingPrompt:
    """Keeps every request and answers it right away.

    ``answer=True`` confirms, ``False`` cancels, ``None`` leaves the request
    unanswered. Plain alerts (no cancel button) are always acknowledged.
    """

    answer: Optional[bool] = None
    requests: List[PromptRequest] = field(default_factory=list)

    def show(self, request: PromptRequest) -> None:
        self.requests.append(request)
        if not request.show_cancel:
            request.on_confirm()
        elif self.answer is True:
            request.on_confirm()
        elif self.answer is False and request.on_cancel is not None:
            request.on_cancel()

    @property
    def last(self) -> Optional[PromptRequest]:
        return self.requests[-1] if self.requests else None

    def clear(self) -> None:
        self.requests.clear()
