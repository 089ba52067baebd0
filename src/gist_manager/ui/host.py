"""Host primitives the gist commands are written against."""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Protocol, Sequence, TypeVar

from ..editor.workspace import TextView

T = TypeVar("T")

# Returns an error message for invalid input, None when the value is accepted.
InputValidator = Callable[[str], Optional[str]]


@dataclass
class QuickPickItem:
    """One choice of a single-choice list."""
    label: str
    description: Optional[str] = None
    detail: Optional[str] = None
    value: Any = None


class HostUI(Protocol):
    """Prompt, notification and presentation primitives.

    Every prompt returns None when the user dismisses it. An empty string
    from an input box is a real answer, distinct from dismissal.
    """

    async def show_input_box(
        self,
        prompt: str,
        value: Optional[str] = None,
        placeholder: Optional[str] = None,
        password: bool = False,
        validate: Optional[InputValidator] = None,
    ) -> Optional[str]:
        ...

    async def show_quick_pick(
        self,
        items: Sequence[QuickPickItem],
        placeholder: Optional[str] = None,
    ) -> Optional[QuickPickItem]:
        ...

    async def show_information_message(self, message: str, *actions: str) -> Optional[str]:
        ...

    async def show_warning_message(
        self,
        message: str,
        *actions: str,
        modal: bool = False,
    ) -> Optional[str]:
        ...

    async def show_error_message(self, message: str) -> None:
        ...

    async def with_progress(self, title: str, operation: Awaitable[T]) -> T:
        """Await an operation while a non-cancellable progress indicator shows."""
        ...

    async def show_text_document(self, view: TextView) -> None:
        ...

    async def write_clipboard(self, text: str) -> bool:
        """Copy text; False when no clipboard is available."""
        ...

    async def open_external(self, url: str) -> bool:
        ...
