"""States emitted by a pagination controller.

Every state carries its ``status`` discriminant so views can branch on it
(or use ``match``) without isinstance checks:

    match state.status:
        case PageStatus.LOADING if not state.items:
            show_spinner()
        case PageStatus.FAILED:
            show_error(state.error.message)
        case _:
            render(state.items)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class PageStatus(str, Enum):
    """Discriminant of a PageState."""

    INITIAL = "initial"
    LOADING = "loading"
    LOADED = "loaded"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


@dataclass(frozen=True)
class ErrorInfo:
    """What a failed fetch raised, forwarded as-is to subscribers.

    Attributes:
        message: ``str()`` of the exception, or its type name when empty.
        type_name: Class name of the exception.
        cause: The exception itself. Excluded from equality.
    """

    message: str
    type_name: str
    cause: BaseException | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_exception(cls, ex: BaseException) -> "ErrorInfo":
        type_name = type(ex).__name__
        return cls(message=str(ex) or type_name, type_name=type_name, cause=ex)


@dataclass(frozen=True)
class PageState(Generic[T]):
    """Base for all emitted states.

    Attributes:
        items: Read-only snapshot of the items loaded in the current session.
        status: Which state this is.
    """

    items: tuple[T, ...]
    status: PageStatus = field(init=False, default=PageStatus.INITIAL)

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    @property
    def is_loading(self) -> bool:
        return self.status is PageStatus.LOADING

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def can_load_more(self) -> bool:
        """Whether a "load more" command would start a fetch from this state."""
        return self.status in (PageStatus.INITIAL, PageStatus.LOADED, PageStatus.FAILED)


@dataclass(frozen=True)
class InitialState(PageState[T]):
    """No fetch has completed yet."""

    items: tuple[T, ...] = ()
    status: PageStatus = field(init=False, default=PageStatus.INITIAL)


@dataclass(frozen=True)
class LoadingState(PageState[T]):
    """A fetch is in flight. Empty items on a first load or refresh."""

    status: PageStatus = field(init=False, default=PageStatus.LOADING)


@dataclass(frozen=True)
class LoadedState(PageState[T]):
    """The last fetch returned items, or the list was seeded with items."""

    status: PageStatus = field(init=False, default=PageStatus.LOADED)


@dataclass(frozen=True)
class ExhaustedState(PageState[T]):
    """The last fetch returned no new items."""

    status: PageStatus = field(init=False, default=PageStatus.EXHAUSTED)


@dataclass(frozen=True)
class FailedState(PageState[T]):
    """The last fetch raised. Items loaded before the attempt are kept."""

    error: ErrorInfo
    status: PageStatus = field(init=False, default=PageStatus.FAILED)
