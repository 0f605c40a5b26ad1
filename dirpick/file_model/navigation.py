"""Navigation state machine for the directory picker.

``transition`` maps one snapshot plus one event to the next snapshot. It never
mutates its input and never touches the filesystem: directory reads are
requested through ``NavigationContext.pending_load`` and their outcome comes
back as ``DirectoryLoaded`` / ``DirectoryLoadFailed`` events.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from .types import DirEntry, NavigationContext, Status, ViewState


class Action(Enum):
    """Discrete user actions understood by the state machine."""

    MOVE_DOWN = "move_down"
    MOVE_UP = "move_up"
    JUMP_TOP = "jump_top"
    JUMP_BOTTOM = "jump_bottom"
    DESCEND = "descend"
    ASCEND = "ascend"
    CONFIRM = "confirm"
    OPEN = "open"
    CANCEL = "cancel"


@dataclass(frozen=True)
class Resize:
    """Viewport height changed."""

    height: int


@dataclass(frozen=True)
class DirectoryLoaded:
    """Listing for ``path`` finished."""

    path: Path
    entries: tuple[DirEntry, ...]


@dataclass(frozen=True)
class DirectoryLoadFailed:
    """Listing for ``path`` could not be read."""

    path: Path
    reason: str


Event = Action | Resize | DirectoryLoaded | DirectoryLoadFailed


def top_view(height: int, count: int | None = None) -> ViewState:
    """Return the view anchored at the first entry.

    ``count`` clamps the window end to the last entry; ``None`` or ``0`` keep a
    full ``height`` window (nothing to clamp against yet).
    """
    end = max(1, height) - 1
    if count:
        end = min(end, count - 1)
    return ViewState(cursor=0, start=0, end=end)


def fit_view(view: ViewState, height: int, count: int) -> ViewState:
    """Clamp ``view`` into a listing of ``count`` entries without resetting it.

    The window keeps its start where possible; the cursor moves only when it
    falls outside the resulting ``[start, end]``.
    """
    height = max(1, height)
    if count <= 0:
        return top_view(height)
    start = max(0, min(view.start, count - 1))
    end = min(start + height - 1, count - 1)
    cursor = max(start, min(view.cursor, end))
    return ViewState(cursor=cursor, start=start, end=end)


def initial_context(path: Path, height: int) -> NavigationContext:
    """Create the launch snapshot for ``path`` with its listing requested."""
    height = max(1, height)
    return NavigationContext(
        current_path=path,
        view=top_view(height),
        height=height,
        pending_load=path,
    )


def is_filesystem_root(path: Path) -> bool:
    return path.parent == path


def move_down(ctx: NavigationContext) -> NavigationContext:
    count = len(ctx.entries)
    if count == 0:
        return ctx
    view = ctx.view
    cursor = min(view.cursor + 1, count - 1)
    start, end = view.start, view.end
    if cursor > end:
        start += 1
        end += 1
    return replace(ctx, view=ViewState(cursor=cursor, start=start, end=end))


def move_up(ctx: NavigationContext) -> NavigationContext:
    if not ctx.entries:
        return ctx
    view = ctx.view
    cursor = max(view.cursor - 1, 0)
    start, end = view.start, view.end
    if cursor < start:
        start -= 1
        end -= 1
    return replace(ctx, view=ViewState(cursor=cursor, start=start, end=end))


def jump_top(ctx: NavigationContext) -> NavigationContext:
    if not ctx.entries:
        return ctx
    return replace(ctx, view=top_view(ctx.height, len(ctx.entries)))


def jump_bottom(ctx: NavigationContext) -> NavigationContext:
    count = len(ctx.entries)
    if count == 0:
        return ctx
    last = count - 1
    return replace(ctx, view=ViewState(cursor=last, start=max(0, count - ctx.height), end=last))


def _request_load(ctx: NavigationContext, path: Path, view: ViewState, history: tuple[ViewState, ...]) -> NavigationContext:
    return replace(
        ctx,
        current_path=path,
        entries=(),
        view=view,
        history=history,
        pending_load=path,
    )


def descend(ctx: NavigationContext) -> NavigationContext:
    entry = ctx.entry_at_cursor()
    if entry is None or not entry.is_dir:
        return ctx
    return _request_load(
        ctx,
        ctx.current_path / entry.name,
        top_view(ctx.height),
        ctx.history + (ctx.view,),
    )


def ascend(ctx: NavigationContext) -> NavigationContext:
    if is_filesystem_root(ctx.current_path):
        return ctx
    if ctx.history:
        view = ctx.history[-1]
        history = ctx.history[:-1]
    else:
        view = top_view(ctx.height)
        history = ()
    return _request_load(ctx, ctx.current_path.parent, view, history)


def confirm(ctx: NavigationContext) -> NavigationContext:
    entry = ctx.entry_at_cursor()
    if entry is None or entry.is_dir:
        return ctx
    return replace(ctx, status=Status.SELECTED, result=ctx.current_path / entry.name)


def open_entry(ctx: NavigationContext) -> NavigationContext:
    """Descend into a directory or select a file, whichever is highlighted."""
    entry = ctx.entry_at_cursor()
    if entry is None:
        return ctx
    if entry.is_dir:
        return descend(ctx)
    return confirm(ctx)


def cancel(ctx: NavigationContext) -> NavigationContext:
    return replace(ctx, status=Status.CANCELLED, result=None)


def resize(ctx: NavigationContext, height: int) -> NavigationContext:
    height = max(1, height)
    view = ctx.view
    count = len(ctx.entries)
    end = view.start + height - 1
    if count:
        end = min(end, count - 1)
    cursor = max(view.start, min(view.cursor, end))
    return replace(ctx, height=height, view=ViewState(cursor=cursor, start=view.start, end=end))


def directory_loaded(ctx: NavigationContext, event: DirectoryLoaded) -> NavigationContext:
    if ctx.pending_load is None or event.path != ctx.pending_load:
        return ctx
    entries = tuple(event.entries)
    return replace(
        ctx,
        entries=entries,
        view=fit_view(ctx.view, ctx.height, len(entries)),
        pending_load=None,
    )


def directory_load_failed(ctx: NavigationContext, event: DirectoryLoadFailed) -> NavigationContext:
    if ctx.pending_load is None or event.path != ctx.pending_load:
        return ctx
    return replace(
        ctx,
        status=Status.CANCELLED,
        result=None,
        pending_load=None,
        error=event.reason,
    )


_ACTIONS = {
    Action.MOVE_DOWN: move_down,
    Action.MOVE_UP: move_up,
    Action.JUMP_TOP: jump_top,
    Action.JUMP_BOTTOM: jump_bottom,
    Action.DESCEND: descend,
    Action.ASCEND: ascend,
    Action.CONFIRM: confirm,
    Action.OPEN: open_entry,
    Action.CANCEL: cancel,
}


def transition(ctx: NavigationContext, event: Event) -> NavigationContext:
    """Apply one event and return the next snapshot.

    Terminal snapshots (selected or cancelled) are returned unchanged.
    """
    if ctx.finished:
        return ctx
    if isinstance(event, Action):
        return _ACTIONS[event](ctx)
    if isinstance(event, Resize):
        return resize(ctx, event.height)
    if isinstance(event, DirectoryLoaded):
        return directory_loaded(ctx, event)
    if isinstance(event, DirectoryLoadFailed):
        return directory_load_failed(ctx, event)
    raise TypeError(f"unsupported navigation event: {event!r}")


__all__ = [
    "Action",
    "Resize",
    "DirectoryLoaded",
    "DirectoryLoadFailed",
    "Event",
    "top_view",
    "fit_view",
    "initial_context",
    "is_filesystem_root",
    "transition",
]
