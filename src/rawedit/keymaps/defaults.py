"""Built-in keymap: the single-byte command alphabet."""

from __future__ import annotations

from typing import Iterable, Sequence

from rawedit.actions import editing as editing_actions
from rawedit.actions import movement as movement_actions

from .models import ActionRef, Binding
from .registry import KeymapRegistry

FALLBACK_ACTION_ID = "edit.insert_literal"

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id=FALLBACK_ACTION_ID,
        handler=editing_actions.insert_literal,
        description="Insert the unit at the cursor",
    ),
    ActionRef(
        id="edit.newline",
        handler=editing_actions.newline,
        description="Split the line at the cursor",
    ),
    ActionRef(
        id="edit.open_line",
        handler=editing_actions.open_line,
        description="Insert a blank line at the cursor line",
    ),
    ActionRef(
        id="edit.backspace",
        handler=editing_actions.backspace,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="edit.tab",
        handler=editing_actions.insert_tab,
        description="Insert spaces up to the tab width",
    ),
    ActionRef(
        id="edit.kill_line",
        handler=editing_actions.kill_line,
        description="Remove the current line",
    ),
    ActionRef(
        id="file.save",
        handler=editing_actions.save,
        description="Write the buffer to its file",
    ),
    ActionRef(
        id="move.back",
        handler=movement_actions.back,
        description="Move one character left",
    ),
    ActionRef(
        id="move.forward",
        handler=movement_actions.forward,
        description="Move one character right",
    ),
    ActionRef(
        id="move.next_line",
        handler=movement_actions.next_line,
        description="Move to the next line",
    ),
    ActionRef(
        id="move.prev_line",
        handler=movement_actions.prev_line,
        description="Move to the previous line",
    ),
    ActionRef(
        id="move.line_start",
        handler=movement_actions.line_start,
        description="Move to the start of the line",
    ),
    ActionRef(
        id="move.line_end",
        handler=movement_actions.line_end,
        description="Move to the end of the line",
    ),
    ActionRef(
        id="move.page_down",
        handler=movement_actions.page_down,
        description="Move down one page",
    ),
    ActionRef(
        id="move.page_up",
        handler=movement_actions.page_up,
        description="Move up one page",
    ),
    ActionRef(
        id="session.quit",
        handler=movement_actions.quit_editor,
        description="Leave the editor",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(id="newline", unit="\n", action_id="edit.newline"),
    Binding(id="backspace", unit="\b", action_id="edit.backspace"),
    Binding(id="backspace.del", unit="\x7f", action_id="edit.backspace"),
    Binding(id="tab", unit="\t", action_id="edit.tab"),
    Binding(id="kill_line", unit="K", action_id="edit.kill_line"),
    Binding(id="open_line", unit="O", action_id="edit.open_line"),
    Binding(id="save", unit="S", action_id="file.save"),
    Binding(id="back", unit="B", action_id="move.back"),
    Binding(id="forward", unit="F", action_id="move.forward"),
    Binding(id="next_line", unit="N", action_id="move.next_line"),
    Binding(id="prev_line", unit="P", action_id="move.prev_line"),
    Binding(id="line_start", unit="A", action_id="move.line_start"),
    Binding(id="line_end", unit="E", action_id="move.line_end"),
    Binding(id="page_down", unit="V", action_id="move.page_down"),
    Binding(id="page_up", unit="C", action_id="move.page_up"),
    Binding(id="quit", unit="Q", action_id="session.quit"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in actions, bindings, and the insert fallback."""

    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)
    registry.set_fallback(FALLBACK_ACTION_ID)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = [
    "load_default_keymaps",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "FALLBACK_ACTION_ID",
]
