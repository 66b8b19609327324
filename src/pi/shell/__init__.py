"""pi-shell: interactive command line with raw-mode line editing."""

from pi.shell.editor import EditorLoop, EditorState, run_session
from pi.shell.errors import (
    BufferFull,
    ExecutionFailure,
    ModeFailure,
    ReadFailure,
    ShellError,
)
from pi.shell.executor import CommandExecutor, Executor
from pi.shell.history import HistoryStore
from pi.shell.keys import EventKind, InputEvent, KeyDecoder
from pi.shell.line_buffer import LineBuffer
from pi.shell.prompt import current_prompt
from pi.shell.renderer import LineRenderer
from pi.shell.settings import ShellSettings, load_settings
from pi.shell.terminal import ProcessTerminal, Terminal, raw_mode

__all__ = [
    # Editor
    "EditorLoop",
    "EditorState",
    "run_session",
    # Errors
    "BufferFull",
    "ExecutionFailure",
    "ModeFailure",
    "ReadFailure",
    "ShellError",
    # Execution
    "CommandExecutor",
    "Executor",
    # Editing state
    "HistoryStore",
    "LineBuffer",
    # Keys
    "EventKind",
    "InputEvent",
    "KeyDecoder",
    # Prompt and rendering
    "current_prompt",
    "LineRenderer",
    # Settings
    "ShellSettings",
    "load_settings",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    "raw_mode",
]
