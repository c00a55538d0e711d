"""
Infrastructure layer for dotsync.

Contains abstractions for external systems:
- GitClient: Git command execution
- Timestamp/Ledger backends: plain-text state persistence
- Selector: fzf or numbered-prompt menus

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient
from .state_store import (
    WriteResult,
    TimestampBackend,
    FileTimestampBackend,
    MemoryTimestampBackend,
    LedgerBackend,
    FileLedgerBackend,
    MemoryLedgerBackend,
    default_state_paths,
)
from .selector import Selector, FzfSelector, PromptSelector, make_selector

__all__ = [
    'GitClient',
    'WriteResult',
    'TimestampBackend',
    'FileTimestampBackend',
    'MemoryTimestampBackend',
    'LedgerBackend',
    'FileLedgerBackend',
    'MemoryLedgerBackend',
    'default_state_paths',
    'Selector',
    'FzfSelector',
    'PromptSelector',
    'make_selector',
]
