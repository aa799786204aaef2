"""Git helpers: control-state recovery and the pull/commit/push cycle."""

from .recovery import RepoRecovery
from .sync import RepoSync, SyncOutcome

__all__ = ["RepoRecovery", "RepoSync", "SyncOutcome"]
