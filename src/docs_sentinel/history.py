"""
History date resolver - when was a referenced file last changed?

Git history is preferred. A shallow clone has truncated history, so every
path falls back to filesystem mtime there; the same goes for a project
that is not a git repository. A failing git query only affects the path
being queried, which then uses its mtime.

Each path gets its own `git log` call. A batched query returns a single
timestamp for the whole pathset and would attribute it to every path.
"""

import logging
import subprocess
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .constants import GIT_TIMEOUT

logger = logging.getLogger(__name__)


class HistoryError(Exception):
    """Raised when a git history query fails or returns nothing usable."""
    pass


class HistoryMode(Enum):
    NONE = "none"        # no repository, git missing, or git disabled
    SHALLOW = "shallow"  # truncated history, dates unreliable
    NORMAL = "normal"


class HistoryResolver:
    def __init__(self, project_root: Path, use_git: bool = True, timeout: float = GIT_TIMEOUT):
        self.project_root = Path(project_root)
        self.timeout = timeout
        self.mode = self._detect_mode() if use_git else HistoryMode.NONE
        logger.debug(f"History mode for {self.project_root}: {self.mode.value}")

    def _run_git(self, args: List[str]) -> str:
        try:
            result = subprocess.run(
                ["git"] + args,
                cwd=self.project_root,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise HistoryError("git is not installed") from e
        except subprocess.TimeoutExpired as e:
            raise HistoryError(f"git {' '.join(args)} timed out after {self.timeout}s") from e
        except subprocess.CalledProcessError as e:
            raise HistoryError(f"git {' '.join(args)} failed: {(e.stderr or '').strip()}") from e
        return result.stdout

    def _detect_mode(self) -> HistoryMode:
        try:
            self._run_git(["rev-parse", "--git-dir"])
        except HistoryError as e:
            logger.debug(f"No git history available: {e}")
            return HistoryMode.NONE

        try:
            shallow = self._run_git(["rev-parse", "--is-shallow-repository"]).strip() == "true"
        except HistoryError:
            return HistoryMode.NORMAL
        return HistoryMode.SHALLOW if shallow else HistoryMode.NORMAL

    def git_date(self, ref: str) -> datetime:
        """Committer date of the most recent commit touching ref."""
        output = self._run_git(["log", "-1", "--format=%ct", "--", ref]).strip()
        try:
            timestamp = int(output)
        except ValueError:
            raise HistoryError(f"No commit timestamp for {ref}")
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)

    @staticmethod
    def mtime(path: Path) -> datetime:
        return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)

    def last_changed(self, ref: str) -> Optional[datetime]:
        """Last meaningful change of ref, or None if the file does not exist."""
        path = self.project_root / ref
        if not path.exists():
            return None

        if self.mode is HistoryMode.NORMAL:
            try:
                return self.git_date(ref)
            except HistoryError as e:
                logger.debug(f"Falling back to mtime for {ref}: {e}")

        try:
            return self.mtime(path)
        except OSError as e:
            logger.debug(f"Could not stat {ref}: {e}")
            return None

    def resolve_all(self, refs: Iterable[str]) -> Dict[str, datetime]:
        """Resolve each ref independently, one query at a time."""
        dates: Dict[str, datetime] = {}
        for ref in refs:
            changed = self.last_changed(ref)
            if changed is not None:
                dates[ref] = changed
        return dates
