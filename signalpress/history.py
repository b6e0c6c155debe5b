"""
Version-control lookups used for last-modified dates and the news log.

The catalog only needs ``last_modified(path)``; anything that provides it can
stand in for git (see ``NullHistory``).
"""

import logging
import os
import subprocess
from typing import List, Optional, Sequence, Tuple


class GitHistory:
    """Query ``git log`` for file timestamps and recent commit subjects."""

    def __init__(self, cwd: Optional[str] = None, git_binary: str = 'git'):
        self.cwd = cwd
        self.git_binary = git_binary
        self.logger = logging.getLogger('Signalpress.history')

    def _run(self, args: Sequence[str]) -> Optional[str]:
        """Run a git command and return its stdout, or None on any failure."""
        cwd = self.cwd if self.cwd and os.path.isdir(self.cwd) else None
        try:
            result = subprocess.run(
                [self.git_binary] + list(args),
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except (OSError, ValueError) as e:
            self.logger.debug(f"git {' '.join(args)} failed: {e}")
            return None

        if result.returncode != 0:
            self.logger.debug(f"git {' '.join(args)} exited with {result.returncode}")
            return None
        return result.stdout.decode('utf-8', errors='replace')

    def last_modified(self, path: str) -> Optional[str]:
        """
        Get the date of the last commit touching ``path``.

        Returns:
            ``YYYY-MM-DD`` string, or None when there is no repository or no history
        """
        out = self._run(['log', '-1', '--format=%cI', '--', os.path.abspath(path)])
        if not out:
            return None
        out = out.strip()
        return out[:10] if out else None

    def recent_commits(self, paths: Sequence[str], limit: int = 60) -> List[Tuple[str, str]]:
        """
        List ``(iso_timestamp, subject)`` for the latest commits touching ``paths``.
        """
        args = ['log', '-n', str(limit), '--date=iso-strict', '--pretty=format:%cI%x09%s', '--']
        args.extend(os.path.abspath(p) for p in paths)
        out = self._run(args)
        if not out:
            return []

        commits = []
        for line in out.splitlines():
            iso, _, subject = line.partition('\t')
            if not iso or not subject:
                continue
            commits.append((iso, subject))
        return commits


class NullHistory:
    """History provider for sites outside a repository."""

    def last_modified(self, path: str) -> Optional[str]:
        return None

    def recent_commits(self, paths: Sequence[str], limit: int = 60) -> List[Tuple[str, str]]:
        return []
