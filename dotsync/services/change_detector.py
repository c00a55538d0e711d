"""
External change-detector hook for dotsync.

A domain may ship an executable inside its own working copy (by default
``scripts/check-claude-changes.sh``) that looks for local changes the
generic checks do not cover. It runs as a subprocess attached to the
terminal, in the working copy, with:

    DOTSYNC_DOMAIN     domain name
    DOTSYNC_REPO_PATH  working copy path
    DOTSYNC_REMOTE     remote name
    DOTSYNC_BRANCH     branch name

Exit status 0 means handled; anything else is a non-fatal failure.
Files without the executable bit are run through ``sh``.
"""

import os
import subprocess
from dataclasses import dataclass
from typing import Optional
import logging

from ..domain.sync_domain import SyncDomain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectorResult:
    ran: bool
    returncode: int = 0

    @property
    def ok(self) -> bool:
        return not self.ran or self.returncode == 0


class ChangeDetectorRunner:
    """Runs a domain's change-detector executable, if it has one."""

    def __init__(self, timeout: Optional[int] = None, shell: str = "sh"):
        self.timeout = timeout
        self.shell = shell

    def environment(self, domain: SyncDomain) -> dict:
        env = dict(os.environ)
        env.update({
            "DOTSYNC_DOMAIN": domain.name,
            "DOTSYNC_REPO_PATH": str(domain.working_copy),
            "DOTSYNC_REMOTE": domain.remote,
            "DOTSYNC_BRANCH": domain.branch,
        })
        return env

    def run(self, domain: SyncDomain) -> DetectorResult:
        script = domain.change_detector_path
        if script is None or not script.is_file():
            return DetectorResult(ran=False)

        if os.access(script, os.X_OK):
            cmd = [str(script)]
        else:
            cmd = [self.shell, str(script)]

        try:
            returncode = subprocess.run(
                cmd,
                cwd=str(domain.working_copy),
                env=self.environment(domain),
                timeout=self.timeout,
            ).returncode
        except subprocess.TimeoutExpired:
            logger.warning(f"Change detector for {domain.name} timed out: {script}")
            return DetectorResult(ran=True, returncode=-1)
        except OSError as e:
            logger.warning(f"Cannot run change detector for {domain.name}: {e}")
            return DetectorResult(ran=True, returncode=-1)

        if returncode != 0:
            logger.warning(f"Change detector for {domain.name} exited with {returncode}")
        return DetectorResult(ran=True, returncode=returncode)
