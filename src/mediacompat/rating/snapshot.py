"""Hot-reloadable rating policy holder.

A batch takes one snapshot at its start and scores every record with it; a
reload swaps the snapshot atomically so later batches see the new policy
while running batches keep the one they started with.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from mediacompat.rating.exceptions import PolicyValidationError
from mediacompat.rating.loader import load_policy
from mediacompat.rating.types import RatingPolicy, default_policy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReloadResult:
    """Outcome of a policy reload attempt.

    Attributes:
        success: Whether the new policy was installed.
        changed: Whether the installed policy differs from the previous one.
        error: Validation error message when the reload failed.
    """

    success: bool
    changed: bool = False
    error: str | None = None


class PolicyStore:
    """Thread-safe holder of the current rating policy snapshot."""

    def __init__(
        self, path: Path | None = None, policy: RatingPolicy | None = None
    ) -> None:
        """Initialize the store.

        Args:
            path: Policy YAML file used by reload(). Without a path the
                store serves the given or built-in policy only.
            policy: Initial snapshot. When omitted the file at path is
                loaded, or the built-in default policy is used.

        Raises:
            PolicyValidationError: If the initial policy file is invalid.
        """
        self._path = path
        self._lock = threading.Lock()
        if policy is None:
            policy = load_policy(path) if path is not None else default_policy()
        self._policy = policy

    @property
    def path(self) -> Path | None:
        return self._path

    def snapshot(self) -> RatingPolicy:
        """Return the current immutable policy."""
        with self._lock:
            return self._policy

    def replace(self, policy: RatingPolicy) -> None:
        """Install a policy built elsewhere."""
        with self._lock:
            self._policy = policy

    def reload(self) -> ReloadResult:
        """Reload the policy file and swap it in if valid.

        A failed reload leaves the previous snapshot in place.

        Returns:
            ReloadResult describing the outcome.
        """
        if self._path is None:
            return ReloadResult(success=False, error="No policy file configured")

        try:
            policy = load_policy(self._path)
        except PolicyValidationError as e:
            logger.warning("Policy reload failed, keeping previous policy: %s", e)
            return ReloadResult(success=False, error=str(e))

        with self._lock:
            changed = policy != self._policy
            self._policy = policy

        if changed:
            logger.info("Reloaded rating policy %r from %s", policy.name, self._path)
        return ReloadResult(success=True, changed=changed)
