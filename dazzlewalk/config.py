"""Configuration system for DazzleWalk.

This module defines how users tune a walk: where adapters record the
location of each visited item, how deep the engine descends, and what
happens to failures raised while a walk is being torn down.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional


class Keys:
    """Well-known metadata keys written by the reference adapters."""
    PATH = "path"


@dataclass
class WalkConfig:
    """Complete configuration for a walk.

    A config is attached to the walker that starts a walk and is shared,
    read-only, by every level of that walk through ``context.config``.
    """

    # Location tracking (adapter policy, not engine policy)
    path_key: str = Keys.PATH          # Metadata key adapters write paths under
    root_path: str = "."               # Path of the root value

    # Depth control
    max_depth: Optional[int] = None    # Items at this depth are not descended

    # Teardown failures (see error_policies)
    teardown_policy: Optional[Any] = None  # None = LogTeardownErrorsPolicy

    # Free-form settings for custom walkers
    extras: dict = field(default_factory=dict)

    # Convenience constructors for common configurations

    @classmethod
    def shallow(cls, max_depth: int = 0) -> 'WalkConfig':
        """Create config that stops descending below ``max_depth``.

        Args:
            max_depth: Deepest event depth whose containers are still
                descended into (default 0 = root's children are leaves)

        Returns:
            WalkConfig for a shallow walk
        """
        return cls(max_depth=max_depth)

    @classmethod
    def collecting(cls) -> 'WalkConfig':
        """Create config that keeps teardown failures for later inspection.

        Returns:
            WalkConfig using CollectTeardownErrorsPolicy
        """
        from .error_policies import CollectTeardownErrorsPolicy
        return cls(teardown_policy=CollectTeardownErrorsPolicy())

    def get_teardown_policy(self):
        """Return the configured teardown policy, creating the default lazily."""
        if self.teardown_policy is None:
            from .error_policies import LogTeardownErrorsPolicy
            self.teardown_policy = LogTeardownErrorsPolicy()
        return self.teardown_policy

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.path_key, str) or not self.path_key:
            errors.append("path_key must be a non-empty string")

        if not isinstance(self.root_path, str):
            errors.append("root_path must be a string")

        if self.max_depth is not None:
            if not isinstance(self.max_depth, int) or isinstance(self.max_depth, bool):
                errors.append("max_depth must be an integer")
            elif self.max_depth < 0:
                errors.append("max_depth cannot be negative")

        if self.teardown_policy is not None and not callable(
            getattr(self.teardown_policy, "handle", None)
        ):
            errors.append("teardown_policy must provide a handle() method")

        return errors
