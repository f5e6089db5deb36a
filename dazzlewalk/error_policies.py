"""
Teardown error policies for DazzleWalk.

A walk records exactly one cause: the first failure. Failures raised while
the walk is already being torn down (exit-level hooks, walk-end hooks and
end-of-walk callbacks run by ``end()``) never replace that cause. They are
handed to a TeardownErrorPolicy instead, which decides how to surface them.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


# Teardown stages reported to policies
STAGE_EXIT_LEVEL = "exit_level"
STAGE_WALK_END = "walk_end"
STAGE_END_HANDLER = "end_handler"
STAGE_DONE_CALLBACK = "done_callback"
STAGE_AFTER_END = "after_end"


class TeardownErrorPolicy(ABC):
    """
    Base class for teardown error policies.

    Subclasses implement different strategies for surfacing errors that
    occur after a walk has started ending.
    """

    @abstractmethod
    def handle(self, error: Exception, stage: str, context: Any) -> None:
        """
        Handle an error raised during teardown.

        Args:
            error: The exception that was raised
            stage: Teardown stage that failed (e.g. 'exit_level')
            context: The WalkContext being torn down

        Policies must not raise; teardown continues after this returns.
        """
        pass


class LogTeardownErrorsPolicy(TeardownErrorPolicy):
    """
    Policy that logs every teardown error with its traceback.

    This is the default: nothing is lost, and the walk outcome is untouched.
    """

    def __init__(self, level: int = logging.ERROR):
        """
        Initialize the policy.

        Args:
            level: Logging level used for teardown errors
        """
        self.level = level

    def handle(self, error: Exception, stage: str, context: Any) -> None:
        """Log the error and carry on."""
        logger.log(
            self.level,
            "Error during walk teardown (%s): %s",
            stage,
            error,
            exc_info=(type(error), error, error.__traceback__),
        )


class CollectTeardownErrorsPolicy(TeardownErrorPolicy):
    """
    Policy that collects teardown errors without logging.

    Useful in tests and batch jobs that inspect failures afterwards.
    """

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []

    def handle(self, error: Exception, stage: str, context: Any) -> None:
        """Record the error for later inspection."""
        self.errors.append({
            'stage': stage,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        })

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts per stage
        """
        by_stage: Dict[str, int] = {}
        for record in self.errors:
            by_stage[record['stage']] = by_stage.get(record['stage'], 0) + 1
        return {
            'total_errors': len(self.errors),
            'by_stage': by_stage,
            'error_types': sorted({e['error_type'] for e in self.errors}),
        }

    def clear(self) -> None:
        """Forget all collected errors."""
        self.errors.clear()


class ThresholdTeardownPolicy(TeardownErrorPolicy):
    """
    Policy that logs teardown errors until a maximum count is reached.

    Later errors are only counted, which keeps a misbehaving callback from
    flooding the log when the same walker is reused for many walks.
    """

    def __init__(self, max_errors: int = 10):
        """
        Initialize the threshold policy.

        Args:
            max_errors: Number of errors to log before going quiet
        """
        self.max_errors = max_errors
        self.error_count = 0

    def handle(self, error: Exception, stage: str, context: Any) -> None:
        """Log while under the threshold, count otherwise."""
        self.error_count += 1
        if self.error_count <= self.max_errors:
            logger.error(
                "Error during walk teardown [%d/%d] (%s): %s",
                self.error_count, self.max_errors, stage, error,
            )
        elif self.error_count == self.max_errors + 1:
            logger.error(
                "Teardown error threshold of %d reached; suppressing further reports",
                self.max_errors,
            )
