"""The walk engine for DazzleWalk.

A WalkContext owns one walk: an explicit stack of Levels, the walker
registry, the event handlers, context-scoped data and the
ACTIVE / PAUSED / ENDED state machine.

The drive loop is iterative. Descending into a composite value pushes a
Level and returns to the loop instead of recursing, so the stack of Levels
is the sole record of where the walk is. That is what lets a handler pause
the walk, return, and have some other thread (a timer, an event loop
callback) resume it later from exactly the same position without any
suspended call frames being kept around.
"""

import logging
import threading
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Tuple, TYPE_CHECKING

from ..config import WalkConfig
from ..error_policies import (
    STAGE_AFTER_END,
    STAGE_DONE_CALLBACK,
    STAGE_END_HANDLER,
    STAGE_EXIT_LEVEL,
    STAGE_WALK_END,
)
from ..exceptions import WalkEndedError
from .event import Event
from .item import Item
from .level import EXHAUSTED, Level

if TYPE_CHECKING:
    from .walker import Walker

logger = logging.getLogger(__name__)


class WalkState(Enum):
    """Lifecycle state of a walk."""
    ACTIVE = "active"      # The drive loop may process items
    PAUSED = "paused"      # Waiting for resume()
    ENDED = "ended"        # Terminal


class WalkOutcome(Enum):
    """How an ended walk finished, frozen when teardown starts."""
    SUCCESS = "success"
    FAILURE = "failure"


class WalkContext:
    """Engine instance owning the stack and control state for one walk.

    Every entry point that reads or changes the stack (the drive loop,
    ``handle``, ``pause``, ``resume``, ``skip_level``, ``end``) runs under
    one re-entrant lock, so a handler can call them from inside the loop
    and other threads can call them safely from outside it. Only one drive
    loop runs at a time.
    """

    def __init__(self,
                 root_value: Any = None,
                 walkers: Optional[Mapping[type, "Walker"]] = None,
                 handlers: Iterable[Callable[[Event], None]] = (),
                 config: Optional[WalkConfig] = None):
        """Create a context for a single walk.

        Args:
            root_value: The value the walk was started on
            walkers: Registry of walkers keyed by exact value type
            handlers: Event handlers, invoked in this order
            config: Walk configuration
        """
        self._root_value = root_value
        self._walkers = walkers if walkers is not None else MappingProxyType({})
        self._handlers = tuple(handlers)
        self._config = config or WalkConfig()

        self._stack: List[Level] = []
        self._state = WalkState.ACTIVE
        self._outcome: Optional[WalkOutcome] = None
        self._cause: Optional[BaseException] = None
        self._teardown_errors: List[BaseException] = []
        self._data: Optional[Dict[str, Any]] = None

        self._end_handlers: List[Tuple[Optional[Hashable], Callable[["WalkContext"], None]]] = []
        self._end_handler_keys = set()
        self._done_callbacks: List[Callable[["WalkContext"], None]] = []

        self._lock = threading.RLock()
        self._driver: Optional[object] = None
        # Level the item being delegated was pulled from, while delegating
        self._source_level: Optional[Level] = None
        self._finished = threading.Event()

    # State

    @property
    def state(self) -> WalkState:
        return self._state

    @property
    def paused(self) -> bool:
        return self._state is WalkState.PAUSED

    @property
    def ended(self) -> bool:
        return self._state is WalkState.ENDED

    @property
    def success(self) -> bool:
        """True while no failure has been recorded."""
        return self._cause is None

    @property
    def failed(self) -> bool:
        return self._cause is not None

    @property
    def cause(self) -> Optional[BaseException]:
        """The first failure of the walk, if any."""
        return self._cause

    @property
    def outcome(self) -> Optional[WalkOutcome]:
        """SUCCESS or FAILURE once the walk ended, None before."""
        return self._outcome

    @property
    def teardown_errors(self) -> List[BaseException]:
        """Failures raised by hooks and callbacks while the walk was ending."""
        return list(self._teardown_errors)

    @property
    def level_index(self) -> int:
        """Number of Levels currently on the stack."""
        return len(self._stack)

    @property
    def current_level(self) -> Optional[Level]:
        return self._stack[-1] if self._stack else None

    @property
    def walkers(self) -> Mapping[type, "Walker"]:
        return self._walkers

    @property
    def config(self) -> WalkConfig:
        return self._config

    @property
    def root_value(self) -> Any:
        return self._root_value

    # Context-scoped storage

    def data(self) -> Dict[str, Any]:
        """Return the live context-scoped store."""
        if self._data is None:
            self._data = {}
        return self._data

    def put(self, key: str, value: Any) -> "WalkContext":
        self.data()[key] = value
        return self

    def get(self, key: str, default: Any = None) -> Any:
        if self._data is None:
            return default
        return self._data.get(key, default)

    def remove(self, key: str) -> Any:
        if self._data is None:
            return None
        return self._data.pop(key, None)

    # Registration

    def add_end_handler(self,
                        handler: Callable[["WalkContext"], None],
                        key: Optional[Hashable] = None) -> "WalkContext":
        """Register a callback run once when the walk ends.

        Args:
            handler: Callable receiving this context
            key: When given, later registrations with the same key are ignored

        Raises:
            WalkEndedError: If the walk has already ended
        """
        with self._lock:
            if self._state is WalkState.ENDED:
                raise WalkEndedError("context is ended")
            if key is not None:
                if key in self._end_handler_keys:
                    return self
                self._end_handler_keys.add(key)
            self._end_handlers.append((key, handler))
        return self

    def add_done_callback(self, callback: Callable[["WalkContext"], None]) -> None:
        """Run ``callback(context)`` after teardown completes.

        If the walk has already ended, the callback runs immediately.
        """
        with self._lock:
            if not self._finished.is_set():
                self._done_callbacks.append(callback)
                return
        callback(self)

    def join(self, timeout: Optional[float] = None) -> bool:
        """Block until the walk has ended.

        Returns:
            True if the walk ended, False if the timeout expired first
        """
        return self._finished.wait(timeout)

    # Stack and drive loop

    def handle(self, level: Level) -> None:
        """Push ``level`` and make sure the drive loop is running.

        Called by walkers. Inside the drive loop this only pushes; the loop
        picks the new level up on its next step.
        """
        with self._lock:
            if self._state is WalkState.ENDED:
                raise WalkEndedError("context is ended")
            if self._stack:
                parent_level = self._stack[-1]
                # After skip_level() the top is no longer the item's own level
                own_level = self._source_level is None or self._source_level is parent_level
                if own_level and parent_level.next_level_handler is not None:
                    parent_level.next_level_handler(level)
            self._stack.append(level)
            logger.debug("Entered level %d", len(self._stack))
            start = self._driver is None
        if start:
            self._drive()

    def _drive(self) -> None:
        token = object()
        with self._lock:
            if self._driver is not None:
                return
            self._driver = token
        try:
            while True:
                with self._lock:
                    # Stop decisions and releasing the driver happen under one
                    # lock hold so a concurrent resume() is never lost.
                    if self._state is not WalkState.ACTIVE:
                        self._driver = None
                        return
                    if not self._stack:
                        self._driver = None
                        logger.debug("Ending walk: stack is empty")
                        self.end()
                        return
                    try:
                        self._step()
                    except Exception as exc:
                        self._driver = None
                        self.fail(exc)
                        return
        finally:
            with self._lock:
                if self._driver is token:
                    self._driver = None

    def _step(self) -> None:
        """Process one item of the top level, or pop it when exhausted."""
        level = self._stack[-1]
        item = level.next_item()
        if item is EXHAUSTED:
            self._pop_level()
            return

        depth = len(self._stack) - 1
        walker = self._lookup_walker(item, depth)

        # Containers with a walker only fire when that walker asks for it
        if walker is None or walker.fires_entry_event():
            event = Event(item, level, depth, walker)
            for handler in self._handlers:
                if self._state is not WalkState.ACTIVE:
                    break
                try:
                    handler(event)
                except Exception:
                    logger.error("Exception in event handler for %r", item, exc_info=True)
                    raise
            walker = event.walker_override()

        # A paused walk still records the descent so resume() continues inside it
        if walker is not None and self._state is not WalkState.ENDED:
            logger.debug("Relaying %r to %r", item, walker)
            self._source_level = level
            try:
                walker.handle(item, self)
            finally:
                self._source_level = None

    def _lookup_walker(self, item: Item, depth: int) -> Optional["Walker"]:
        value = item.value
        if value is None:
            return None
        max_depth = self._config.max_depth
        if max_depth is not None and depth >= max_depth:
            return None
        walker = self._walkers.get(type(value))
        if walker is None:
            logger.debug("No walker registered for type %r", type(value).__name__)
        return walker

    def _pop_level(self) -> None:
        level = self._stack.pop()
        logger.debug("Exited level %d", len(self._stack) + 1)
        if level.exit_level_handler is not None:
            level.exit_level_handler(level)

    # Control

    def pause(self) -> "WalkContext":
        """Suspend the walk after the current handler returns.

        Remaining handlers for the current item are skipped. No-op unless
        the walk is ACTIVE.
        """
        with self._lock:
            if self._state is WalkState.ACTIVE:
                self._state = WalkState.PAUSED
                logger.debug("Walk paused at level %d", len(self._stack))
        return self

    def resume(self) -> None:
        """Continue a paused walk from exactly where it stopped.

        May be called from any thread. No-op unless the walk is PAUSED.
        """
        with self._lock:
            if self._state is not WalkState.PAUSED:
                return
            self._state = WalkState.ACTIVE
            logger.debug("Walk resumed at level %d", len(self._stack))
        self._drive()

    def skip_level(self) -> None:
        """Pop the current level without visiting its remaining items.

        The item currently being handled is still descended into; only its
        not-yet-visited siblings are abandoned.
        """
        with self._lock:
            if self._state is WalkState.ENDED or not self._stack:
                return
            logger.debug("Skipping level %d", len(self._stack))
            self._pop_level()

    def fail(self, error: BaseException) -> None:
        """Record ``error`` as the walk's cause and end the walk.

        The first failure wins. A failure reported after the walk already
        ended is treated as a teardown failure and leaves the cause alone.
        """
        with self._lock:
            if self._state is WalkState.ENDED:
                self._record_teardown_error(error, STAGE_AFTER_END)
                return
            if self._cause is None:
                self._cause = error
                logger.debug("Walk failed: %r", error)
            else:
                logger.warning("Additional failure after walk failed: %r", error)
        self.end()

    def end(self) -> None:
        """End the walk. Idempotent.

        Pops every open level (running its exit-level and walk-end hooks),
        then runs the end handlers, then the done callbacks. Failures raised
        by any of these go to the configured teardown policy and to
        ``teardown_errors``; they never change the cause or the outcome.
        """
        with self._lock:
            if self._state is WalkState.ENDED:
                return
            self._state = WalkState.ENDED
            self._outcome = WalkOutcome.FAILURE if self._cause is not None else WalkOutcome.SUCCESS
            logger.debug("End of walk (%s)", self._outcome.value)

            while self._stack:
                level = self._stack.pop()
                self._run_teardown(level.exit_level_handler, level, STAGE_EXIT_LEVEL)
                self._run_teardown(level.walk_end_handler, self, STAGE_WALK_END)

            for _, handler in self._end_handlers:
                self._run_teardown(handler, self, STAGE_END_HANDLER)

            callbacks, self._done_callbacks = self._done_callbacks, []
            self._finished.set()

        for callback in callbacks:
            self._run_teardown(callback, self, STAGE_DONE_CALLBACK)

    def _run_teardown(self, fn: Optional[Callable[[Any], None]], arg: Any, stage: str) -> None:
        if fn is None:
            return
        try:
            fn(arg)
        except Exception as exc:
            self._record_teardown_error(exc, stage)

    def _record_teardown_error(self, error: BaseException, stage: str) -> None:
        # Never touches the cause: the outcome was already decided
        self._teardown_errors.append(error)
        policy = self._config.get_teardown_policy()
        try:
            policy.handle(error, stage, self)
        except Exception:
            logger.error("Teardown error policy %r failed handling %r", policy, error, exc_info=True)

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(state={self._state.value}, "
                f"level_index={len(self._stack)}, cause={self._cause!r})")
