"""Walker abstraction for DazzleWalk.

The Walker is what makes DazzleWalk work with ANY data shape. The engine
(WalkContext) knows nothing about dicts, lists or custom records; a Walker
knows how to enumerate the children of exactly one value type, and the
engine asks the matching walker whenever it meets a value of that type.
"""

import logging
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, List, Mapping, Optional

from ..config import WalkConfig
from ..exceptions import WalkEndedError, WalkerConfigurationError
from .context import WalkContext, WalkOutcome
from .event import Event
from .item import Item
from .level import Level

logger = logging.getLogger(__name__)

Handler = Callable[[Event], None]
ContextCallback = Callable[[WalkContext], None]


class Walker(ABC):
    """Abstract node-processor for one value type.

    A walker:
    - declares the exact runtime type it handles (``value_type``)
    - produces the ordered children of such a value (``children_of``)
    - optionally asks for an event for the container itself
      (``fires_entry_event``)
    - owns a registry of child walkers, keyed by their value type, which
      the engine consults when a walk is started from this walker

    Handlers and end/error callbacks are registered on the walker that
    starts a walk; each walk gets its own WalkContext, so one configured
    walker can be reused for many independent walks.
    """

    def __init__(self,
                 walkers: Optional[Iterable["Walker"]] = None,
                 *,
                 config: Optional[WalkConfig] = None,
                 fire_entry_event: bool = False):
        """Initialize the walker.

        Args:
            walkers: Child walkers to register, keyed by their value type
            config: Walk configuration used when this walker starts a walk
            fire_entry_event: Fire an event for containers of this walker's
                type before their children

        Raises:
            WalkerConfigurationError: On duplicate types or invalid config
        """
        self._walkers = {}
        self._handlers: List[Handler] = []
        self._end_handler: Optional[ContextCallback] = None
        self._error_handler: Optional[ContextCallback] = None
        self._fire_entry_event = fire_entry_event

        config = config or WalkConfig()
        config_errors = config.validate()
        if config_errors:
            raise WalkerConfigurationError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )
        self.config = config

        for walker in walkers or ():
            self.register(walker)

    # Capability - subclasses declare what they handle

    @abstractmethod
    def value_type(self) -> type:
        """Return the exact runtime type this walker handles.

        Registry lookup is exact: a subclass of this type does not match
        unless a walker is registered for it too.
        """
        pass

    @abstractmethod
    def children_of(self, item: Item, context: WalkContext) -> Iterator[Item]:
        """Produce the children of ``item.value`` in a stable order.

        Should be lazy - a generator that derives each child Item on demand.
        Every call starts a fresh sequence; the engine consumes each returned
        sequence at most once. An empty composite yields nothing.

        Args:
            item: Item whose value is of this walker's type
            context: The running walk

        Returns:
            Iterator yielding child Items (use ``item.derive_child``)
        """
        pass

    def fires_entry_event(self) -> bool:
        """Whether containers of this type get an event of their own.

        Returns:
            False by default: only the container's descendants fire
        """
        return self._fire_entry_event

    def enter(self, level: Level) -> None:
        """Hook called after a level is built and before it is pushed.

        Subclasses can override this to register level hooks or seed
        level-scoped data.
        """
        pass

    # Registry

    def register(self, walker: "Walker") -> "Walker":
        """Register a child walker under its value type.

        Raises:
            WalkerConfigurationError: If a walker for that type already exists
        """
        key = walker.value_type()
        if key in self._walkers:
            raise WalkerConfigurationError(
                f"A walker for type {key.__name__!r} is already registered "
                f"on {self.__class__.__name__}"
            )
        self._walkers[key] = walker
        return self

    @property
    def walkers(self) -> Mapping[type, "Walker"]:
        """Read-only view of the registered child walkers."""
        return MappingProxyType(self._walkers)

    # Handler registration

    def on_handler(self, handler: Handler) -> "Walker":
        """Register an event handler; all handlers run in registration order."""
        self._handlers.append(handler)
        return self

    def on_end(self, handler: ContextCallback) -> "Walker":
        """Set the callback run when a walk ends successfully (last one wins)."""
        self._end_handler = handler
        return self

    def on_error(self, handler: ContextCallback) -> "Walker":
        """Set the callback run when a walk ends with a failure (last one wins)."""
        self._error_handler = handler
        return self

    @property
    def handlers(self) -> tuple:
        return tuple(self._handlers)

    # Walking

    def handle(self,
               value: Any,
               context: Optional[WalkContext] = None,
               *,
               handlers: Iterable[Handler] = ()) -> WalkContext:
        """Walk ``value``, or process it as part of an existing walk.

        Without a context this starts a new walk: the value is wrapped in a
        root Item (unless it already is one) and a fresh WalkContext is built
        from this walker's registry, handlers and config. Failures raised by
        handlers are recorded on the returned context - inspect
        ``context.failed`` / ``context.cause`` or register ``on_error``.

        Args:
            value: Value (or Item) to walk
            context: Running walk to join, None to start a new one
            handlers: Extra handlers for a new walk only, run after the
                walker's own handlers. A running walk keeps the handlers
                it started with, so they cannot be combined with ``context``

        Returns:
            The WalkContext driving the walk

        Raises:
            WalkEndedError: If ``context`` has already ended
            WalkerConfigurationError: If ``handlers`` are given with ``context``

        Example:
            >>> walker = RecordWalker.instance()
            >>> walker.on_handler(lambda event: print(event.path, event.value))
            >>> context = walker.handle({"a": 1, "b": [2, 3]})
        """
        item = value if isinstance(value, Item) else Item(value)

        if context is not None:
            if handlers:
                raise WalkerConfigurationError(
                    "handlers= only applies when starting a new walk"
                )
            self._dispatch(item, context)
            return context

        context = WalkContext(
            item.value,
            walkers=self.walkers,
            handlers=self.handlers + tuple(handlers),
            config=self.config,
        )
        logger.debug("Starting walk of %s with %r", type(item.value).__name__, self)
        try:
            self._dispatch(item, context)
        except WalkEndedError:
            raise
        except Exception as exc:
            # The root level could not be built (e.g. children_of rejected the value)
            context.fail(exc)
        return context

    def _dispatch(self, item: Item, context: WalkContext) -> None:
        if context.ended:
            raise WalkEndedError("context is ended")

        context.add_end_handler(self._route_outcome, key=self)

        level = Level(self.children_of(item, context), context, item)
        self.enter(level)
        context.handle(level)

    def _route_outcome(self, context: WalkContext) -> None:
        """End-of-walk routing: exactly one of the end/error callbacks."""
        if context.outcome is WalkOutcome.SUCCESS:
            if self._end_handler is not None:
                self._end_handler(context)
        elif self._error_handler is not None:
            self._error_handler(context)

    def __repr__(self) -> str:
        """String representation."""
        types = ", ".join(t.__name__ for t in self._walkers)
        return f"{self.__class__.__name__}(type={self.value_type().__name__}, walkers=[{types}])"
