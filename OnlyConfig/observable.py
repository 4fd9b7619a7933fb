"""
Observable value with change notification.

An Observable holds one value and an ordered list of listeners. Listeners
are notified only when ``set`` receives an object that is not the one
already held: the comparison is identity (``is``), never equality, so a
caller that mutated a container in place must pass a new container to
trigger a notification.
"""

from typing import Any, Callable, Generic, List, Optional, TypeVar

from OnlyConfig.utils.logging import get_logger

T = TypeVar('T')

Listener = Callable[[Any], None]
Unsubscribe = Callable[[], None]

logger = get_logger(__name__, {'component': 'observable'})


class _Subscription:
    """One registration of a listener; identity distinguishes repeats of the same callable."""

    __slots__ = ('listener',)

    def __init__(self, listener: Listener) -> None:
        self.listener = listener


class Observable(Generic[T]):
    """
    A value that notifies subscribers when it is replaced.

    Examples:
        >>> obs = Observable(1)
        >>> unsubscribe = obs.subscribe(print)
        >>> obs.set(2)
        2
        >>> unsubscribe()
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._subscriptions: List[_Subscription] = []

    def get(self) -> T:
        """Return the current value."""
        return self._value

    def set(self, value: T) -> None:
        """
        Replace the value and notify listeners if it is a different object.

        Listeners run synchronously in subscription order over a snapshot of
        the subscription list, so listeners may subscribe or unsubscribe
        without affecting the current pass. If a listener sets a newer value,
        the current pass stops and the nested pass delivers the newer value to
        every listener instead. If a listener raises, the
        remaining listeners still run and the first exception is re-raised
        once the pass is complete.

        Args:
            value: The new value
        """
        if value is self._value:
            return
        self._value = value

        first_error: Optional[BaseException] = None
        for subscription in list(self._subscriptions):
            if self._value is not value:
                # A listener set a newer value; its own pass has notified the rest
                break
            try:
                subscription.listener(value)
            except Exception as e:
                logger.exception(
                    f"Listener {getattr(subscription.listener, '__qualname__', subscription.listener)!r} failed",
                )
                if first_error is None:
                    first_error = e

        if first_error is not None:
            raise first_error

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """
        Register a listener and return a callable that removes it.

        Subscribing the same callable twice creates two independent
        subscriptions; each returned unsubscriber removes only its own.

        Args:
            listener: Callable invoked with the new value on every change

        Returns:
            A function that cancels this subscription. Calling it more than
            once has no further effect.
        """
        subscription = _Subscription(listener)
        self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            # Rebind rather than remove in place; a pass in progress holds its own snapshot
            self._subscriptions = [s for s in self._subscriptions if s is not subscription]

        return unsubscribe

    @property
    def listener_count(self) -> int:
        """Number of active subscriptions."""
        return len(self._subscriptions)

    def clear(self) -> None:
        """Remove every listener."""
        self._subscriptions = []

    def __repr__(self) -> str:
        return f"Observable({self._value!r}, listeners={len(self._subscriptions)})"
