"""Service container mapping string ids to lazily evaluated factories."""
from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, Optional, Set

from loguru import logger

from gimple.config import ContainerConfig
from gimple.exceptions import ServiceNotFoundError
from gimple.result import Failure, Result, Success

Factory = Callable[["Container"], Any]
ExtendFactory = Callable[[Any, "Container"], Any]


class Container:
    """Registry of named factories.

    Factories receive the container as their only argument, so a service can
    resolve its own dependencies through it. Every lookup re-invokes the stored
    factory; wrap it with share() to memoize.

    Example:
        container = Container()
        container.set_service("greeting", lambda c: "hello")
        container.get_service("greeting").unwrap()  # "hello"
    """

    def __init__(self, config: Optional[ContainerConfig] = None):
        self.config = config or ContainerConfig()
        self._values: Dict[str, Factory] = {}

    def set_service(self, service_id: str, factory: Factory) -> None:
        """Register a factory under service_id, replacing any previous one."""
        if service_id in self._values:
            logger.debug(f"[container] overwriting service '{service_id}'")
        else:
            logger.debug(f"[container] registered service '{service_id}'")
        self._values[service_id] = factory

    def get_service(self, service_id: str) -> Result[Any, ServiceNotFoundError]:
        """Invoke the factory registered under service_id.

        Returns:
            Success with the produced value, or Failure carrying
            ServiceNotFoundError when nothing is registered under service_id
        """
        def resolve(factory: Factory) -> Any:
            if self.config.debug:
                logger.debug(f"[container] resolving service '{service_id}'")
            return factory(self)

        return self._lookup(service_id).map(resolve)

    def service_exists(self, service_id: str) -> bool:
        """Check whether a factory is registered under service_id, without invoking it."""
        return service_id in self._values

    def unset_service(self, service_id: str) -> None:
        """Remove the factory registered under service_id, if any."""
        if service_id in self._values:
            del self._values[service_id]
            logger.debug(f"[container] removed service '{service_id}'")

    def raw(self, service_id: str) -> Result[Factory, ServiceNotFoundError]:
        """Get the factory registered under service_id without invoking it."""
        return self._lookup(service_id)

    def share(self, factory: Factory) -> Factory:
        """Wrap factory so that its result is produced once and then reused.

        The cache belongs to the returned closure, not to the container: it
        only becomes visible through get_service once the wrapper is registered
        with set_service.
        """
        if self.config.share_strategy == "sentinel":
            return self._share_sentinel(factory)

        populated = False
        obj: Any = None

        def shared(c: Container) -> Any:
            nonlocal populated, obj
            if not populated:
                obj = factory(c)
                populated = True
            return obj

        return shared

    @staticmethod
    def _share_sentinel(factory: Factory) -> Factory:
        # None doubles as "not cached yet", so a None-producing factory runs on every call.
        obj: Any = None

        def shared(c: Container) -> Any:
            nonlocal obj
            if obj is None:
                obj = factory(c)
            return obj

        return shared

    def protect(self, factory: Factory) -> Factory:
        """Wrap factory so that resolving it yields the factory itself.

        Useful for storing a callable as a parameter.
        """
        def protected(c: Container) -> Factory:
            return factory

        return protected

    def extend(self, service_id: str, extender: ExtendFactory) -> Result[Factory, ServiceNotFoundError]:
        """Build a factory that post-processes the service registered under service_id.

        The returned factory calls the currently registered factory and passes
        its value, together with the container, to extender. The registry is
        left untouched; register the result to make it visible.

        Args:
            service_id: Identifier of the service to extend
            extender: Callable taking (value, container) and returning the new value

        Returns:
            Success with the new factory, or Failure carrying ServiceNotFoundError
        """
        def wrap(factory: Factory) -> Factory:
            def extended(c: Container) -> Any:
                return extender(factory(c), c)

            logger.debug(f"[container] built extension of service '{service_id}'")
            return extended

        return self._lookup(service_id).map(wrap)

    def keys(self) -> Set[str]:
        """Get all registered ids."""
        return set(self._values)

    def clear(self) -> None:
        """Remove all registrations."""
        self._values.clear()
        logger.debug("[container] cleared all services")

    def _lookup(self, service_id: str) -> Result[Factory, ServiceNotFoundError]:
        if service_id not in self._values:
            logger.debug(f"[container] no service with id '{service_id}'")
            return Failure(ServiceNotFoundError(service_id))
        return Success(self._values[service_id])

    # Mapping-style access
    def __getitem__(self, service_id: str) -> Any:
        return self.get_service(service_id).unwrap()

    def __setitem__(self, service_id: str, factory: Factory) -> None:
        self.set_service(service_id, factory)

    def __delitem__(self, service_id: str) -> None:
        self.unset_service(service_id)

    def __contains__(self, service_id: object) -> bool:
        return service_id in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))
