"""Hooks run around the creation, start, stop and termination of a container."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from containertest.logs import Logging

ContainerRequestHook = Callable[[Any], None]
ContainerHook = Callable[[Any], None]

STAGES = (
    "created",
    "starting",
    "started",
    "stopping",
    "stopped",
    "terminating",
    "terminated",
)


def _run(hooks: Iterable[ContainerHook], target: Any) -> None:
    for hook in hooks:
        hook(target)


@dataclass
class ContainerLifecycleHooks:
    """Lists of hooks for each stage of a container's life.

    Hooks run in order; an exception raised by one stops the rest.
    """

    pre_creates: list[ContainerRequestHook] = field(default_factory=list)
    post_creates: list[ContainerHook] = field(default_factory=list)
    pre_starts: list[ContainerHook] = field(default_factory=list)
    post_starts: list[ContainerHook] = field(default_factory=list)
    pre_stops: list[ContainerHook] = field(default_factory=list)
    post_stops: list[ContainerHook] = field(default_factory=list)
    pre_terminates: list[ContainerHook] = field(default_factory=list)
    post_terminates: list[ContainerHook] = field(default_factory=list)

    def creating(self, request: Any) -> None:
        """Run the hooks called before a container is created."""
        _run(self.pre_creates, request)

    def created(self, container: Any) -> None:
        """Run the hooks called after a container is created."""
        _run(self.post_creates, container)

    def starting(self, container: Any) -> None:
        """Run the hooks called before a container is started."""
        _run(self.pre_starts, container)

    def started(self, container: Any) -> None:
        """Run the hooks called after a container is started."""
        _run(self.post_starts, container)

    def stopping(self, container: Any) -> None:
        """Run the hooks called before a container is stopped."""
        _run(self.pre_stops, container)

    def stopped(self, container: Any) -> None:
        """Run the hooks called after a container is stopped."""
        _run(self.post_stops, container)

    def terminating(self, container: Any) -> None:
        """Run the hooks called before a container is terminated."""
        _run(self.pre_terminates, container)

    def terminated(self, container: Any) -> None:
        """Run the hooks called after a container is terminated."""
        _run(self.post_terminates, container)


_STAGE_METHODS: dict[str, Callable[[ContainerLifecycleHooks, Any], None]] = {
    "created": ContainerLifecycleHooks.created,
    "starting": ContainerLifecycleHooks.starting,
    "started": ContainerLifecycleHooks.started,
    "stopping": ContainerLifecycleHooks.stopping,
    "stopped": ContainerLifecycleHooks.stopped,
    "terminating": ContainerLifecycleHooks.terminating,
    "terminated": ContainerLifecycleHooks.terminated,
}


def run_creating_hooks(hooks: Iterable[ContainerLifecycleHooks], request: Any) -> None:
    """Run the pre-create hooks of every hook set, in order."""
    for lifecycle in hooks:
        lifecycle.creating(request)


def run_container_hooks(
    hooks: Iterable[ContainerLifecycleHooks], stage: str, container: Any
) -> None:
    """Run the hooks of one stage (one of ``STAGES``) of every hook set, in order."""
    try:
        method = _STAGE_METHODS[stage]
    except KeyError:
        raise ValueError(f"unknown lifecycle stage: {stage!r}") from None
    for lifecycle in hooks:
        method(lifecycle, container)


def default_logging_hook(logger: Logging) -> ContainerLifecycleHooks:
    """Return hooks that log every lifecycle event with a short container ID.

    Requests need an ``image`` attribute and containers an ``id`` attribute.
    """

    def short_id(container: Any) -> str:
        return str(container.id)[:12]

    def container_hook(message: str) -> ContainerHook:
        def hook(container: Any) -> None:
            logger.printf(message, short_id(container))

        return hook

    def pre_create(request: Any) -> None:
        logger.printf("🐳 Creating container for image %s", request.image)

    return ContainerLifecycleHooks(
        pre_creates=[pre_create],
        post_creates=[container_hook("✅ Container created: %s")],
        pre_starts=[container_hook("🐳 Starting container: %s")],
        post_starts=[container_hook("✅ Container started: %s")],
        pre_stops=[container_hook("🐳 Stopping container: %s")],
        post_stops=[container_hook("✋ Container stopped: %s")],
        pre_terminates=[container_hook("🐳 Terminating container: %s")],
        post_terminates=[container_hook("🚫 Container terminated: %s")],
    )