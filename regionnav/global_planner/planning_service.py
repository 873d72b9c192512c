"""Planning service module: runs planning requests off the caller's thread.

The service owns the planner state and allows one outstanding request at a time. A
request returns a ticket right away; the search runs on a single worker thread and its
result reaches the caller through the callbacks and the ticket's future.
"""
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Event, Lock
from typing import Optional

from regionnav.exceptions import PlanningBusyError
from regionnav.global_planner.global_planner import (GlobalPlanner, PathReadyCallback,
                                                     PlanResult, PlatformTransitionCallback,
                                                     deliver)
from regionnav.global_planner.planner_state import PlannerState
from regionnav.local_planner.movement_properties import MovementProperties
from regionnav.local_planner.path_node import PathNode
from regionnav.utils.logger import Logger


class PlanTicket:
    """Handle of an outstanding planning request."""

    def __init__(self, future: Future, cancel_event: Event):
        """Initialize the ticket.

        Args:
            future: Future resolving to the PlanResult.
            cancel_event: Set when the caller abandons the request.
        """
        self.future = future
        self._cancel_event = cancel_event

    def cancel(self) -> None:
        """Abandon the request; its callbacks will not be invoked."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        """True once the request has been abandoned."""
        return self._cancel_event.is_set()

    def done(self) -> bool:
        """True once the search finished, successfully or not."""
        return self.future.done()

    def result(self, timeout: float = None) -> PlanResult:
        """Wait for the result; re-raises any error of the search."""
        return self.future.result(timeout)


class PlanningService:
    """Serializes planning requests and carries the planner state between them."""

    def __init__(self, planner: GlobalPlanner, properties: MovementProperties = None):
        """Initialize the service.

        Args:
            planner: Global planner running the requests.
            properties: Movement profile used when a request does not carry one.
        """
        self.planner = planner
        self.properties = properties
        self.state = PlannerState.idle()
        self.logger = Logger.get_logger('PlanningService')
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='regionnav-planner')
        self._lock = Lock()
        self._ticket: Optional[PlanTicket] = None
        # set while a search runs; cleared before its callbacks are invoked
        self._outstanding = False

    def __enter__(self):
        """Use the service as a context manager."""
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        """Stop the worker when leaving the context."""
        self.shutdown()

    @property
    def busy(self) -> bool:
        """True while a request is being searched.

        The slot is released before the callbacks run, so a callback may issue the next request.
        """
        return self._outstanding

    def request(
        self,
        start: PathNode,
        finish: PathNode,
        now: float,
        on_path_ready: PathReadyCallback = None,
        on_platform_transition: PlatformTransitionCallback = None,
        properties: MovementProperties = None,
    ) -> PlanTicket:
        """Submit a planning request to the worker thread.

        Callbacks run on the worker thread.

        Returns:
            Ticket of the request.

        Raises:
            PlanningBusyError: If the previous request is still outstanding.
        """
        with self._lock:
            self._ensure_free()
            cancel_event = Event()
            future = self._executor.submit(self._run, start, finish, now, properties,
                                           on_path_ready, on_platform_transition, cancel_event)
            # the job cannot clear the flag before this lock is released
            self._outstanding = True
            self._ticket = PlanTicket(future, cancel_event)
            return self._ticket

    def plan_now(
        self,
        start: PathNode,
        finish: PathNode,
        now: float,
        on_path_ready: PathReadyCallback = None,
        on_platform_transition: PlatformTransitionCallback = None,
        properties: MovementProperties = None,
    ) -> PlanResult:
        """Run a planning request on the caller's thread.

        Raises:
            PlanningBusyError: If a request is still outstanding.
        """
        with self._lock:
            self._ensure_free()
            self._outstanding = True
        return self._run(start, finish, now, properties, on_path_ready, on_platform_transition, Event())

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker thread."""
        self._executor.shutdown(wait=wait)

    def reset(self) -> None:
        """Forget any pending platform transition."""
        with self._lock:
            self._ensure_free()
            self.state = PlannerState.idle()

    def _ensure_free(self) -> None:
        if self.busy:
            raise PlanningBusyError('A planning request is already outstanding')

    def _run(self, start, finish, now, properties, on_path_ready, on_platform_transition,
             cancel_event: Event) -> PlanResult:
        try:
            result, self.state = self.planner.plan(start, finish, now, properties or self.properties, self.state)
        finally:
            with self._lock:
                self._outstanding = False
        if cancel_event.is_set():
            self.logger.info(f'Discarding {result.status} result of a cancelled request')
            return result
        deliver(result, on_path_ready, on_platform_transition)
        return result
