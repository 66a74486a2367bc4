from __future__ import annotations

import pygame

from falling_blocks.game.scheduler import Scheduler


GRAVITY_EVENT = pygame.USEREVENT + 1


class PygameScheduler(Scheduler):
    """Gravity timer backed by ``pygame.time.set_timer``.

    The play loop forwards its events to ``handle_event``; the timer event is
    turned into a call to the armed callback.
    """

    def __init__(self, event_type: int = GRAVITY_EVENT) -> None:
        super().__init__()
        self.event_type = event_type
        self._running = False

    @property
    def active(self) -> bool:
        return self._running

    def _start(self, interval_ms: int) -> None:
        pygame.time.set_timer(self.event_type, interval_ms)
        self._running = True

    def _stop(self) -> None:
        pygame.time.set_timer(self.event_type, 0)
        # Events already queued by the old timer belong to the discarded period.
        if pygame.display.get_init():
            pygame.event.clear(self.event_type)
        self._running = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type != self.event_type:
            return False
        if self._running and self.callback is not None:
            self.callback()
        return True
