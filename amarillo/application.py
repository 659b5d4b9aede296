"""The engine application: an ordered set of modules driven frame by frame."""

from __future__ import annotations

import argparse
import logging
import math
import time
from collections import deque
from enum import Enum
from typing import Callable, Iterable, Sequence

logger = logging.getLogger(__name__)

TITLE = "Amarillo Engine"
FPS_LOG_SIZE = 100
EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class UpdateStatus(Enum):
    """What a module asks of the main loop after an update step."""

    CONTINUE = 1
    STOP = 2
    ERROR = 3


class Module:
    """A part of the engine; every hook succeeds unless overridden."""

    def __init__(self, app: Application | None = None, start_enabled: bool = True) -> None:
        self.app = app
        self.enabled = start_enabled

    def init(self) -> bool:
        return True

    def start(self) -> bool:
        return True

    def pre_update(self, dt: float) -> UpdateStatus:
        return UpdateStatus.CONTINUE

    def update(self, dt: float) -> UpdateStatus:
        return UpdateStatus.CONTINUE

    def post_update(self, dt: float) -> UpdateStatus:
        return UpdateStatus.CONTINUE

    def clean_up(self) -> bool:
        return True


class Application:
    """Runs its modules' hooks in order and measures the time between frames."""

    def __init__(
        self,
        modules: Iterable[Module] = (),
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.modules: list[Module] = []
        self.clock = clock
        self.dt = 0.0
        self.fps_log: deque[float] = deque(maxlen=FPS_LOG_SIZE)
        self.quit_requested = False
        self._last_tick = 0.0
        for module in modules:
            self.add_module(module)

    def add_module(self, module: Module) -> None:
        """Append ``module`` and bind it to this application."""
        module.app = self
        self.modules.append(module)

    def init(self) -> bool:
        """Initialise every module, then start every module; False if any step fails."""
        for module in self.modules:
            if not module.init():
                return False
        logger.info("-------------- Application Start --------------")
        for module in self.modules:
            if not module.start():
                return False
        self._last_tick = self.clock()
        return True

    def _prepare_update(self) -> None:
        now = self.clock()
        self.dt = now - self._last_tick
        self._last_tick = now

    def update(self) -> UpdateStatus:
        """Run one frame: every pre-update, then every update, then every post-update."""
        self._prepare_update()
        for step in ("pre_update", "update", "post_update"):
            for module in self.modules:
                status = getattr(module, step)(self.dt)
                if status is not UpdateStatus.CONTINUE:
                    return status
        self.fps_log.append(1.0 / self.dt if self.dt > 0 else math.inf)
        return UpdateStatus.CONTINUE

    def clean_up(self) -> bool:
        """Clean modules up in reverse order, stopping at the first failure."""
        for module in reversed(self.modules):
            if not module.clean_up():
                return False
        return True

    def run(self, max_frames: int | None = None) -> int:
        """Initialise, update until asked to stop, clean up; return a process exit code."""
        logger.info("-------------- Application Init --------------")
        if not self.init():
            logger.error("Application Init exits with ERROR")
            return EXIT_FAILURE
        logger.info("-------------- Application Update --------------")
        frames = 0
        while max_frames is None or frames < max_frames:
            status = self.update()
            frames += 1
            if status is UpdateStatus.ERROR:
                logger.error("Application Update exits with ERROR")
                return EXIT_FAILURE
            if status is UpdateStatus.STOP or self.quit_requested:
                break
        logger.info("-------------- Application CleanUp --------------")
        if not self.clean_up():
            logger.error("Application CleanUp exits with ERROR")
            return EXIT_FAILURE
        return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """Start the engine and run it for a number of frames."""
    parser = argparse.ArgumentParser(prog="amarillo", description=f"Run the {TITLE}.")
    parser.add_argument(
        "--frames", type=int, default=1, help="number of frames to run (default: 1)"
    )
    args = parser.parse_args(argv)
    if args.frames < 0:
        parser.error("--frames must not be negative")
    logger.info("Starting game '%s'...", TITLE)
    logger.info("-------------- Application Creation --------------")
    app = Application()
    code = app.run(max_frames=args.frames)
    logger.info("Exiting game %s.", TITLE)
    return code


if __name__ == "__main__":
    raise SystemExit(main())