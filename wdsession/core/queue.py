"""
Command Queue

FIFO queue of automation commands, drained one at a time once a session is
active.
"""

import asyncio
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)


@dataclass
class QueuedCommand:
    """A command waiting in the queue."""
    name: str
    func: Callable
    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)

    async def execute(self) -> Any:
        result = self.func(*self.args, **self.kwargs)
        if asyncio.iscoroutine(result):
            result = await result
        return result


class CommandQueue:
    """Serializes commands so each one runs only after the previous finished."""

    def __init__(self):
        self._commands = deque()

    def __len__(self) -> int:
        return len(self._commands)

    @property
    def is_empty(self) -> bool:
        return not self._commands

    def add(self, name: str, func: Callable, /, *args, **kwargs) -> QueuedCommand:
        """Append a command; ``func`` may be a plain callable or a coroutine function."""
        command = QueuedCommand(name=name, func=func, args=args, kwargs=kwargs)
        self._commands.append(command)
        logger.debug(f"Queued command: {name} ({len(self._commands)} pending)")
        return command

    async def run(self) -> List[Any]:
        """
        Execute queued commands in FIFO order until the queue is empty.

        Commands added while the queue runs are executed in the same pass.
        An exception from a command stops the run and propagates; commands
        still queued stay queued.

        Returns:
            Results of the executed commands, in execution order
        """
        results = []
        while self._commands:
            command = self._commands.popleft()
            logger.debug(f"Running command: {command.name}")
            results.append(await command.execute())
        return results

    def reset(self) -> None:
        """Drop every pending command."""
        if self._commands:
            logger.info(f"🧹 Discarding {len(self._commands)} queued commands")
        self._commands.clear()
