from __future__ import annotations
import logging

LOGGER = logging.getLogger('memsim')

def set_logger(logger: logging.Logger):
    """Redirect the simulator logger tree (core + shell) to ``logger``."""
    global LOGGER
    LOGGER = logger
    from memory import allocator
    from control import shell
    allocator.LOGGER = logger.getChild('Allocator')
    shell.LOGGER = logger.getChild('Shell')
