from __future__ import annotations
import os
import sys
from typing import Dict, Optional, Set, TextIO

from control.commands import Command, normalize, parse
from memory.allocator import ContiguousAllocator
from memory.errors import InsufficientMemory, UnknownAlgorithm
from memory.telemetrics import LOGGER

LOGGER = LOGGER.getChild('Shell')

PROMPT = 'command>'

class CommandShell:
    """Dispatches command lines onto a ContiguousAllocator.

    Allocation errors are reported and the session goes on; only an Exit
    command (typed, or found inside a Read file) or end of input stops it.
    """
    def __init__(self, alloc: ContiguousAllocator, out: Optional[TextIO]=None):
        self.alloc = alloc
        self.out = out if out is not None else sys.stdout
        self.exited = False
        self._reading: Set[str] = set()
        self.stats: Dict[str, int] = {
            'commands':0, 'allocations':0, 'alloc_fail_memory':0, 'alloc_fail_algorithm':0,
            'releases':0, 'compactions':0, 'units_moved':0, 'invalid':0, 'read_fail':0,
        }

    def _say(self, msg: str, end: str='\n'):
        print(msg, end=end, file=self.out)

    def run_line(self, line: str):
        cmd = parse(normalize(line))
        if cmd is not None:
            self.execute(cmd)

    def execute(self, cmd: Command):
        self.stats['commands'] += 1
        if cmd.action == 'allocate':
            try:
                self.alloc.allocate(cmd.owner, cmd.size, cmd.strategy)
                self.stats['allocations'] += 1
            except InsufficientMemory:
                self.stats['alloc_fail_memory'] += 1
                self._say('Not enough memory')
            except UnknownAlgorithm as e:
                LOGGER.info(str(e))
                self.stats['alloc_fail_algorithm'] += 1
                self._say('Unknown algorithm')
        elif cmd.action == 'free':
            self.alloc.release(cmd.owner)
            self.stats['releases'] += 1
        elif cmd.action == 'show':
            self._say(self.alloc.render())
        elif cmd.action == 'read':
            self.read_file(cmd.path)
        elif cmd.action == 'compact':
            self.stats['units_moved'] += self.alloc.compact()
            self.stats['compactions'] += 1
        elif cmd.action == 'exit':
            self.exited = True
        else:
            self.stats['invalid'] += 1
            self._say('Invalid command')

    def read_file(self, path: str) -> bool:
        """Run every line of ``path``, echoing each one first.

        Undecodable bytes are replaced rather than failing the read. A file
        that is already being read (directly or through nested Read lines)
        is refused. Returns False if the file could not be opened.
        """
        key = os.path.realpath(path)
        if key in self._reading:
            LOGGER.info(f'refusing to re-enter {path!r}')
            return self._open_failed()
        try:
            f = open(path, 'r', encoding='utf-8', errors='replace')
        except OSError as e:
            LOGGER.info(f'cannot open {path!r}: {e}')
            return self._open_failed()
        self._reading.add(key)
        try:
            with f:
                for raw in f:
                    line = raw.rstrip('\r\n')
                    self._say(line)
                    self.run_line(line)
                    if self.exited:
                        break
        finally:
            self._reading.discard(key)
        return True

    def _open_failed(self) -> bool:
        self.stats['read_fail'] += 1
        self._say('Could not open file')
        return False

    def interactive(self, stream: Optional[TextIO]=None):
        stream = stream if stream is not None else sys.stdin
        while not self.exited:
            self._say(PROMPT, end='')
            self.out.flush()
            raw = stream.readline()
            if not raw:
                # end of input ends the session
                self._say('')
                break
            line = normalize(raw.rstrip('\r\n'))
            self._say(line)
            cmd = parse(line)
            if cmd is not None:
                self.execute(cmd)
