from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List, Optional

_LEADING_INT = re.compile(r'[+-]?\d+')

@dataclass
class Command:
    action: str   # allocate/free/show/read/compact/exit/invalid
    owner: Optional[str] = None
    size: int = 0
    strategy: Optional[str] = None
    path: Optional[str] = None

def normalize(line: str) -> str:
    """Uppercase a command line, except the filename of a Read command.

    A line starting with r/R only gets that first letter forced to 'R'.
    """
    if line[:1] in ('r', 'R'):
        return 'R' + line[1:]
    return line.upper()

def tokenize(line: str) -> List[str]:
    return line.split()

def leading_int(token: str) -> int:
    m = _LEADING_INT.match(token.lstrip())
    return int(m.group()) if m else 0

def parse(line: str) -> Optional[Command]:
    """Parse an already-normalized line. Blank lines give None."""
    tok = tokenize(line)
    if not tok:
        return None
    head = tok[0][0]
    if head == 'A':
        if len(tok) < 4 or leading_int(tok[2]) <= 0:
            return Command('invalid')
        return Command('allocate', owner=tok[1][0], size=leading_int(tok[2]), strategy=tok[3][0])
    if head == 'F':
        if len(tok) < 2:
            return Command('invalid')
        return Command('free', owner=tok[1][0])
    if head == 'S':
        return Command('show')
    if head == 'R':
        if len(tok) < 2:
            return Command('invalid')
        return Command('read', path=tok[1])
    if head == 'C':
        return Command('compact')
    if head == 'E':
        return Command('exit')
    return Command('invalid')
