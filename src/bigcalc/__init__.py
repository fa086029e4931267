'''
Arbitrary precision calculator.

Evaluates infix expressions over integers of a selectable word size (8 to
128 bits, signed or unsigned), 100 digit binary floating point reals, and
complex numbers. Literals and results may be in base 2, 8, 10 or 16, and
floating point output in the power of two bases shows bit patterns exactly.

Why another calculator?

- bc and dc have no fixed width integers; wraparound has to be faked.
- Programmer calculators have fixed width integers, but only double
  precision floats, and no way to look at their bits.
- printf's %a shows the bits of a float, but not aligned to hex digits.
'''

from .calculator import Calculator
from .cli import CLI
from .config import Config
from .lexer import Lexer
from .outputter import Outputter
from .parser import Parser
from .util import CalcError, ParseError


__all__ = ('Calculator', 'CLI', 'Config', 'Lexer', 'Outputter', 'Parser',
           'CalcError', 'ParseError')
