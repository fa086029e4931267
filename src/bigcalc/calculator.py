from .config import Config, OptionCounts
from .outputter import Outputter
from .parser import Parser
from .values import FUNCTIONS


class Calculator:
    '''
    Calculator session.

    Owns the configuration, the variables and the option counts, all of
    which persist from line to line. A line that fails leaves them as they
    were.
    '''

    HELP = '''\
Enter an expression to evaluate, e.g. 1 + 2 * 3.

Operators, loosest binding first:
    =               assignment: name = expr
    | ^|            bitwise or, xor
    &               bitwise and
    << >>           shift
    + -             add, subtract
    * / %           multiply, divide, remainder
    ^               power
    - ~             negate, bitwise not
    ! !! !!!...     factorial, double factorial, multifactorial

Numbers: 0b, 0o, 0d or 0x prefix a radix, optionally followed by a type code
s (signed), u (unsigned) or i (complex). Exponents are e for decimal, p
(binary) otherwise: 1.5e3, 0x1.8p4.

Constants: pi e i
Functions: {functions}

Statements:
    help            this text
    delete name     forget a variable

Options, at the start of a line with #, or on the command line with -:
    pr<N>           output precision in digits, 0 for the default
    h               this text; also help after a doubled ## or --
    w8 ... w128     integer word size in bits
    pn, pu          normalized or unnormalized power of two float output
    0<base>[<type>] default number radix and type, base one of b o d x
    o<base>         output radix
    m<base>[<type>] both of the above'''

    def __init__(self, config=None, counts=None):
        self.config = config if config is not None else Config()
        self.counts = counts if counts is not None else OptionCounts()
        self.variables = dict()

    def evaluate(self, line):
        '''
        Parse and evaluate one line.

        Works on copies of the session state, which replace it only once the
        whole line succeeded.

        :returns: parser.Result
        :raises ParseError: on failure.
        '''
        config = self.config.copy()
        variables = dict(self.variables)
        counts = self.counts.copy()
        result = Parser(line, config, variables, counts).parse()
        vars(self.config).update(vars(config))
        vars(self.counts).update(vars(counts))
        self.variables.clear()
        self.variables.update(variables)
        return result

    def format(self, value):
        return Outputter(self.config).format(value)

    def render(self, result):
        '''
        Return the text to show for a result, or None if there's nothing.
        '''
        lines = []
        if result.help:
            lines.append(self.help_text())
        if result.value is not None:
            lines.append(self.format(result.value))
        return '\n'.join(lines) or None

    def help_text(self):
        return type(self).HELP.format(functions=' '.join(sorted(FUNCTIONS)))
