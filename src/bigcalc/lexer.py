from collections import namedtuple
from enum import Enum
from functools import reduce
import operator

import regex

from .config import BASE_CODES, TYPE_CODES


class TokenKind(Enum):
    '''
    Token kinds, valued by their text in error messages.
    '''
    UNSPECIFIED = 'unspecified'
    END = 'end'
    NUMBER = 'number'
    IDENTIFIER = 'identifier'
    ADD = '"+"'
    SUB = '"-"'
    MUL = '"*"'
    DIV = '"/"'
    MOD = '"%"'
    POW = '"^"'
    FAC = '"!"'
    DFAC = '"!!"'
    MFAC = 'multifactorial'
    LPAREN = '"("'
    RPAREN = '")"'
    SHIFTL = '"<<"'
    SHIFTR = '">>"'
    BAND = '"&"'
    BOR = '"|"'
    BXOR = '"^|"'
    BNOT = '"~"'
    EQ = '"="'
    HELP = 'help'
    DELETE = 'delete'
    OPTION = 'option'


Token = namedtuple('Token', 'kind text offset literal')
Token.__new__.__defaults__ = (None,)

# Numeric literal, already split up by the lexer. Digit strings are in radix;
# exponent is the decimal text after the exponent marker, or None.
# A malformed literal is carried by its token as literal=None.
Literal = namedtuple('Literal', 'radix kind integral fractional exponent')

# Default regex flags for matching lexemes
FLAGS = reduce(operator.__or__,
               {regex.POSIX,
                regex.VERSION1,
                regex.VERBOSE},
               0)


class Lexer:
    '''
    Lexer for calculator input lines.

    Hands out one token per next_token() call. The default number radix may
    be changed between calls, and applies from the next token on.
    '''
    FLAGS = FLAGS

    SPACE = regex.compile(r'\s*', flags=FLAGS)
    # Runs of 3 or more bangs are a multifactorial; the step is the count.
    OPERATOR = regex.compile(r'''
                             (?<mfac>!{3,})
                             |
                             \^\| | << | >> | !!
                             |
                             [-+*/%^!()&|~=]
                             ''', flags=FLAGS)
    OPERATORS = {
        '+': TokenKind.ADD,
        '-': TokenKind.SUB,
        '*': TokenKind.MUL,
        '/': TokenKind.DIV,
        '%': TokenKind.MOD,
        '^': TokenKind.POW,
        '!': TokenKind.FAC,
        '!!': TokenKind.DFAC,
        '(': TokenKind.LPAREN,
        ')': TokenKind.RPAREN,
        '<<': TokenKind.SHIFTL,
        '>>': TokenKind.SHIFTR,
        '&': TokenKind.BAND,
        '|': TokenKind.BOR,
        '^|': TokenKind.BXOR,
        '~': TokenKind.BNOT,
        '=': TokenKind.EQ,
    }
    IDENTIFIER = regex.compile(r'[[:alpha:]][[:alnum:]_]*', flags=FLAGS)
    KEYWORDS = {
        'help': TokenKind.HELP,
        'delete': TokenKind.DELETE,
    }
    OPTION_CODE = '#'
    OPTION = regex.compile(regex.escape(OPTION_CODE) + r'\S*', flags=FLAGS)

    # Radix prefix and optional type code, like 0x or 0xu
    PREFIX = regex.compile(r'''
                           0
                           (?<base>[''' + ''.join(BASE_CODES) + r'''])
                           (?<type>[''' + ''.join(TYPE_CODES) + r'''])?
                           ''', flags=FLAGS | regex.IGNORECASE)
    DIGITS_10 = '0123456789'
    DIGITS = {
        2: r'[01]',
        8: r'[0-7]',
        10: r'[0-9]',
        16: r'[0-9a-fA-F]',
    }
    # Body of a literal in each radix. Decimal exponents are marked with e,
    # binary exponents (for power of two radices) with p.
    BODIES = {
        radix: regex.compile(r'''
                             (?<integral>{D}*)
                             (?:
                                 \.
                                 (?<fractional>{D}*)
                             )?
                             (?:
                                 [{E}]
                                 (?<exponent>[-+]?[0-9]+)
                             )?
                             '''.format(D=digit,
                                        E='eE' if radix == 10 else 'pP'),
                             flags=FLAGS)
        for radix, digit in DIGITS.items()
    }

    def __init__(self, line, default_number_radix=10,
                 default_number_kind=None):
        '''
        :param line: Input text; tokens are views into it.
        '''
        self.line = line
        self.default_number_radix = default_number_radix
        self.default_number_kind = default_number_kind
        self.pos = 0
        # Options are only recognised before anything else on the line
        self.options_allowed = True

    def remaining(self):
        return len(self.line) - self.pos

    def next_token(self):
        '''
        Scan and return the next token. Returns END tokens once exhausted.
        '''
        self.pos = self.SPACE.match(self.line, self.pos).end()
        start = self.pos
        if not self.remaining():
            return Token(TokenKind.END, '', start)

        if self.options_allowed:
            match = self.OPTION.match(self.line, start)
            if match:
                return self._token(TokenKind.OPTION, match.end())
            self.options_allowed = False

        char = self.line[start]
        if char in self.DIGITS_10 or \
           char == '.' and self._starts_number(start + 1):
            return self._scan_number()

        match = self.IDENTIFIER.match(self.line, start)
        if match:
            text = match.group(0)
            kind = self.KEYWORDS.get(text, TokenKind.IDENTIFIER)
            return self._token(kind, match.end())

        match = self.OPERATOR.match(self.line, start)
        if match:
            if match.group('mfac'):
                kind = TokenKind.MFAC
            else:
                kind = self.OPERATORS[match.group(0)]
            return self._token(kind, match.end())

        return self._token(TokenKind.UNSPECIFIED, start + 1)

    def tokens(self):
        '''
        Yield all tokens up to and including END.
        '''
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.END:
                return

    def _token(self, kind, end, literal=None):
        start, self.pos = self.pos, end
        return Token(kind, self.line[start:end], start, literal)

    def _starts_number(self, pos):
        digit = self.DIGITS[self.default_number_radix]
        return regex.match(digit, self.line[pos:pos + 1]) is not None

    def _scan_number(self):
        radix = self.default_number_radix
        kind = self.default_number_kind
        pos = self.pos
        prefix = self.PREFIX.match(self.line, pos)
        if prefix:
            radix = BASE_CODES[prefix.group('base').lower()]
            if prefix.group('type'):
                kind = TYPE_CODES[prefix.group('type').lower()]
            pos = prefix.end()

        body = self.BODIES[radix].match(self.line, pos)
        integral = body.group('integral')
        fractional = body.group('fractional')
        if integral or fractional:
            literal = Literal(radix, kind,
                              integral, fractional,
                              body.group('exponent'))
            return self._token(TokenKind.NUMBER, body.end(), literal)
        # No digits: a bare prefix, or a digit the radix doesn't allow
        return self._token(TokenKind.NUMBER, max(body.end(), self.pos + 1))
