from collections import namedtuple

from .config import NumberKind, interpret_arg
from .lexer import Lexer, TokenKind
from .util import ErrorKind, ParseError
from .values import (CONSTANTS, FUNCTIONS, INTEGERS, Arithmetic, Real,
                     Complex, ctx)


# value is None for lines that print nothing (delete, help, options only)
Result = namedtuple('Result', 'value help')

BITS_PER_DIGIT = {
    2: 1,
    8: 3,
    16: 4,
}


class Parser:
    '''
    Recursive descent parser, evaluating as it goes.

    Grammar, loosest binding first:

        line       := option* [ 'help' | 'delete' identifier | expr ] end
        expr       := identifier '=' expr | or
        or         := and { ('|' | '^|') and }
        and        := shift { '&' shift }
        shift      := additive { ('<<' | '>>') additive }
        additive   := term { ('+' | '-') term }
        term       := power { ('*' | '/' | '%') power }
        power      := unary [ '^' power ]
        unary      := ('-' | '~') unary | postfix
        postfix    := primary { '!' | '!!' | multifactorial }
        primary    := number | function '(' expr ')' | identifier
                    | '(' expr ')'

    config, variables and counts are modified in place, so pass copies
    unless the line is known to succeed.
    '''

    BITWISE_OR = {
        TokenKind.BOR: 'bor',
        TokenKind.BXOR: 'bxor',
    }
    BITWISE_AND = {
        TokenKind.BAND: 'band',
    }
    SHIFT = {
        TokenKind.SHIFTL: 'shiftl',
        TokenKind.SHIFTR: 'shiftr',
    }
    ADDITIVE = {
        TokenKind.ADD: 'add',
        TokenKind.SUB: 'sub',
    }
    MULTIPLICATIVE = {
        TokenKind.MUL: 'mul',
        TokenKind.DIV: 'div',
        TokenKind.MOD: 'mod',
    }
    KEYWORDS = TokenKind.HELP, TokenKind.DELETE

    def __init__(self, line, config, variables, counts):
        self.config = config
        self.variables = variables
        self.counts = counts
        self.lexer = Lexer(line,
                           config.default_number_radix,
                           config.default_number_kind)
        self.arithmetic = None
        self.token = None
        self._peeked = None

    def parse(self):
        '''
        Parse and evaluate the whole line.

        :returns: Result
        :raises ParseError: on any lexical, syntactic or arithmetic fault.
        '''
        n_help_options = self.counts.n_help_options
        self._advance()
        while self.token.kind is TokenKind.OPTION:
            self._option(self.token.text)
            self._advance()
        # After options, which may change the word size
        self.arithmetic = Arithmetic(self.config.int_word_size)
        help_ = self.counts.n_help_options > n_help_options

        value = None
        if self.token.kind is TokenKind.HELP and \
           self._peek().kind is not TokenKind.EQ:
            self._advance()
            help_ = True
        elif self.token.kind is TokenKind.DELETE and \
                self._peek().kind is not TokenKind.EQ:
            self._advance()
            self._delete(self._expect(TokenKind.IDENTIFIER).text)
        elif self.token.kind is not TokenKind.END:
            value = self.expr()

        if self.token.kind is not TokenKind.END:
            raise ParseError(ErrorKind.UNEXPECTED_TOKEN)
        return Result(value, help_)

    def _advance(self):
        if self._peeked is not None:
            self.token, self._peeked = self._peeked, None
        else:
            self.token = self.lexer.next_token()

    def _peek(self):
        if self._peeked is None:
            self._peeked = self.lexer.next_token()
        return self._peeked

    def _expect(self, kind):
        token = self.token
        if token.kind is not kind:
            raise ParseError(ErrorKind.TOKEN_EXPECTED, kind)
        self._advance()
        return token

    def _option(self, text):
        if not interpret_arg(text, Lexer.OPTION_CODE,
                             self.config, self.counts):
            raise ParseError(ErrorKind.INVALID_OPTION)
        # Takes effect from the next token on
        self.lexer.default_number_radix = self.config.default_number_radix
        self.lexer.default_number_kind = self.config.default_number_kind

    def _delete(self, name):
        if name not in self.variables:
            raise ParseError(ErrorKind.UNKNOWN_IDENTIFIER)
        del self.variables[name]

    def expr(self):
        if self._peek().kind is TokenKind.EQ:
            if self.token.kind in self.KEYWORDS:
                raise ParseError(ErrorKind.RESERVED_WORD)
            if self.token.kind is TokenKind.IDENTIFIER:
                name = self.token.text
                self._advance()
                self._advance()
                value = self.expr()
                self.variables[name] = value
                return value
        return self.bitwise_or()

    def _binary(self, operators, operand):
        '''
        Fold a left associative run of operators.
        '''
        left = operand()
        while self.token.kind in operators:
            operation = getattr(self.arithmetic, operators[self.token.kind])
            self._advance()
            left = operation(left, operand())
        return left

    def bitwise_or(self):
        return self._binary(self.BITWISE_OR, self.bitwise_and)

    def bitwise_and(self):
        return self._binary(self.BITWISE_AND, self.shift)

    def shift(self):
        return self._binary(self.SHIFT, self.additive)

    def additive(self):
        return self._binary(self.ADDITIVE, self.term)

    def term(self):
        return self._binary(self.MULTIPLICATIVE, self.power)

    def power(self):
        base = self.unary()
        if self.token.kind is TokenKind.POW:
            self._advance()
            return self.arithmetic.pow(base, self.power())
        return base

    def unary(self):
        if self.token.kind is TokenKind.SUB:
            self._advance()
            return self.arithmetic.negate(self.unary())
        if self.token.kind is TokenKind.BNOT:
            self._advance()
            return self.arithmetic.bnot(self.unary())
        return self.postfix()

    def postfix(self):
        value = self.primary()
        while True:
            kind = self.token.kind
            if kind is TokenKind.FAC:
                value = self.arithmetic.factorial(value)
            elif kind is TokenKind.DFAC:
                value = self.arithmetic.double_factorial(value)
            elif kind is TokenKind.MFAC:
                value = self.arithmetic.multifactorial(value,
                                                       len(self.token.text))
            else:
                return value
            self._advance()

    def primary(self):
        token = self.token
        if token.kind is TokenKind.NUMBER:
            self._advance()
            return self._number(token.literal)
        if token.kind is TokenKind.IDENTIFIER:
            self._advance()
            if token.text in FUNCTIONS and \
               self.token.kind is TokenKind.LPAREN:
                self._advance()
                argument = self.expr()
                self._expect(TokenKind.RPAREN)
                return self.arithmetic.call(token.text, argument)
            return self._lookup(token.text)
        if token.kind is TokenKind.LPAREN:
            self._advance()
            value = self.expr()
            self._expect(TokenKind.RPAREN)
            return value
        if token.kind is TokenKind.END:
            raise ParseError(ErrorKind.TOKEN_EXPECTED, TokenKind.NUMBER)
        raise ParseError(ErrorKind.UNEXPECTED_TOKEN)

    def _lookup(self, name):
        value = self.variables.get(name)
        if value is None:
            value = CONSTANTS.get(name)
        if value is None:
            raise ParseError(ErrorKind.UNKNOWN_IDENTIFIER)
        # Stored at the width of its line; rewrap for this one
        if isinstance(value, INTEGERS):
            return self.arithmetic.make(type(value), value.value)
        return value

    def _number(self, literal):
        if literal is None:
            raise ParseError(ErrorKind.MALFORMED_NUMBER)
        kind = literal.kind or self.config.default_number_kind
        if literal.fractional is None and literal.exponent is None:
            n = int(literal.integral, literal.radix)
            if kind is NumberKind.SIGNED:
                return self.arithmetic.signed(n)
            elif kind is NumberKind.UNSIGNED:
                return self.arithmetic.unsigned(n)
            return self.arithmetic.complex(n)
        x = self._real(literal)
        if kind is NumberKind.COMPLEX:
            return Complex(ctx.mpc(x))
        return Real(x)

    def _real(self, literal):
        fractional = literal.fractional or ''
        digits = literal.integral + fractional
        exponent = int(literal.exponent or 0)
        if literal.radix == 10:
            return ctx.mpf('{}e{}'.format(digits, exponent - len(fractional)))
        # Exact: every digit is a whole number of bits
        exponent -= BITS_PER_DIGIT[literal.radix] * len(fractional)
        return ctx.ldexp(ctx.mpf(int(digits, literal.radix)), exponent)
