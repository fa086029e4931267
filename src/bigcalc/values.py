'''
Numeric values and their arithmetic.

A value is exactly one of Signed, Unsigned, Real or Complex. Binary
operations first promote both operands to the higher ranked of the two:

    Signed < Unsigned < Real < Complex

Integers live in a word of the configured width and wrap silently. Reals and
complexes are mpmath numbers carrying SIGNIFICAND_BITS bits of significand.
'''

from collections import namedtuple

from mpmath.ctx_mp import MPContext

from .util import ErrorKind, ParseError, wrap_user_errors


# 100 decimal digits, as many bits as a 100-digit binary float carries
DIGITS10 = 100
SIGNIFICAND_BITS = 334
# Real multifactorials with more terms use the gamma function
EXACT_PRODUCT_TERMS = 1 << 12

ctx = MPContext()
ctx.prec = SIGNIFICAND_BITS

PI = +ctx.pi
E = +ctx.e
I = ctx.mpc(0, 1)


class _Value:
    '''
    Mixin making values of different types never compare equal.
    '''
    __slots__ = ()

    def __eq__(self, other):
        return type(self) is type(other) and tuple.__eq__(self, other)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((type(self).__name__,) + tuple(self))


class Signed(_Value, namedtuple('Signed', 'value')):
    __slots__ = ()
    RANK = 0


class Unsigned(_Value, namedtuple('Unsigned', 'value')):
    __slots__ = ()
    RANK = 1


class Real(_Value, namedtuple('Real', 'value')):
    __slots__ = ()
    RANK = 2


class Complex(_Value, namedtuple('Complex', 'value')):
    __slots__ = ()
    RANK = 3


INTEGERS = Signed, Unsigned

CONSTANTS = {
    'pi': Real(PI),
    'e': Real(E),
    'i': Complex(I),
}


def _norm(z):
    return ctx.re(z) ** 2 + ctx.im(z) ** 2


# Unary functions callable as name(expr), on Real or Complex arguments
FUNCTIONS = {
    'sqrt': ctx.sqrt,
    'cbrt': ctx.cbrt,
    'exp': ctx.exp,
    'ln': ctx.ln,
    'log10': ctx.log10,
    'log2': lambda x: ctx.log(x, 2),
    'sin': ctx.sin,
    'cos': ctx.cos,
    'tan': ctx.tan,
    'asin': ctx.asin,
    'acos': ctx.acos,
    'atan': ctx.atan,
    'sinh': ctx.sinh,
    'cosh': ctx.cosh,
    'tanh': ctx.tanh,
    'asinh': ctx.asinh,
    'acosh': ctx.acosh,
    'atanh': ctx.atanh,
    'abs': abs,
    'arg': ctx.arg,
    'norm': _norm,
    'real': ctx.re,
    'imag': ctx.im,
    'conj': ctx.conj,
    'floor': ctx.floor,
    'ceil': ctx.ceil,
}


def is_zero(value):
    return value.value == 0


def _c_divmod(n, d):
    '''
    Integer division truncating toward zero, remainder with dividend's sign.
    '''
    q = abs(n) // abs(d)
    if (n < 0) != (d < 0):
        q = -q
    return q, n - q * d


def _integral(value):
    '''
    Return value as an int if it holds an integer, else None.
    '''
    if isinstance(value, INTEGERS):
        return value.value
    x = value.value
    if isinstance(value, Complex):
        if ctx.im(x) != 0:
            return None
        x = ctx.re(x)
    if ctx.isint(x):
        return int(x)
    return None


def _poly_mul(p, q, size, mask):
    '''
    Product of coefficient lists p and q, truncated to size terms.
    '''
    product = [0] * min(size, len(p) + len(q) - 1)
    for i, x in enumerate(p):
        for j, y in enumerate(q[:len(product) - i]):
            product[i + j] += x * y
    return [c & mask for c in product]


def _poly_shift(p, c, mask):
    '''
    Coefficients of p(y + c), by repeated synthetic division.
    '''
    p = list(p)
    for i in range(len(p)):
        for k in range(len(p) - 2, i - 1, -1):
            p[k] = (p[k] + c * p[k + 1]) & mask
    return p


class Arithmetic:
    '''
    Operations on values, for a given integer word size.

    Every operation returns a new value; operands are never modified.
    '''

    def __init__(self, int_word_size):
        self.bits = int_word_size
        self.modulus = 1 << int_word_size
        self.mask = self.modulus - 1

    def signed(self, n):
        n &= self.mask
        if n >> (self.bits - 1):
            n -= self.modulus
        return Signed(n)

    def unsigned(self, n):
        return Unsigned(n & self.mask)

    def real(self, x):
        return Real(ctx.mpf(x))

    def complex(self, re, im=0):
        return Complex(ctx.mpc(re, im))

    def from_mp(self, x):
        '''
        Wrap an mpmath result, which may have become complex.
        '''
        if isinstance(x, ctx.mpc):
            return Complex(x)
        return Real(ctx.mpf(x))

    def make(self, cls, x):
        '''
        Build a value of type cls from a raw int or mpmath number.
        '''
        if cls is Signed:
            return self.signed(x)
        elif cls is Unsigned:
            return self.unsigned(x)
        elif cls is Real:
            return self.from_mp(x)
        return Complex(ctx.mpc(x))

    def promote(self, value, cls):
        '''
        Convert value to type cls, which must not rank below it.
        '''
        assert value.RANK <= cls.RANK
        if cls in INTEGERS:
            return self.make(cls, value.value)
        elif cls is Real:
            return Real(ctx.mpf(value.value))
        return Complex(ctx.mpc(value.value))

    def common(self, left, right):
        '''
        Promote both operands to the higher ranked of their types.
        '''
        cls = max(type(left), type(right), key=lambda t: t.RANK)
        return cls, self.promote(left, cls), self.promote(right, cls)

    def _integers(self, left, right):
        cls, a, b = self.common(left, right)
        if cls not in INTEGERS:
            raise ParseError(ErrorKind.INTEGER_REQUIRED)
        return cls, a.value, b.value

    @wrap_user_errors(ErrorKind.INVALID_OPERAND)
    def add(self, left, right):
        cls, a, b = self.common(left, right)
        return self.make(cls, a.value + b.value)

    @wrap_user_errors(ErrorKind.INVALID_OPERAND)
    def sub(self, left, right):
        cls, a, b = self.common(left, right)
        return self.make(cls, a.value - b.value)

    @wrap_user_errors(ErrorKind.INVALID_OPERAND)
    def mul(self, left, right):
        cls, a, b = self.common(left, right)
        return self.make(cls, a.value * b.value)

    @wrap_user_errors(ErrorKind.INVALID_OPERAND)
    def div(self, left, right):
        cls, a, b = self.common(left, right)
        if is_zero(b):
            raise ParseError(ErrorKind.DIVIDE_BY_ZERO)
        if cls in INTEGERS:
            return self.make(cls, _c_divmod(a.value, b.value)[0])
        return self.make(cls, a.value / b.value)

    @wrap_user_errors(ErrorKind.INVALID_OPERAND)
    def mod(self, left, right):
        cls, a, b = self.common(left, right)
        if is_zero(b):
            raise ParseError(ErrorKind.DIVIDE_BY_ZERO)
        if cls in INTEGERS:
            return self.make(cls, _c_divmod(a.value, b.value)[1])
        x, y = a.value, b.value
        if cls is Complex:
            if ctx.im(x) != 0 or ctx.im(y) != 0:
                raise ParseError(ErrorKind.INVALID_OPERAND)
            x, y = ctx.re(x), ctx.re(y)
        # fmod: remainder takes the dividend's sign
        r = abs(x) % abs(y)
        return self.make(cls, r if x >= 0 else -r)

    @wrap_user_errors(ErrorKind.INVALID_OPERAND)
    def pow(self, left, right):
        cls, a, b = self.common(left, right)
        if cls in INTEGERS:
            return self._int_pow(cls, a.value, b.value)
        z, w = a.value, b.value
        if cls is Complex:
            n = _integral(b)
            if n is not None:
                return Complex(self._complex_int_pow(z, n))
        if z == E:
            return self.make(cls, ctx.exp(w))
        return self.make(cls, ctx.power(z, w))

    def _int_pow(self, cls, base, exponent):
        if exponent >= 0:
            return self.make(cls, pow(base, exponent, self.modulus))
        # Negative exponent: 1 / base ** -exponent, in integer division
        if base == 0:
            raise ParseError(ErrorKind.DIVIDE_BY_ZERO)
        if base == 1:
            return self.make(cls, 1)
        if base == -1:
            return self.make(cls, -1 if exponent % 2 else 1)
        return self.make(cls, 0)

    def _complex_int_pow(self, z, n):
        '''
        z ** n by repeated squaring, exact for whole number exponents.
        '''
        if n < 0:
            if z == 0:
                raise ParseError(ErrorKind.DIVIDE_BY_ZERO)
            return 1 / self._complex_int_pow(z, -n)
        result = ctx.mpc(1)
        while n:
            if n & 1:
                result *= z
            n >>= 1
            if n:
                z *= z
        return result

    def _shift(self, cls, n, count):
        if count >= 0:
            return self.make(cls, n << count if count < self.bits else 0)
        # n is already normalized, so shifting by the width gives 0 or -1
        return self.make(cls, n >> min(-count, self.bits))

    def shiftl(self, left, right):
        cls, a, b = self._integers(left, right)
        return self._shift(cls, a, b)

    def shiftr(self, left, right):
        cls, a, b = self._integers(left, right)
        return self._shift(cls, a, -b)

    def band(self, left, right):
        cls, a, b = self._integers(left, right)
        return self.make(cls, a & b)

    def bor(self, left, right):
        cls, a, b = self._integers(left, right)
        return self.make(cls, a | b)

    def bxor(self, left, right):
        cls, a, b = self._integers(left, right)
        return self.make(cls, a ^ b)

    def negate(self, value):
        return self.make(type(value), -value.value)

    def bnot(self, value):
        if not isinstance(value, INTEGERS):
            raise ParseError(ErrorKind.INTEGER_REQUIRED)
        return self.make(type(value), ~value.value)

    def factorial(self, value):
        return self.multifactorial(value, 1)

    def double_factorial(self, value):
        return self.multifactorial(value, 2)

    @wrap_user_errors(ErrorKind.INVALID_OPERAND)
    def multifactorial(self, value, step):
        '''
        n * (n - step) * (n - 2 * step) * ..., down to 1 or less than step.
        '''
        assert step >= 1
        n = _integral(value)
        if n is None or n < 0:
            raise ParseError(ErrorKind.FACTORIAL_DOMAIN)
        cls = type(value)
        terms = range(n, 1, -step)
        if cls in INTEGERS:
            if n % 2 and not step % 2:
                return self.make(cls, self._odd_product(n, step, len(terms)))
            # At least every other term is even, so this hits 0 within
            # 2 * bits terms
            product = 1
            for k in terms:
                product = product * k % self.modulus
                if not product:
                    break
            return self.make(cls, product)
        if step == 1:
            return self.make(cls, ctx.factorial(n))
        if len(terms) <= EXACT_PRODUCT_TERMS:
            return self.make(cls, ctx.fprod(ctx.mpf(k) for k in terms))
        # step ** count * gamma(n / step + 1) / gamma(last / step)
        return self.make(cls, ctx.power(step, len(terms)) *
                         ctx.gammaprod([ctx.mpf(n) / step + 1],
                                       [ctx.mpf(terms[-1]) / step]))

    def _odd_product(self, a, step, count):
        '''
        a * (a - step) * ... over count terms, modulo the word, for odd a and
        even step. No term is even, so the product never reaches 0.

        G(y) = (a + y * step) * (a + (y - 1) * step) * ... over m factors is
        a polynomial in y whose y ** k coefficient is a multiple of
        step ** k, so only the first few coefficients survive the modulus.
        G doubles as G(y) * G(y - m), and G(0) is the product.
        '''
        twos = (step & -step).bit_length() - 1
        size = -(-self.bits // twos)
        g = [1]
        m = 0
        for bit in bin(count)[2:]:
            g = _poly_mul(g, _poly_shift(g, -m, self.mask), size, self.mask)
            m *= 2
            if bit == '1':
                g = _poly_mul(g, [a - m * step, step], size, self.mask)
                m += 1
        return g[0]

    @wrap_user_errors(ErrorKind.INVALID_OPERAND)
    def call(self, name, value):
        '''
        Apply the builtin function name; integers are promoted to Real.
        '''
        if isinstance(value, INTEGERS):
            value = self.promote(value, Real)
        return self.from_mp(FUNCTIONS[name](value.value))
