'''
Numeric value model tests
'''

from bigcalc.util import ErrorKind, ParseError
from bigcalc.values import (Arithmetic, Signed, Unsigned, Real, Complex, ctx,
                            E, I)

from pytest import raises, mark


A8 = Arithmetic(8)
A128 = Arithmetic(128)


def real(x):
    return Real(ctx.mpf(x))


def complex_(re, im):
    return Complex(ctx.mpc(re, im))


def test_types_never_compare_equal():
    assert Signed(1) != Unsigned(1)
    assert Signed(1) == Signed(1)
    assert real(1) != complex_(1, 0)


def test_signed_wraps():
    assert A8.add(Signed(127), Signed(1)) == Signed(-128)
    assert A8.sub(Signed(-128), Signed(1)) == Signed(127)
    assert A8.mul(Signed(16), Signed(16)) == Signed(0)


def test_unsigned_wraps():
    assert A8.add(Unsigned(255), Unsigned(1)) == Unsigned(0)
    assert A8.negate(Unsigned(1)) == Unsigned(255)


def test_promotion():
    assert A8.add(Signed(-1), Unsigned(1)) == Unsigned(0)
    assert A8.add(Signed(1), real('0.5')) == real('1.5')
    assert A8.add(real(1), complex_(0, 1)) == complex_(1, 1)


def test_width_follows_arithmetic():
    # A value made at one width is renormalized at another
    assert A8.add(Signed(300), Signed(0)) == Signed(44)


def test_integer_division_truncates():
    assert A8.div(Signed(-7), Signed(2)) == Signed(-3)
    assert A8.mod(Signed(-7), Signed(2)) == Signed(-1)
    assert A8.mod(Signed(7), Signed(-2)) == Signed(1)
    assert A8.div(Signed(-128), Signed(-1)) == Signed(-128)


def test_real_mod_takes_dividend_sign():
    assert A8.mod(real(-7), real(2)) == real(-1)
    assert A8.mod(real('7.5'), real(2)) == real('1.5')


def test_complex_mod():
    assert A8.mod(complex_(7, 0), complex_(2, 0)) == complex_(1, 0)
    with raises(ParseError) as e:
        A8.mod(complex_(7, 1), complex_(2, 0))
    assert e.value.kind is ErrorKind.INVALID_OPERAND


@mark.parametrize('zero', [Signed(0), Unsigned(0), real(0), complex_(0, 0)])
@mark.parametrize('operation', [A8.div, A8.mod])
def test_divide_by_zero(operation, zero):
    with raises(ParseError) as e:
        operation(Signed(5), zero)
    assert e.value.kind is ErrorKind.DIVIDE_BY_ZERO


def test_factorials():
    assert A128.factorial(Signed(0)) == Signed(1)
    assert A128.factorial(Signed(5)) == Signed(120)
    assert A128.double_factorial(Signed(6)) == Signed(48)
    assert A128.double_factorial(Signed(7)) == Signed(105)
    assert A128.multifactorial(Signed(10), 3) == Signed(280)
    assert A128.multifactorial(Signed(7), 7) == Signed(7)
    assert A128.multifactorial(Signed(7), 1) == A128.factorial(Signed(7))


def test_factorial_wraps():
    # 720 mod 256
    assert A8.factorial(Signed(6)) == Signed(-48)
    assert A8.factorial(Unsigned(6)) == Unsigned(208)
    assert A8.factorial(Unsigned(200)) == Unsigned(0)


def wrapped_product(n, step, bits):
    product = 1
    for k in range(n, 1, -step):
        product = product * k % (1 << bits)
    return product


@mark.parametrize('bits, n, step', [
    (8, 255, 2),
    (8, 255, 4),
    (8, 201, 6),
    (16, 65535, 2),
    (16, 65535, 8),
    (16, 40001, 2),
    (16, 40000, 2),
    (16, 40001, 3),
    (32, 99999, 2),
])
def test_multifactorial_wraps(bits, n, step):
    assert Arithmetic(bits).multifactorial(Unsigned(n), step) == \
        Unsigned(wrapped_product(n, step, bits))


def test_odd_multifactorial_of_large_word():
    # Odd terms only: never wraps to 0, and must not step through them all
    product = Arithmetic(32).double_factorial(Signed(2 ** 31 - 1))
    assert product.value % 2
    product = A128.multifactorial(Unsigned(2 ** 128 - 1), 4)
    assert product.value % 2


def test_large_real_multifactorials():
    # Past the exact product, the gamma form agrees with it
    exact = ctx.fprod(ctx.mpf(k) for k in range(10001, 1, -2))
    assert ctx.almosteq(A128.double_factorial(real(10001)).value, exact,
                        rel_eps=ctx.mpf(2) ** -300)
    x = A128.double_factorial(real('1e12')).value
    assert x > 0 and not ctx.isinf(x)


def test_factorial_of_reals():
    assert A128.factorial(real(5)) == real(120)
    assert A128.double_factorial(complex_(6, 0)) == complex_(48, 0)


@mark.parametrize('operand', [Signed(-1), real('2.5'), complex_(3, 1),
                              Real(ctx.inf)])
def test_factorial_domain(operand):
    with raises(ParseError) as e:
        A128.factorial(operand)
    assert e.value.kind is ErrorKind.FACTORIAL_DOMAIN


def test_integer_pow():
    assert Arithmetic(16).pow(Signed(2), Signed(10)) == Signed(1024)
    assert A8.pow(Signed(2), Signed(8)) == Signed(0)
    assert A8.pow(Signed(-3), Signed(3)) == Signed(-27)
    assert A8.pow(Signed(2), Signed(-1)) == Signed(0)
    assert A8.pow(Signed(1), Signed(-5)) == Signed(1)
    assert A8.pow(Signed(-1), Signed(-3)) == Signed(-1)
    assert A8.pow(Signed(-1), Signed(-2)) == Signed(1)
    with raises(ParseError) as e:
        A8.pow(Signed(0), Signed(-1))
    assert e.value.kind is ErrorKind.DIVIDE_BY_ZERO


def test_complex_integer_pow_is_exact():
    assert A128.pow(Complex(I), Signed(2)) == complex_(-1, 0)
    assert A128.pow(Complex(I), Signed(4)) == complex_(1, 0)
    assert A128.pow(complex_(1, 1), Signed(-2)) == complex_(0, '-0.5')
    assert A128.pow(complex_(3, 4), real(0)) == complex_(1, 0)
    with raises(ParseError) as e:
        A128.pow(complex_(0, 0), Signed(-1))
    assert e.value.kind is ErrorKind.DIVIDE_BY_ZERO


def test_pow_of_e():
    assert A128.pow(Real(E), Signed(2)) == Real(ctx.exp(2))


def test_real_pow_may_become_complex():
    assert isinstance(A128.pow(real(-8), real('0.5')), Complex)
    assert A128.pow(real(2), real(-1)) == real('0.5')


def test_shifts():
    assert A8.shiftl(Signed(1), Signed(7)) == Signed(-128)
    assert A8.shiftl(Signed(1), Signed(8)) == Signed(0)
    assert A8.shiftr(Signed(-128), Signed(1)) == Signed(-64)
    assert A8.shiftr(Signed(-128), Signed(100)) == Signed(-1)
    assert A8.shiftr(Unsigned(128), Unsigned(1)) == Unsigned(64)
    assert A8.shiftl(Signed(4), Signed(-1)) == Signed(2)


def test_bitwise():
    assert A8.band(Signed(12), Signed(10)) == Signed(8)
    assert A8.bor(Signed(12), Signed(10)) == Signed(14)
    assert A8.bxor(Signed(12), Signed(10)) == Signed(6)
    assert A8.bnot(Signed(0)) == Signed(-1)
    assert A8.bnot(Unsigned(0)) == Unsigned(255)


@mark.parametrize('operation', [A8.band, A8.bor, A8.bxor, A8.shiftl])
def test_bitwise_needs_integers(operation):
    with raises(ParseError) as e:
        operation(real('1.5'), Signed(1))
    assert e.value.kind is ErrorKind.INTEGER_REQUIRED


def test_negate():
    assert A8.negate(Signed(-128)) == Signed(-128)
    assert A8.negate(real(2)) == real(-2)


def test_functions():
    assert A128.call('sqrt', Signed(16)) == real(4)
    assert A128.call('sqrt', Signed(-4)) == complex_(0, 2)
    assert A128.call('norm', complex_(3, 4)) == real(25)
    assert A128.call('abs', complex_(3, 4)) == real(5)
    assert A128.call('real', complex_(3, 4)) == real(3)
