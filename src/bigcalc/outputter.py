'''
Rendering of values as text, in base 2, 8, 10 or 16.

Power of two bases print integers in space delimited digit groups, and
floating values with a binary exponent marked by p, much like C's %a:

    1.8p+0      1.5, normalized
    20          32, unnormalized: the point aligns to a whole digit
'''

import regex

from .values import DIGITS10, SIGNIFICAND_BITS, ctx, Signed, Unsigned, Real


DIGITS = '0123456789abcdef'

# Bits per digit, delimiter group size
RADIX_POW2 = {
    2: (1, 4),
    8: (3, 3),
    16: (4, 4),
}

# Scientific notation below this many digits' worth of exponent.
# Matches what gcc and boost do for hex floats.
FIXED_MIN_DIGITS = -4


class Outputter:
    '''
    Formats values according to a configuration's output settings.
    '''

    def __init__(self, config):
        self.output_radix = config.output_radix
        self.precision = config.precision
        self.normalized = config.output_fp_normalized
        if self.output_radix == 10:
            self.output_fn = self.output_dec
        else:
            self.output_fn = self.output_radix_pow2

    def format(self, value):
        return ''.join(self.output_fn(value))

    __call__ = format

    # Decimal

    def output_dec(self, value):
        if isinstance(value, (Signed, Unsigned)):
            if value.value < 0:
                yield '-'
            yield self.output_dec_uint(abs(value.value))
        elif isinstance(value, Real):
            yield self.output_dec_float(value.value)
        else:
            yield from self._complex(value.value, self.output_dec_float)

    def output_dec_uint(self, n):
        reversed_ = []
        while True:
            n, digit = divmod(n, 10)
            reversed_.append(DIGITS[digit])
            if not n:
                break
        return ''.join(reversed(reversed_))

    def output_dec_float(self, x):
        '''
        Like C++ stream output: %g style, trailing zeros stripped.
        '''
        if ctx.isnan(x):
            return 'nan'
        if ctx.isinf(x):
            return '-inf' if x < 0 else 'inf'
        precision = self.precision
        if precision == 0 or precision > DIGITS10:
            precision = DIGITS10
        text = ctx.nstr(x, precision, min_fixed=-5, max_fixed=precision)
        # 1.0e+20 -> 1e+20, 5.0 -> 5
        text = regex.sub(r'\.0*(?=e|$)', '', text)
        # At least two exponent digits: 1e+5 -> 1e+05
        return regex.sub(r'e([-+])(\d)$', r'e\g<1>0\g<2>', text)

    # Power of two

    def output_radix_pow2(self, value):
        if isinstance(value, Signed):
            if value.value < 0:
                yield '-'
            yield self.output_radix_pow2_uint(abs(value.value))
        elif isinstance(value, Unsigned):
            yield self.output_radix_pow2_uint(value.value)
        elif isinstance(value, Real):
            yield self.output_radix_pow2_float(value.value)
        else:
            yield from self._complex(value.value,
                                     self.output_radix_pow2_float)

    def output_radix_pow2_uint(self, n):
        n_bits, delimit_at = RADIX_POW2[self.output_radix]
        mask = (1 << n_bits) - 1
        reversed_ = []
        while True:
            reversed_.append(DIGITS[n & mask])
            n >>= n_bits
            if not n:
                break
        out = []
        digit_count = len(reversed_)
        for digit in reversed(reversed_):
            if out and digit_count % delimit_at == 0:
                out.append(' ')
            out.append(digit)
            digit_count -= 1
        return ''.join(out)

    def output_radix_pow2_float(self, x):
        out = []
        sign, man, exp, bc = x._mpf_
        if sign:
            out.append('-')
        if ctx.isinf(x):
            return ''.join(out) + 'inf'
        if ctx.isnan(x):
            return 'nan'
        if not man:
            # Zero can't go through the general routine
            return ''.join(out) + '0'

        n_bits = RADIX_POW2[self.output_radix][0]
        mask = (1 << n_bits) - 1
        # Left align the significand to SIGNIFICAND_BITS; exponent is then
        # that of its leading bit.
        significand = int(man) << (SIGNIFICAND_BITS - bc)
        exponent = exp + bc - 1

        precision = self.precision
        if precision == 0:
            precision = -(-SIGNIFICAND_BITS // n_bits)
        if precision * n_bits < SIGNIFICAND_BITS:
            significand, exponent = self._round(significand, exponent,
                                                precision, n_bits)

        reversed_ = []
        # Leading bit is handled specially
        remaining_bits = SIGNIFICAND_BITS - 1
        if not self.normalized:
            adjustment = exponent % n_bits
            remaining_bits -= adjustment
            exponent -= adjustment
        shift = remaining_bits % n_bits
        if shift:
            # Partial digit, padded with zero bits on the right
            pad = n_bits - shift
            digit = (significand & (mask >> pad)) << pad
            if digit:
                reversed_.append(DIGITS[digit])
            significand >>= shift
        for _ in range(remaining_bits // n_bits):
            digit = significand & mask
            # Trailing zero digits are dropped
            if digit or reversed_:
                reversed_.append(DIGITS[digit])
            significand >>= n_bits
        leading = DIGITS[significand]

        if not self.normalized and \
           FIXED_MIN_DIGITS * n_bits <= exponent < precision * n_bits:
            place = exponent
            if place < 0:
                out.append('0.')
                place += n_bits
                while place < 0:
                    out.append('0')
                    place += n_bits
            out.append(leading)
            for digit in reversed(reversed_):
                if place == 0 and exponent >= 0:
                    out.append('.')
                out.append(digit)
                place -= n_bits
            while place > 0:
                out.append('0')
                place -= n_bits
        else:
            out.append(leading)
            if reversed_:
                out.append('.')
                out.extend(reversed(reversed_))
            out.append('p{:+d}'.format(exponent))
        return ''.join(out)

    def _round(self, significand, exponent, precision, n_bits):
        '''
        Round significand half up to precision digits.

        Returns the rounded significand, left aligned again, and exponent,
        which grows by one if rounding carried out of the leading bit.
        '''
        # Position of the leading bit once only precision digits remain
        # as integer bits.
        if self.normalized:
            leading = precision * n_bits - n_bits
        else:
            leading = precision * n_bits - (n_bits - exponent % n_bits)
        shift = SIGNIFICAND_BITS - 1 - leading
        assert shift > 0
        # Add a half and truncate
        rounded = (significand + (1 << (shift - 1))) >> shift
        length = rounded.bit_length()
        exponent += length - 1 - leading
        return rounded << (SIGNIFICAND_BITS - length), exponent

    def _complex(self, z, output_part):
        '''
        Yield real and imaginary parts, omitting zero and unit parts.
        '''
        re, im = ctx.re(z), ctx.im(z)
        if re != 0 or im == 0:
            yield output_part(re)
        if im != 0:
            if re != 0 and not im < 0:
                yield '+'
            if im == -1:
                yield '-'
            elif im != 1:
                yield output_part(im)
            yield 'i'
