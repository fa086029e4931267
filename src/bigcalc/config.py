'''
Session configuration and the option grammar that mutates it.

The same grammar serves startup arguments (introduced by '-') and in-line
options (introduced by '#'). An option is the introducer followed by a code,
or the introducer twice followed by a long code:

    pr<N>               precision, in output digits
    h, help             request help
    w8 ... w128         integer word size
    pn, pu              normalized or unnormalized power-of-two float output
    0<base>[<type>]     default literal radix and kind
    o<base>             output radix
    m<base>[<type>]     both of the above

Base codes are b, o, d, x. Type codes are s (signed), u (unsigned) and i
(complex).
'''

from copy import copy
from enum import Enum

import regex


class NumberKind(Enum):
    SIGNED = 's'
    UNSIGNED = 'u'
    COMPLEX = 'i'


RADICES = 2, 8, 10, 16
WORD_SIZES = 8, 16, 32, 64, 128

# Prefix code to radix, shared with numeric literals
BASE_CODES = {
    'b': 2,
    'o': 8,
    'd': 10,
    'x': 16,
}
TYPE_CODES = {kind.value: kind for kind in NumberKind}


class Config:
    '''
    Live calculator configuration.

    Mutated in place by options. Copy before speculative changes.
    '''

    DEFAULT_NUMBER_RADIX = 10
    DEFAULT_NUMBER_KIND = NumberKind.SIGNED
    DEFAULT_INT_WORD_SIZE = 128
    DEFAULT_OUTPUT_RADIX = 10
    DEFAULT_PRECISION = 0

    def __init__(self, **kwargs):
        cls = type(self)
        self.default_number_radix = cls.DEFAULT_NUMBER_RADIX
        self.default_number_kind = cls.DEFAULT_NUMBER_KIND
        self.int_word_size = cls.DEFAULT_INT_WORD_SIZE
        self.output_radix = cls.DEFAULT_OUTPUT_RADIX
        # 0 means the default for the value's type
        self.precision = cls.DEFAULT_PRECISION
        self.output_fp_normalized = False
        for key, value in kwargs.items():
            if not hasattr(self, key):
                raise TypeError('Unknown configuration {}'.format(key))
            setattr(self, key, value)

    def copy(self):
        return copy(self)

    def options(self, option_code='#'):
        '''
        Return the options that recreate this configuration, e.g.
        '#0ds #od #w128 #pr0 #pu'.
        '''
        codes = {radix: code for code, radix in BASE_CODES.items()}
        return ' '.join(option_code + option for option in [
            '0' + codes[self.default_number_radix] +
            self.default_number_kind.value,
            'o' + codes[self.output_radix],
            'w{}'.format(self.int_word_size),
            'pr{}'.format(self.precision),
            'pn' if self.output_fp_normalized else 'pu',
        ])

    def __eq__(self, other):
        if not isinstance(other, Config):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self):
        return '{}({})'.format(type(self).__name__,
                               ', '.join('{}={!r}'.format(key, value)
                                         for key, value
                                         in vars(self).items()))


class OptionCounts:
    '''
    How many times each option was seen, handled or not.
    '''

    def __init__(self):
        self.n_precision_options = 0
        self.n_help_options = 0
        self.n_int_word_size_options = 0
        self.n_output_fp_normalized_options = 0
        self.n_default_options = 0
        self.n_output_options = 0
        self.other_args = False

    def copy(self):
        return copy(self)


_PRECISION = regex.compile(r'pr(?<digits>.*)', flags=regex.DOTALL)
_WORD_SIZE = regex.compile(r'w(?<bits>8|16|32|64|128)')
_RADIX = regex.compile(r'''
                       (?<code>[0om])
                       (?<base>[bodx])
                       (?<type>[sui])?
                       ''', flags=regex.VERBOSE | regex.IGNORECASE)


def interpret_arg(arg, option_code, config, counts):
    '''
    Interpret one option argument, updating config and counts in place.

    :param arg: Argument text, including its introducer.
    :param option_code: Introducer character, e.g. '-' or '#'.
    :returns: True if arg was an option. False means it is something else,
              and counts.other_args is set.
    '''
    if arg[:1] == option_code:
        if _single_flag_option(arg[1:], config, counts):
            return True
        if arg[1:2] == option_code and \
           _double_flag_option(arg[2:], config, counts):
            return True
    counts.other_args = True
    return False


def _single_flag_option(text, config, counts):
    match = _PRECISION.fullmatch(text)
    if match:
        digits = match.group('digits')
        # Malformed digits still count: handled, not necessarily successfully
        if digits.isascii() and digits.isdigit():
            config.precision = int(digits)
        counts.n_precision_options += 1
        return True

    if text == 'h':
        counts.n_help_options += 1
        return True

    match = _WORD_SIZE.fullmatch(text)
    if match:
        config.int_word_size = int(match.group('bits'))
        counts.n_int_word_size_options += 1
        return True

    if text in ('pn', 'pu'):
        config.output_fp_normalized = text == 'pn'
        counts.n_output_fp_normalized_options += 1
        return True

    match = _RADIX.fullmatch(text)
    if match is None:
        return False
    code = match.group('code').lower()
    radix = BASE_CODES[match.group('base').lower()]
    type_code = match.group('type')
    if type_code is not None and code == 'o':
        # Output base takes no type code
        return False

    if code in '0m':
        config.default_number_radix = radix
        config.default_number_kind = TYPE_CODES[(type_code or 's').lower()]
        counts.n_default_options += 1
    if code in 'om':
        config.output_radix = radix
        counts.n_output_options += 1
    return True


def _double_flag_option(text, config, counts):
    if text == 'help':
        counts.n_help_options += 1
        return True
    return False
