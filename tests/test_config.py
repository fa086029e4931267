'''
Option grammar tests
'''

from bigcalc.config import Config, NumberKind, OptionCounts, interpret_arg

from pytest import fixture, mark


@fixture
def state():
    return Config(), OptionCounts()


def test_defaults():
    config = Config()
    assert config.default_number_radix == 10
    assert config.default_number_kind is NumberKind.SIGNED
    assert config.int_word_size == 128
    assert config.output_radix == 10
    assert config.precision == 0
    assert config.output_fp_normalized is False


@mark.parametrize('bits', [8, 16, 32, 64, 128])
def test_word_size(state, bits):
    config, counts = state
    assert interpret_arg('-w{}'.format(bits), '-', config, counts)
    assert config.int_word_size == bits
    assert counts.n_int_word_size_options == 1


def test_bad_word_size(state):
    config, counts = state
    assert not interpret_arg('-w12', '-', config, counts)
    assert config.int_word_size == 128
    assert counts.other_args


def test_precision(state):
    config, counts = state
    assert interpret_arg('#pr10', '#', config, counts)
    assert config.precision == 10
    assert counts.n_precision_options == 1


@mark.parametrize('arg', ['#prx', '#pr', '#pr1x', '#pr-1'])
def test_malformed_precision_still_counts(state, arg):
    config, counts = state
    assert interpret_arg(arg, '#', config, counts)
    assert config.precision == 0
    assert counts.n_precision_options == 1
    assert not counts.other_args


def test_normalization(state):
    config, counts = state
    assert interpret_arg('#pn', '#', config, counts)
    assert config.output_fp_normalized is True
    assert interpret_arg('#pu', '#', config, counts)
    assert config.output_fp_normalized is False
    assert counts.n_output_fp_normalized_options == 2


@mark.parametrize('arg', ['#h', '##help'])
def test_help(state, arg):
    config, counts = state
    assert interpret_arg(arg, '#', config, counts)
    assert counts.n_help_options == 1
    assert config == Config()


def test_default_number(state):
    config, counts = state
    assert interpret_arg('#0xu', '#', config, counts)
    assert config.default_number_radix == 16
    assert config.default_number_kind is NumberKind.UNSIGNED
    assert config.output_radix == 10
    assert interpret_arg('#0B', '#', config, counts)
    assert config.default_number_radix == 2
    assert config.default_number_kind is NumberKind.SIGNED
    assert counts.n_default_options == 2
    assert counts.n_output_options == 0


def test_output_radix(state):
    config, counts = state
    assert interpret_arg('#oo', '#', config, counts)
    assert config.output_radix == 8
    assert config.default_number_radix == 10
    assert counts.n_output_options == 1
    # No type code for output
    assert not interpret_arg('#oxu', '#', config, counts)
    assert config.output_radix == 8


def test_both(state):
    config, counts = state
    assert interpret_arg('-mxi', '-', config, counts)
    assert config.default_number_radix == 16
    assert config.default_number_kind is NumberKind.COMPLEX
    assert config.output_radix == 16
    assert counts.n_default_options == 1
    assert counts.n_output_options == 1


@mark.parametrize('arg', ['#foo', 'w8', '##w8', '#0z', '#', '-w8'])
def test_not_options(state, arg):
    config, counts = state
    assert not interpret_arg(arg, '#', config, counts)
    assert counts.other_args
    assert config == Config()


def test_options_recreate_config(state):
    config, counts = state
    assert Config().options() == '#0ds #od #w128 #pr0 #pu'
    changed = Config(default_number_radix=16,
                     default_number_kind=NumberKind.COMPLEX,
                     int_word_size=8, output_radix=2, precision=12,
                     output_fp_normalized=True)
    assert changed.options('-') == '-0xi -ob -w8 -pr12 -pn'
    for option in changed.options().split():
        assert interpret_arg(option, '#', config, counts)
    assert config == changed
