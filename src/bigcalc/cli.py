from os import isatty, path
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, OPTIONAL
import traceback

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .util import ParseError
from .config import Config, OptionCounts, interpret_arg
from .calculator import Calculator
from .lexer import Lexer


class SessionLines:
    '''
    Lines typed at a prompt_toolkit prompt, until end of file.

    History is kept in history_file across runs. The bottom toolbar shows
    whatever status() returns, so it follows option changes.
    '''

    def __init__(self, prompt, history_file, status):
        self.prompt = prompt
        self.history_file = history_file
        self.status = status

    def __iter__(self):
        session = PromptSession(message=self.prompt,
                                history=FileHistory(self.history_file),
                                bottom_toolbar=self.status,
                                enable_open_in_editor=True)
        while True:
            try:
                yield session.prompt()
            except EOFError:
                return


class CLI:
    '''
    Command line interface to the calculator.

    Arguments that aren't CLI flags are calculator options, introduced by
    '-', or else fragments of one expression to evaluate.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.bigcalc_history'
    OPTION_CODE = '-'

    def dumper(self):
        '''
        Dump all tokens of each line: kind, text, offset.
        '''
        config = self.calculator.config
        print('<kind>\t<repr(text)>\t<offset>')
        for line in self.args.expressions:
            lexer = Lexer(line.strip(),
                          config.default_number_radix,
                          config.default_number_kind)
            for token in lexer.tokens():
                print(token.kind.name, repr(token.text), token.offset,
                      sep='\t')

    def executor(self):
        '''
        Run calculator on each line.

        Returns False if any line failed.
        '''
        ok = True
        for line in self.args.expressions:
            line = line.strip()
            if not line:
                continue
            try:
                text = self.calculator.render(self.calculator.evaluate(line))
            # Abort entire rest of line, makes sense anyway
            except ParseError as e:
                ok = False
                if self.args.verbose and e.__cause__ is not None:
                    traceback.print_exception(type(e.__cause__),
                                              e.__cause__,
                                              e.__cause__.__traceback__)
                print(e.error_str(), file=stderr)
                continue
            if text is not None:
                print(text, flush=True)
        return ok

    def _input_lines(self):
        '''
        Lines to evaluate when no expression was given.

        A prompt session when asked for with --prompt or when talking to a
        terminal on both ends, else plain stdin.
        '''
        if not self.args.prompt and \
           not (isatty(stdin.fileno()) and isatty(stdout.fileno())):
            return stdin
        return SessionLines(self.args.prompt or self.DEFAULT_PROMPT,
                            path.expanduser(self.HISTORY_FILE),
                            self.calculator.config.options)

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        # -h and --help belong to the calculator's own option grammar
        self.argument_parser = ArgumentParser(description='Arbitrary '
                                              'precision calculator',
                                              add_help=False,
                                              allow_abbrev=False)
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('--prompt',
                                          nargs=OPTIONAL,
                                          const=self.DEFAULT_PROMPT)
        self.argument_parser.add_argument('-D', '--dump',
                                          action='store_const',
                                          const=self.dumper,
                                          dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=None)

    def configure(self, arguments):
        '''
        Interpret calculator options, returning the remaining fragments.
        '''
        config = Config()
        counts = OptionCounts()
        fragments = [argument
                     for argument
                     in arguments
                     if not interpret_arg(argument, self.OPTION_CODE,
                                          config, counts)]
        self.calculator = Calculator(config, counts)
        return fragments

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        Returns the process exit status.
        '''
        self.args, arguments = self.argument_parser.parse_known_args(args)
        fragments = self.configure(arguments)
        if self.calculator.counts.n_help_options:
            print(self.calculator.help_text())
        if fragments:
            self.args.expressions = [' '.join(fragments)]
        elif self.calculator.counts.n_help_options:
            self.args.expressions = []
        else:
            self.args.expressions = self._input_lines()
        try:
            return 0 if self.args.action() is not False else 1
        except KeyboardInterrupt:
            exit(1)
