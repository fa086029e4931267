from pytest import Item, fixture

from bigcalc.calculator import Calculator
from bigcalc.config import Config


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Excessive in most cases.

    Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!)
    print('actual', item.name + ':' + str(lineno),
          # Get rid of full-diff, -vv for full diff, etc.
          '\n'.join(str(expl).splitlines()[:-2]))


@fixture
def calc():
    '''
    Return a function evaluating lines on a fresh default session.

    Returns the rendered text of the last line.
    '''
    calculator = Calculator(Config())

    def evaluate(*lines):
        text = None
        for line in lines:
            text = calculator.render(calculator.evaluate(line))
        return text
    evaluate.calculator = calculator
    return evaluate
