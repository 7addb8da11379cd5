"""errors raised by the rating models"""


class ConvergenceFailure(ArithmeticError):
    """
    Raised when the Glicko-2 volatility solver gives up.

    Attributes:
        stage (str): 'bracket' if the search for a lower bracket ran out of steps,
                     'root' if the false position iteration did.
        iterations (int): how many steps were taken before giving up.
        bracket (tuple): the last (A, B) interval that was being searched.
    """

    def __init__(self, stage: str, iterations: int, bracket: tuple):
        self.stage = stage
        self.iterations = iterations
        self.bracket = bracket
        super().__init__(f'volatility solver failed in {stage} stage after {iterations} iterations, bracket={bracket}')
