class ArithmeticOverflow(OverflowError):
    """A fixed-width add/sub/mul would wrap. Carries the offending operands."""

    _LABELS = {"add": "Addition", "sub": "Subtraction", "mul": "multiplication"}

    def __init__(self, a: int, b: int, op: str):
        self.a, self.b, self.op = int(a), int(b), op
        super().__init__(f"{self._LABELS.get(op, op)} overflow for a = {self.a} b = {self.b}")


class DimensionError(ValueError):
    pass


class MatrixInputError(ValueError):
    pass
