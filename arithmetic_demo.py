# arithmetic_demo.py
# Non-interactive demo of the arithmetic primitives plus factorial

from typing import Optional
import logging

from calculator import CalculatorError, Operation, evaluate

logger = logging.getLogger(__name__)


def add(x: float, y: float) -> float:
    return evaluate(Operation.ADD, (x, y))


def subtract(x: float, y: float) -> float:
    return evaluate(Operation.SUBTRACT, (x, y))


def multiply(x: float, y: float) -> float:
    return evaluate(Operation.MULTIPLY, (x, y))


def safe_divide(x: float, y: float) -> Optional[float]:
    """Return x / y, or None when y is zero."""
    try:
        return evaluate(Operation.DIVIDE, (x, y))
    except CalculatorError as e:
        logger.debug("safe_divide(%r, %r): %s", x, y, e.message)
        return None


def factorial(n: int) -> int:
    if n < 0:
        raise ValueError("n must be non-negative")
    if n == 0:
        return 1
    return n * factorial(n - 1)


def demo() -> None:
    print(f"add: {add(1.0, 2.0):.2f}")
    print(f"sub: {subtract(1.0, 2.0):.2f}")
    print(f"mult: {multiply(1.0, 2.0):.2f}")
    result = safe_divide(1.0, 2.0)
    if result is None:
        print("Cannot divide by zero")
    else:
        print(f"div: {result:.2f}")
    print(f"fact: {factorial(5)}")


if __name__ == '__main__':
    demo()
