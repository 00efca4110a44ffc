# calculator.py
# Interactive text calculator: operation evaluator, session loop and CLI entry point

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Tuple
import argparse
import functools
import logging
import math
import operator as op
import sys

# Optional "did you mean" support for mistyped commands using RapidFuzz
try:
    from rapidfuzz import fuzz
    from rapidfuzz import process as rprocess
    _HAS_RAPIDFUZZ = True
except Exception:
    fuzz = None
    rprocess = None
    _HAS_RAPIDFUZZ = False

CANCEL_TOKEN = 'c'
PROMPT = '> '
DEFAULT_SUGGEST_THRESHOLD = 70

logger = logging.getLogger(__name__)


class Operation(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"
    SQRT = "sqrt"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    HISTORY = "history"
    EXIT = "exit"
    CANCEL = CANCEL_TOKEN

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def arity(self) -> int:
        """Number of operands the operation consumes (0 for control commands)."""
        if self in _BINARY_OPS:
            return 2
        if self in _UNARY_OPS:
            return 1
        return 0

    @property
    def is_control(self) -> bool:
        return self.arity == 0


class ErrorKind(Enum):
    INVALID_COMMAND = "InvalidCommand"
    INVALID_NUMBER = "InvalidNumber"
    INVALID_ARITY = "InvalidArity"
    DIVISION_BY_ZERO = "DivisionByZero"
    NEGATIVE_RADICAND = "NegativeRadicand"
    INVALID_OPERATION = "InvalidOperation"


class CalculatorError(ValueError):
    """A recoverable calculator error; `message` is shown to the user as-is."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"CalculatorError({self.kind.name}, {self.message!r})"


# --- Evaluator ---

def _divide(a: float, b: float) -> float:
    if b == 0:
        raise CalculatorError(ErrorKind.DIVISION_BY_ZERO, "Division by zero")
    return a / b


def _signed_infinity(a: float, b: float) -> float:
    b = float(b)
    if b.is_integer() and b % 2 == 1:
        return math.copysign(math.inf, a)
    return math.inf


def _power(a: float, b: float) -> float:
    # math.pow raises where IEEE pow yields nan/inf; return those instead
    try:
        return math.pow(a, b)
    except OverflowError:
        return _signed_infinity(a, b)
    except ValueError:
        if a == 0:
            return _signed_infinity(a, b)
        return math.nan


def _square_root(x: float) -> float:
    if x < 0:
        raise CalculatorError(ErrorKind.NEGATIVE_RADICAND, "Cannot calculate square root of a negative number")
    return math.sqrt(x)


def _in_degrees(func: Callable[[float], float]) -> Callable[[float], float]:
    @functools.wraps(func)
    def wrapped(degrees: float) -> float:
        radians = degrees * math.pi / 180.0
        if not math.isfinite(radians):
            return math.nan
        return func(radians)
    return wrapped


_BINARY_OPS: Dict[Operation, Callable[[float, float], float]] = {
    Operation.ADD: op.add,
    Operation.SUBTRACT: op.sub,
    Operation.MULTIPLY: op.mul,
    Operation.DIVIDE: _divide,
    Operation.POWER: _power,
}

_UNARY_OPS: Dict[Operation, Callable[[float], float]] = {
    Operation.SQRT: _square_root,
    Operation.SIN: _in_degrees(math.sin),
    Operation.COS: _in_degrees(math.cos),
    Operation.TAN: _in_degrees(math.tan),
}


def evaluate(operation: Operation, operands: Iterable[float]) -> float:
    """Apply `operation` to `operands` and return the result.

    Trigonometric inputs are in degrees. Raises CalculatorError for
    control commands, wrong operand counts and domain errors.
    """
    operands = tuple(operands)
    func = _BINARY_OPS.get(operation) or _UNARY_OPS.get(operation)
    if func is None:
        raise CalculatorError(ErrorKind.INVALID_OPERATION, "Invalid operation or number of operands")
    if len(operands) != operation.arity:
        raise CalculatorError(
            ErrorKind.INVALID_ARITY,
            f"'{operation.symbol}' expects {operation.arity} operand(s), got {len(operands)}",
        )
    return float(func(*operands))


def format_number(value: float) -> str:
    """Shortest round-trip text for `value`, without a trailing '.0'."""
    text = repr(float(value))
    if text.endswith('.0'):
        text = text[:-2]
    return text


@dataclass(frozen=True)
class Calculation:
    operation: Operation
    operands: Tuple[float, ...]
    value: Optional[float] = None
    error: Optional[CalculatorError] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def result_text(self) -> str:
        if self.error is not None:
            return f"Error: {self.error.message}"
        return format_number(self.value)

    def formatted(self) -> str:
        operands = ", ".join(format_number(x) for x in self.operands)
        return f"{self.operation.symbol} {operands} = {self.result_text()}"


def calculate(operation: Operation, operands: Iterable[float]) -> Calculation:
    """Evaluate and wrap the outcome (value or error) in a Calculation record."""
    operands = tuple(float(x) for x in operands)
    try:
        value = evaluate(operation, operands)
    except CalculatorError as e:
        logger.info("Calculation %s %s failed: %s", operation.symbol, operands, e.message)
        return Calculation(operation, operands, error=e)
    logger.info("Calculated %s %s = %r", operation.symbol, operands, value)
    return Calculation(operation, operands, value=value)


# --- Session state ---

@dataclass(frozen=True)
class CalculatorState:
    history: Tuple[Calculation, ...] = ()
    current_operation: Optional[Operation] = None
    current_operands: Tuple[float, ...] = ()

    @property
    def operands_needed(self) -> int:
        if self.current_operation is None:
            return 0
        return self.current_operation.arity - len(self.current_operands)


def initial_state() -> CalculatorState:
    return CalculatorState()


def begin_operation(state: CalculatorState, operation: Operation) -> CalculatorState:
    return replace(state, current_operation=operation, current_operands=())


def add_operand(state: CalculatorState, value: float) -> CalculatorState:
    return replace(state, current_operands=state.current_operands + (value,))


def cancel_operation(state: CalculatorState) -> CalculatorState:
    return replace(state, current_operation=None, current_operands=())


def record_calculation(state: CalculatorState, calculation: Calculation) -> CalculatorState:
    return replace(
        state,
        history=state.history + (calculation,),
        current_operation=None,
        current_operands=(),
    )


# --- Input parsing ---

def parse_command(text: str) -> Optional[Operation]:
    """Map a command line to its Operation, or None if it is not recognized."""
    key = text.strip().lower()
    for operation in Operation:
        if operation.value == key:
            return operation
    return None


def suggest_command(text: str, threshold: int = DEFAULT_SUGGEST_THRESHOLD) -> Optional[str]:
    """Closest command keyword to `text`, or None (always None without RapidFuzz)."""
    if not _HAS_RAPIDFUZZ or not text:
        return None
    keywords = [o.value for o in Operation if len(o.value) > 1]
    try:
        best = rprocess.extractOne(text, keywords, scorer=fuzz.ratio, score_cutoff=threshold)
    except Exception:
        logger.exception("RapidFuzz extractOne failed; skipping suggestion")
        return None
    return best[0] if best else None


def parse_operand(text: str) -> float:
    try:
        value = float(text.strip())
    except ValueError as exc:
        raise CalculatorError(ErrorKind.INVALID_NUMBER, "Invalid number. Please try again.") from exc
    if not math.isfinite(value):
        raise CalculatorError(ErrorKind.INVALID_NUMBER, "Invalid number. Please try again.")
    return value


# --- Display ---

def display_welcome() -> None:
    print("Welcome to the Text Calculator!")
    print("Available operations:")
    print("  + : Addition (a + b)")
    print("  - : Subtraction (a - b)")
    print("  * : Multiplication (a * b)")
    print("  / : Division (a / b)")
    print("  ^ : Exponentiation (a ^ b)")
    print("  sqrt : Square root (√x)")
    print("  sin : Sine of angle in degrees")
    print("  cos : Cosine of angle in degrees")
    print("  tan : Tangent of angle in degrees")
    print("  history : Show calculation history")
    print("  exit : Exit the calculator")
    print(f"  {CANCEL_TOKEN} : Cancel current operation")
    print()


def display_result(calculation: Calculation) -> None:
    if calculation.error is not None:
        print(f"Error: {calculation.error.message}")
    else:
        print(f"Result: {calculation.value:.6f}")


def display_history(history: Iterable[Calculation]) -> None:
    history = list(history)
    print("\nCalculation History:")
    print("-----------------")
    if not history:
        print("No calculations yet.")
    for i, calc in enumerate(history, start=1):
        print(f"{i}. {calc.formatted()}")
    print()


def _read_line(prompt: str) -> str:
    return input(prompt).strip().lower()


# --- Session loop ---

def handle_command(state: CalculatorState, suggest_threshold: int = DEFAULT_SUGGEST_THRESHOLD) -> Tuple[CalculatorState, bool]:
    """Read one top-level command. Returns the next state and whether to terminate."""
    commands = ", ".join(o.value for o in Operation)
    print(f"\nEnter operation or command ({commands}):")
    text = _read_line(PROMPT)
    operation = parse_command(text)

    if operation is None:
        error = CalculatorError(ErrorKind.INVALID_COMMAND, "Invalid operation. Please try again.")
        logger.debug("Rejected command %r: %s", text, error.kind.value)
        print(error.message)
        suggestion = suggest_command(text, suggest_threshold)
        if suggestion:
            print(f"Did you mean '{suggestion}'?")
        return state, False
    if operation is Operation.EXIT:
        return state, True
    if operation is Operation.HISTORY:
        display_history(state.history)
        return state, False
    if operation is Operation.CANCEL:
        print("No operation to cancel.")
        return state, False
    return begin_operation(state, operation), False


def collect_operand(state: CalculatorState) -> CalculatorState:
    """Read one operand for the pending operation; evaluate once all are collected."""
    index = len(state.current_operands) + 1
    text = _read_line(f"Enter operand {index} (or '{CANCEL_TOKEN}' to cancel): ")

    if text == CANCEL_TOKEN:
        logger.info("Cancelled %s after %d operand(s)", state.current_operation.symbol, len(state.current_operands))
        print("Operation cancelled.")
        return cancel_operation(state)

    try:
        value = parse_operand(text)
    except CalculatorError as e:
        logger.debug("Rejected operand %r", text)
        print(e.message)
        return state

    state = add_operand(state, value)
    if state.operands_needed > 0:
        return state

    calculation = calculate(state.current_operation, state.current_operands)
    display_result(calculation)
    return record_calculation(state, calculation)


def run_session(state: Optional[CalculatorState] = None, show_banner: bool = True,
                suggest_threshold: int = DEFAULT_SUGGEST_THRESHOLD) -> CalculatorState:
    """Run the read-eval-print loop until `exit` (or end of input); return the final state."""
    if state is None:
        state = initial_state()
    if not _HAS_RAPIDFUZZ:
        logger.debug("RapidFuzz not installed; command suggestions disabled.")
    if show_banner:
        display_welcome()

    try:
        while True:
            if state.current_operation is None:
                state, done = handle_command(state, suggest_threshold)
                if done:
                    break
            else:
                state = collect_operand(state)
    except (EOFError, KeyboardInterrupt):
        print()

    print("Goodbye!")
    logger.info("Session ended with %d calculation(s) in history", len(state.history))
    return state


# --- CLI ---

def _parse_args(argv=None):
    p = argparse.ArgumentParser(description="Text calculator: arithmetic and trigonometry with a session history")
    p.add_argument('--demo', action='store_true', help='Print the arithmetic/factorial demo and exit')
    p.add_argument('--no-banner', action='store_true', help='Do not print the welcome banner')
    p.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], default='WARNING',
                   help='Logging level for diagnostics on stderr (default: WARNING)')
    p.add_argument('--suggest-threshold', type=int, default=DEFAULT_SUGGEST_THRESHOLD,
                   help='Similarity (0-100) needed to suggest a command for a typo (default: 70)')
    args = p.parse_args(argv)
    if not 0 <= args.suggest_threshold <= 100:
        p.error('--suggest-threshold must be between 0 and 100')
    return args


def main(argv=None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    if args.demo:
        from arithmetic_demo import demo
        demo()
        return 0

    run_session(show_banner=not args.no_banner, suggest_threshold=args.suggest_threshold)
    return 0


if __name__ == '__main__':
    sys.exit(main())
