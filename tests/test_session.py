import pytest

import calculator as calc
from calculator import (
    CalculatorState, Operation, add_operand, begin_operation,
    cancel_operation, calculate, record_calculation, run_session,
)


def test_add_scenario_and_history(feed_input, capsys):
    feed_input('+', '3', '4', 'history', 'exit')
    state = run_session(show_banner=False)
    out = capsys.readouterr().out
    assert 'Result: 7.000000' in out
    assert '1. + 3, 4 = 7' in out
    assert out.rstrip().endswith('Goodbye!')
    assert len(state.history) == 1


def test_history_keeps_order_and_errors(feed_input, capsys):
    feed_input('*', '2', '5', '/', '1', '0', 'history', 'exit')
    state = run_session(show_banner=False)
    out = capsys.readouterr().out
    assert 'Error: Division by zero' in out
    first = out.index('1. * 2, 5 = 10')
    second = out.index('2. / 1, 0 = Error: Division by zero')
    assert first < second
    assert [c.operation for c in state.history] == [Operation.MULTIPLY, Operation.DIVIDE]
    assert state.history[0].operands == (2.0, 5.0)


def test_cancel_on_first_operand(feed_input, capsys):
    feed_input('+', 'c', 'history', 'exit')
    state = run_session(show_banner=False)
    out = capsys.readouterr().out
    assert 'Operation cancelled.' in out
    assert 'Result:' not in out
    assert 'Error:' not in out
    assert 'No calculations yet.' in out
    assert state.history == ()
    assert state.current_operation is None


def test_cancel_after_partial_entry_leaves_history_unchanged(feed_input, capsys):
    feed_input('sqrt', '9', '-', '5', 'C', 'exit')
    state = run_session(show_banner=False)
    assert len(state.history) == 1
    assert state.history[0].value == 3.0
    assert state.current_operands == ()


def test_invalid_number_reprompts_same_operand(feed_input, capsys):
    prompts = feed_input('sqrt', 'abc', 'nan', '16', 'exit')
    state = run_session(show_banner=False)
    out = capsys.readouterr().out
    assert out.count('Invalid number. Please try again.') == 2
    operand_prompts = [p for p in prompts if p.startswith('Enter operand')]
    assert operand_prompts == ["Enter operand 1 (or 'c' to cancel): "] * 3
    assert 'Result: 4.000000' in out
    assert len(state.history) == 1


def test_second_operand_prompt_index(feed_input):
    prompts = feed_input('^', '2', '3', 'exit')
    state = run_session(show_banner=False)
    assert "Enter operand 2 (or 'c' to cancel): " in prompts
    assert state.history[0].value == 8.0


def test_unknown_command_and_idle_cancel(feed_input, capsys):
    feed_input('foo', 'c', 'exit')
    state = run_session(show_banner=False)
    out = capsys.readouterr().out
    assert 'Invalid operation. Please try again.' in out
    assert 'No operation to cancel.' in out
    assert state.history == ()


def test_commands_are_case_insensitive_and_trimmed(feed_input, capsys):
    feed_input('  SIN ', ' 90 ', 'HISTORY', ' Exit ')
    state = run_session(show_banner=False)
    out = capsys.readouterr().out
    assert 'Result: 1.000000' in out
    assert '1. sin 90 = 1' in out
    assert len(state.history) == 1


def test_end_of_input_terminates(feed_input, capsys):
    feed_input('+', '1')
    state = run_session(show_banner=False)
    out = capsys.readouterr().out
    assert 'Goodbye!' in out
    assert state.history == ()


def test_banner_lists_commands(feed_input, capsys):
    feed_input('exit')
    run_session()
    out = capsys.readouterr().out
    for keyword in ('sqrt', 'sin', 'cos', 'tan', 'history', 'exit', 'Cancel'):
        assert keyword in out


def test_existing_state_is_continued(feed_input, capsys):
    start = record_calculation(CalculatorState(), calculate(Operation.ADD, [1, 1]))
    feed_input('-', '5', '3', 'history', 'exit')
    state = run_session(start, show_banner=False)
    out = capsys.readouterr().out
    assert '1. + 1, 1 = 2' in out
    assert '2. - 5, 3 = 2' in out
    assert len(state.history) == 2


def test_transitions_replace_state():
    s0 = CalculatorState()
    s1 = begin_operation(s0, Operation.DIVIDE)
    s2 = add_operand(s1, 6.0)
    assert s0.current_operation is None
    assert s1.current_operands == ()
    assert s2.current_operands == (6.0,)
    assert s2.operands_needed == 1
    s3 = cancel_operation(s2)
    assert s3.current_operation is None and s3.history == ()
    s4 = record_calculation(add_operand(s2, 3.0), calculate(Operation.DIVIDE, [6, 3]))
    assert s4.history[0].value == 2.0
    assert s2.history == ()


def test_parse_command():
    assert calc.parse_command(' Sqrt ') is Operation.SQRT
    assert calc.parse_command('^') is Operation.POWER
    assert calc.parse_command('c') is Operation.CANCEL
    assert calc.parse_command('square') is None


@pytest.mark.skipif(not calc._HAS_RAPIDFUZZ, reason="RapidFuzz not available; skipping suggestion tests")
def test_typo_gets_suggestion(feed_input, capsys):
    feed_input('histroy', 'exit')
    run_session(show_banner=False)
    out = capsys.readouterr().out
    assert "Did you mean 'history'?" in out


def test_no_suggestion_for_gibberish():
    assert calc.suggest_command('zzzzzz') is None
    assert calc.suggest_command('') is None


def test_suggestion_disabled_without_rapidfuzz(monkeypatch):
    monkeypatch.setattr(calc, '_HAS_RAPIDFUZZ', False)
    assert calc.suggest_command('histroy') is None


def test_huge_angle_keeps_session_running(feed_input, capsys):
    feed_input('sin', '1e308', 'history', 'exit')
    state = run_session(show_banner=False)
    out = capsys.readouterr().out
    assert 'Result: nan' in out
    assert '1. sin 1e+308 = nan' in out
    assert len(state.history) == 1 and state.history[0].succeeded


def test_power_overflow_is_recorded_as_infinity(feed_input, capsys):
    feed_input('^', '10', '400', 'history', 'exit')
    state = run_session(show_banner=False)
    out = capsys.readouterr().out
    assert 'Result: inf' in out
    assert '1. ^ 10, 400 = inf' in out
    assert state.history[0].value == float('inf')
