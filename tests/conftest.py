import pytest


@pytest.fixture
def feed_input(monkeypatch):
    """Replace input() with a scripted sequence of lines; records every prompt shown."""
    prompts = []

    def _feed(*lines):
        it = iter(lines)

        def fake_input(prompt=''):
            prompts.append(prompt)
            try:
                return next(it)
            except StopIteration:
                raise EOFError
        monkeypatch.setattr('builtins.input', fake_input)
        return prompts
    return _feed
