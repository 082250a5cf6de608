import pytest

from kappa.interpreter import Interpreter


class OutputBuffer:
    """Collects everything `.print` writes so tests can assert on it."""

    def __init__(self):
        self.parts: list[str] = []

    def write(self, text: str) -> None:
        self.parts.append(text)

    def clear(self) -> None:
        self.parts.clear()

    @property
    def text(self) -> str:
        return "".join(self.parts)


@pytest.fixture
def output():
    return OutputBuffer()


@pytest.fixture
def interp(output, monkeypatch):
    # A fresh interpreter (and Var registry) per test, with no prelude files.
    monkeypatch.delenv("KAPPA_PRELUDE_PATH", raising=False)
    return Interpreter(write_output=output.write)
