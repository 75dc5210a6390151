import os
from pathlib import Path

import pytest

# Measure the CLI when it runs in a subprocess
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()


VALID_PROGRAM = """BEGIN
    READ(A, B);
    SUM := A + B - (1 - C);
    WRITE(SUM, A + 2);
END
"""


@pytest.fixture
def valid_program() -> str:
    return VALID_PROGRAM


@pytest.fixture
def program_file(tmp_path: Path) -> Path:
    path = tmp_path / "sum.micro"
    path.write_text(VALID_PROGRAM, encoding="utf-8")
    return path
