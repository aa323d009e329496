# NOTE: A quick note on what Nox is used for specifically. Nox is used for
# anything that requires some sort of special virtual environment in order to
# operate: the QA tools and the test suite each get their own environment.

# Standard Library
from pathlib import Path

# Third Party Library
import nox

# exclude the 'dev' session here so its not run automatically
nox.options.sessions = ["test_unit"]

DEFAULT_PYTHON_VERSION = "3.10"

PROJECT_ROOT_DIR = Path(__file__).parent

SRC_DIR = PROJECT_ROOT_DIR / "src"

# listing of things to be formatted and checked
FORMAT_TARGETS = [
    "src",
    "tests",
    "noxfile.py",
]

LINT_TARGETS = [
    "src/cellres",
    "noxfile.py",
]

QA_TOOLS = [
    "black",
    "isort",
    "ruff",
]

UNIT_TEST_DIRNAME = "unit"


### QA


def _format(session):
    session.run("black", *FORMAT_TARGETS)
    session.run("isort", *FORMAT_TARGETS)


def _format_check(session):
    session.run("black", "--check", *FORMAT_TARGETS)
    session.run("isort", "--check", *FORMAT_TARGETS)


def _lint(session):
    session.run("ruff", "check", *LINT_TARGETS)


@nox.session
def format_check(session):
    session.install(*QA_TOOLS)
    _format_check(session)


@nox.session
def lint(session):
    session.install(*QA_TOOLS)
    _lint(session)


@nox.session
def validate(session: nox.Session) -> None:
    """Run all static analysis QA checks."""
    session.install(*QA_TOOLS)

    _format_check(session)
    _lint(session)


@nox.session
def format(session):
    """Run formatting on the code."""
    session.install(*QA_TOOLS)

    _format(session)


### Tests


@nox.session(python=DEFAULT_PYTHON_VERSION)
def test_unit(
    session: nox.Session,
) -> None:
    """Run the unit tests."""

    session.install("-e", ".[test]")

    session.run(
        "pytest",
        # modern way of importing stuff
        "--import-mode=importlib",
        f"tests/{UNIT_TEST_DIRNAME}",
        *session.posargs,
    )
