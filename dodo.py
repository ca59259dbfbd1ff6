# -*- coding: utf-8 -*-
# pydoit task file
# see https://pydoit.org/
# run from this dir with `doit`, or `doit list`, `doit help` etc. (pip install doit 1st)

from doit.action import CmdAction

SUITE_HELP = """echo '
Test Runner Help
================

Filter Options:
  -k, --keyword TEXT    Only run tests matching the keyword expression
                        Example: -k "extended and not cli"
  -s, --speed TEXT      Filter tests by speed:
                        - "slow": Run only slow tests
                        - "not slow" or "fast": Skip slow tests
                        - "all": Run all tests regardless of speed
  -n, --no-network      Skip tests opening real sockets on localhost
  -r, --retry           Only run previously failed tests

Output Options:
  -p, --print-logs      Print test logs to console instead of capturing
  -f, --full-trace      Show full traceback on errors
  -t, --show-time       Display duration of all tests

Examples:
  doit test_logic                     # Run all tests
  doit test_logic -k session          # Run tests containing "session"
  doit test_logic -n -p               # Skip socket tests, print logs
  doit test_logic --retry --show-time # Rerun failed tests with timing
  '"""

TEST_PARAMS = [
    {
        "name": "help",
        "long": "help",
        "default": False,
        "type": bool,
    },
    {
        "name": "keyword",
        "short": "k",
        "default": "",
    },
    {
        "name": "speed",
        "short": "s",
        "default": "",
    },
    {
        "name": "no_network",
        "short": "n",
        "default": False,
        "type": bool,
    },
    {
        "name": "retry",
        "short": "r",
        "default": False,
        "type": bool,
    },
    {
        "name": "print_logs",
        "short": "p",
        "default": False,
        "type": bool,
    },
    {
        "name": "full_trace",
        "short": "f",
        "default": False,
        "type": bool,
    },
    {
        "name": "show_time",
        "short": "t",
        "default": False,
        "type": bool,
    },
]


def _build_pytest_command(
    test_dir,
    keyword="",
    speed="",
    no_network=False,
    retry=False,
    print_logs=False,
    full_trace=False,
    show_time=False,
):
    """Helper function to build pytest commands for test tasks."""
    cmd = ["pytest"]

    if print_logs:
        cmd.append("--capture=no")
    if full_trace:
        cmd.append("--full-trace")
    if show_time:
        cmd.append("--durations=0")

    cmd.extend(["--color=yes", "-vv", "-x"])

    if retry:
        cmd.append("--lf")
    if keyword:
        cmd.extend(["-k", f'"{keyword}"'])

    markers = []
    if speed == "slow":
        markers.append("slow")
    elif speed in ["not slow", "fast"]:
        markers.append("not slow")
    elif speed not in ["", "all"]:
        raise ValueError(
            f"Invalid speed filter: {speed}. Use 'slow', 'not slow', 'fast', or 'all'"
        )
    if no_network:
        markers.append("not network")
    if markers:
        cmd.extend(["-m", '"' + " and ".join(markers) + '"'])

    cmd.append(test_dir)

    return " ".join(cmd)


def task_install():
    """Install fmpcm in editable mode, with test dependencies"""
    return {
        "actions": ["pip install -e .[test]"],
        "verbosity": 2,
    }


def task_test_logic():
    """Run the logic test suite (tests in test/logic/)."""

    def router(
        keyword, speed, no_network, retry, print_logs, full_trace, show_time, help=False
    ):
        if help:
            return SUITE_HELP
        try:
            return _build_pytest_command(
                "test/logic/",
                keyword=keyword,
                speed=speed,
                no_network=no_network,
                retry=retry,
                print_logs=print_logs,
                full_trace=full_trace,
                show_time=show_time,
            )
        except ValueError as e:
            return f"echo 'Error: {str(e)}' && exit 1"

    return {
        "actions": [CmdAction(router)],
        "params": TEST_PARAMS,
        "verbosity": 2,
    }


def task_format():
    """Format code using ruff."""

    def router(help=False):
        if help:
            return """echo '
Code Formatter Help
=================

This task runs the ruff formatter to ensure consistent code style:
- Sorts imports (ruff check --select I --fix)
- Formats code (ruff format)

Formats src/fmpcm/, test/, examples/ and dodo.py.

No options required - simply run:
  doit format
  '"""
        return " && ".join(
            f"ruff check --select I --fix {path} && ruff format {path}"
            for path in ["src/fmpcm", "test/", "examples/", "dodo.py"]
        )

    return {
        "actions": [CmdAction(router)],
        "params": [
            {
                "name": "help",
                "long": "help",
                "default": False,
                "type": bool,
            },
        ],
        "verbosity": 2,
    }


def task_docs():
    """Generate documentation using pdoc3."""

    def router(help=False):
        if help:
            return """echo '
Documentation Generator Help
==========================

This task runs pdoc3 to generate HTML documentation for the fmpcm package
into docs/.

No options required - simply run:
  doit docs
  '"""
        return "pdoc3 --output-dir docs/ --html --force --skip-errors ./src/fmpcm/"

    return {
        "actions": [CmdAction(router)],
        "params": [
            {
                "name": "help",
                "long": "help",
                "default": False,
                "type": bool,
            },
        ],
        "verbosity": 2,
    }
