import os
import sys

import pytest

# Ensure repo-local imports (e.g., `import texeltune`) resolve without installing.
root_dir = os.path.abspath(os.path.dirname(__file__))
if root_dir not in sys.path:
    sys.path.insert(0, root_dir)


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "-R",
        "--random-positions",
        action="store_true",
        default=False,
        dest="run_random_positions",
        help="Run tests marked with @pytest.mark.random_positions (random game sweeps)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if not config.getoption("run_random_positions"):
        skip_random = pytest.mark.skip(
            reason="use -R/--random-positions to enable random game sweeps"
        )
        for item in items:
            if "random_positions" in item.keywords:
                item.add_marker(skip_random)
