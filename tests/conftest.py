import pytest
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Click runner for invoking `markdown-to-html` in-process."""
    return CliRunner()
