"""Test fixtures for CLI tests."""

import pytest
from click.testing import CliRunner

from beepctl.cli.main import Context, cli


@pytest.fixture(autouse=True)
def _isolate_env(clean_env):
    """Keep BEEPER_TOKEN / BEEPER_URL from the developer's shell out of CLI tests."""
    yield


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def run_cli(runner, api, sample_config):
    """Invoke the CLI against the fake API and the sample config file.

    Pass ``config_path=`` to use a different config file.
    """

    def invoke(*args, config_path=None):
        ctx = Context(
            config_path=config_path or sample_config,
            client_factory=api.client,
        )
        return runner.invoke(cli, list(args), obj=ctx)

    return invoke
