# unit/test_cli.py

import pytest

from emissions_aggregator import cli
from emissions_aggregator.adapters import registry_from_mapping

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda: None)


@pytest.fixture
def fake_registry(monkeypatch: pytest.MonkeyPatch) -> None:
    registry = registry_from_mapping({"aave": {}, "uniswap": {}, "curve": {}})
    monkeypatch.setattr(cli, "load_adapter_registry", lambda: registry)


@pytest.fixture
def recorded_runs(monkeypatch: pytest.MonkeyPatch) -> list[object]:
    runs: list[object] = []

    async def fake_store_emissions(protocol_indexes: object) -> None:
        runs.append(protocol_indexes)

    monkeypatch.setattr(cli, "store_emissions", fake_store_emissions)
    return runs


def test_list_prints_indexed_adapters(
    fake_registry: None,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """
    ARRANGE: registry of three adapters
    ACT:     main(["list"])
    ASSERT:  each adapter printed with its index
    """
    cli.main(["list"])

    lines = capsys.readouterr().out.splitlines()
    assert [line.split() for line in lines] == [
        ["0", "aave"],
        ["1", "uniswap"],
        ["2", "curve"],
    ]


def test_run_with_indexes_forwards_them(recorded_runs: list[object]) -> None:
    """
    ARRANGE: fake store_emissions
    ACT:     main(["run", "--indexes", "2", "0"])
    ASSERT:  indexes [2, 0] forwarded
    """
    cli.main(["run", "--indexes", "2", "0"])

    assert recorded_runs == [[2, 0]]


def test_run_all_selects_every_adapter(
    fake_registry: None,
    recorded_runs: list[object],
) -> None:
    """
    ARRANGE: registry of three adapters
    ACT:     main(["run", "--all"])
    ASSERT:  indexes [0, 1, 2] forwarded
    """
    cli.main(["run", "--all"])

    assert recorded_runs == [[0, 1, 2]]


def test_run_requires_a_selection() -> None:
    """
    ARRANGE: run without --indexes or --all
    ACT:     main(["run"])
    ASSERT:  argparse exits with status 2
    """
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run"])

    assert exc_info.value.code == 2


def test_run_command_exits_on_error(capsys: pytest.CaptureFixture[str]) -> None:
    """
    ARRANGE: coroutine function that raises
    ACT:     run_command
    ASSERT:  SystemExit(1) and the error on stderr
    """

    async def failing() -> None:
        raise RuntimeError("boom")

    with pytest.raises(SystemExit) as exc_info:
        cli.run_command(failing)

    assert exc_info.value.code == 1
    assert "RuntimeError: boom" in capsys.readouterr().err
