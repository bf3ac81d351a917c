from pathlib import Path
from types import SimpleNamespace

import pytest

from legend_deploy.constants import DEFAULT_PARAMS_FILEPATH
from legend_deploy.params import LegendParameters
from scripts import deploy_legend

NETWORK = SimpleNamespace(name="local")


def invoke(**options):
    kwargs = dict(
        network=NETWORK,
        account=None,
        params_filepath=DEFAULT_PARAMS_FILEPATH,
        autosign=True,
        verify=False,
    )
    kwargs.update(options)
    return deploy_legend.cli.callback(**kwargs)


def test_error_exits_with_status_1(monkeypatch, capsys):
    def from_yaml(*args, **kwargs):
        raise ValueError("chain_id in params file (97) does not match chain_id of current network")

    monkeypatch.setattr(deploy_legend.Deployer, "from_yaml", from_yaml)

    with pytest.raises(SystemExit) as exit_info:
        invoke()

    assert exit_info.value.code == 1
    assert "Error: chain_id in params file (97)" in capsys.readouterr().err


def test_failed_deployment_exits_with_status_1(monkeypatch, capsys, tmp_path):
    params = LegendParameters(addresses_filepath=tmp_path / "addresses.json")
    deployer = SimpleNamespace(params=params)
    monkeypatch.setattr(deploy_legend.Deployer, "from_yaml", lambda **kwargs: deployer)

    def run(deployer, params):
        raise RuntimeError("ZecreyRelatedERC20 constructor reverted")

    monkeypatch.setattr(deploy_legend, "run", run)

    with pytest.raises(SystemExit) as exit_info:
        invoke()

    assert exit_info.value.code == 1
    assert "Error: ZecreyRelatedERC20 constructor reverted" in capsys.readouterr().err
    assert not params.addresses_filepath.exists()


def test_success(monkeypatch, capsys):
    received = dict()
    deployer = SimpleNamespace(params=LegendParameters())

    def from_yaml(**kwargs):
        received.update(kwargs)
        return deployer

    monkeypatch.setattr(deploy_legend.Deployer, "from_yaml", from_yaml)
    monkeypatch.setattr(deploy_legend, "run", lambda deployer, params: Path("info/addresses.json"))

    invoke(verify=True)

    assert received == dict(
        filepath=DEFAULT_PARAMS_FILEPATH, verify=True, account=None, autosign=True
    )
    assert "Addresses written to info/addresses.json" in capsys.readouterr().out
