#!/usr/bin/python3
import sys

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from legend_deploy.deploy import run
from legend_deploy.options import autosign_option, params_filepath_option, verify_option
from legend_deploy.params import Deployer


@click.command(cls=ConnectedProviderCommand, name="deploy-legend")
@network_option(required=True)
@account_option()
@params_filepath_option
@autosign_option
@verify_option
def cli(network, account, params_filepath, autosign, verify):
    """
    Deploys the Zecrey Legend contracts (ZNS, governance, verifier,
    ZecreyLegend and tokens), wires them through DeployFactory and
    writes the resulting addresses to the params file's artifact path.

    ape run deploy_legend --network ethereum:local:test --autosign
    """
    click.echo(f"Connected to {network.name} network.")
    try:
        deployer = Deployer.from_yaml(
            filepath=params_filepath, verify=verify, account=account, autosign=autosign
        )
        output_filepath = run(deployer=deployer, params=deployer.params)
    except Exception as e:
        click.secho(f"Error: {e}", err=True, fg="red")
        sys.exit(1)

    click.secho(f"(i) Addresses written to {output_filepath}!", fg="green")


if __name__ == "__main__":
    cli()
