import sys
from collections import OrderedDict

import click
from ape.utils import ZERO_ADDRESS


def _abort() -> None:
    click.echo("Aborting deployment!")
    sys.exit(-1)


def _ask(question: str) -> None:
    """Asks a Y/N question; anything other than 'n' continues."""
    answer = click.prompt(f"{question} Y/N?", default="Y", show_default=False)
    if answer.lower().strip() == "n":
        _abort()


def _continue() -> None:
    _ask("Continue")


def _confirm_resolution(resolved_params: OrderedDict, contract_name: str) -> None:
    """Shows the constructor arguments of a contract and asks to deploy it."""
    if not resolved_params:
        click.echo(f"\n(i) No constructor parameters for {contract_name}")
        _ask(f"Deploy {contract_name}")
        return

    click.echo(f"\nConstructor parameters for {contract_name}")
    for name, value in resolved_params.items():
        click.echo(f"\t{name}={value}")
    _ask(f"Deploy {contract_name}")

    if ZERO_ADDRESS in resolved_params.values():
        _ask("Zero Address detected for deployment parameter; Continue")


def _describe_call(
    contract_name: str, address: str, method_name: str, named_args: OrderedDict
) -> str:
    """One line naming the call, then one `name=value` line per argument."""
    title = f"Transacting {contract_name}[{address[:10]}].{method_name}"
    if not named_args:
        return f"{title} with no arguments"
    pretty_args = "\n\t".join(f"{name}={value}" for name, value in named_args.items())
    return f"{title} with arguments:\n\t{pretty_args}"
