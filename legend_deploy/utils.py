import json
import os
from pathlib import Path

import yaml
from ape import networks, project
from ape.api.networks import LOCAL_NETWORK_NAME
from ape.contracts import ContractContainer

from legend_deploy.exceptions import PluginNotInstalled


def _load_yaml(filepath: Path) -> dict:
    """Loads a YAML file."""
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def _load_json(filepath: Path) -> dict:
    """Loads a JSON file."""
    with open(filepath, "r") as file:
        return json.load(file)


def is_local_network() -> bool:
    return networks.provider.network.name == LOCAL_NETWORK_NAME


def validate_chain_id(chain_id) -> None:
    """
    Checks that the chain_id of the params file, when set,
    matches the chain of the connected provider.
    """
    if chain_id is None:
        return
    provider_chain_id = networks.provider.network.chain_id
    if int(chain_id) != provider_chain_id and not is_local_network():
        raise ValueError(
            f"chain_id in params file ({chain_id}) does not match "
            f"chain_id of current network ({provider_chain_id})."
        )


def check_solidity_plugin() -> None:
    """Checks that the ape-solidity plugin, needed for library linking, is installed."""
    try:
        import ape_solidity  # noqa: F401
    except ImportError:
        raise PluginNotInstalled("Please install the ape-solidity plugin to use this script.")


def check_etherscan_plugin() -> None:
    """
    Checks that the ape-etherscan plugin is installed and that
    the explorer API key environment variable is set.
    """
    if is_local_network():
        # unnecessary for local deployment
        return
    try:
        import ape_etherscan  # noqa: F401
    except ImportError:
        raise PluginNotInstalled("Please install the ape-etherscan plugin to use this script.")
    from ape_etherscan.utils import API_KEY_ENV_KEY_MAP

    ecosystem_name = networks.provider.network.ecosystem.name
    explorer_envvar = API_KEY_ENV_KEY_MAP.get(ecosystem_name)
    if not explorer_envvar:
        raise ValueError(f"No block explorer API key is known for the {ecosystem_name} ecosystem.")
    if not os.environ.get(explorer_envvar):
        raise ValueError(f"{explorer_envvar} is not set.")


def check_plugins(verify: bool) -> None:
    print("Checking plugins...")
    check_solidity_plugin()
    if verify:
        check_etherscan_plugin()


def _get_dependency_contract_container(contract: str) -> ContractContainer:
    for dependency_name, dependency_versions in project.dependencies.items():
        if len(dependency_versions) > 1:
            raise ValueError(f"Ambiguous {dependency_name} dependency for {contract}")
        try:
            dependency_api = list(dependency_versions.values())[0]
            contract_container = getattr(dependency_api, contract)
            return contract_container
        except AttributeError:
            continue
    raise ValueError(f"No contract found with name '{contract}'.")


def get_contract_container(contract: str) -> ContractContainer:
    try:
        contract_container = getattr(project, contract)
    except AttributeError:
        # not in root project; check dependencies
        contract_container = _get_dependency_contract_container(contract)

    return contract_container
