import json
from collections import OrderedDict
from pathlib import Path
from typing import Dict, List, Tuple

from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address

from legend_deploy.constants import PROXY_ADDRESS_KEYS, TOKEN_ADDRESS_KEY_SUFFIX
from legend_deploy.events import DeployedProxies
from legend_deploy.utils import _load_json

ContractName = str
AddressMap = Dict[ContractName, ChecksumAddress]

STANDARD_ADDRESSES_JSON_FORMAT = {"indent": 4, "separators": (",", ": ")}


def token_address_key(symbol: str) -> ContractName:
    return f"{symbol}{TOKEN_ADDRESS_KEY_SUFFIX}"


def build_address_map(
    proxies: DeployedProxies, tokens: List[Tuple[str, ChecksumAddress]]
) -> AddressMap:
    """
    Builds the name -> address map of a deployment from the decoded
    DeployFactory event and the (symbol, address) pairs of the deployed tokens.
    """
    addresses = OrderedDict()
    for name, address in zip(PROXY_ADDRESS_KEYS, proxies):
        addresses[name] = to_checksum_address(address)
    for symbol, address in tokens:
        key = token_address_key(symbol)
        if key in addresses:
            raise ValueError(f"Duplicate address map entry '{key}'.")
        addresses[key] = to_checksum_address(address)
    return addresses


def write_addresses(addresses: AddressMap, filepath: Path) -> Path:
    """Writes an address map to a JSON file, replacing any existing content."""
    if not addresses:
        raise ValueError("No addresses provided.")

    # Create the parent directory if it does not exist
    filepath.parent.mkdir(parents=True, exist_ok=True)
    if filepath.exists():
        print(f"Overwriting existing addresses at {filepath}.")

    with open(filepath, "w") as file:
        json.dump(addresses, file, **STANDARD_ADDRESSES_JSON_FORMAT)

    return filepath


def read_addresses(filepath: Path) -> AddressMap:
    data = _load_json(filepath)
    addresses = OrderedDict()
    for name, address in data.items():
        addresses[name] = to_checksum_address(address)
    return addresses
