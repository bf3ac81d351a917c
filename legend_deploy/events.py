from typing import Any, Dict, List, NamedTuple, Optional

from eth_abi import decode
from eth_typing import ChecksumAddress
from eth_utils import is_same_address, to_checksum_address
from hexbytes import HexBytes
from web3 import Web3

from legend_deploy.constants import ADDRESSES_EVENT_INPUTS, ADDRESSES_EVENT_NAME
from legend_deploy.exceptions import AmbiguousEventError, EventNotFoundError


class DeployedProxies(NamedTuple):
    """
    Addresses carried by the DeployFactory 'Addresses' event, in emission order.
    """

    governance: ChecksumAddress
    asset_governance: ChecksumAddress
    verifier: ChecksumAddress
    zns_controller: ChecksumAddress
    zns_resolver: ChecksumAddress
    zecrey_legend: ChecksumAddress
    gatekeeper: ChecksumAddress


ADDRESSES_EVENT_ABI = {
    "type": "event",
    "name": ADDRESSES_EVENT_NAME,
    "anonymous": False,
    "inputs": [
        {"name": name, "type": "address", "indexed": False} for name in ADDRESSES_EVENT_INPUTS
    ],
}


def event_signature(event_abi: Dict[str, Any]) -> str:
    input_types = ",".join(i["type"] for i in event_abi["inputs"])
    return f"{event_abi['name']}({input_types})"


def event_topic(event_abi: Dict[str, Any]) -> HexBytes:
    return HexBytes(Web3.keccak(text=event_signature(event_abi)))


ADDRESSES_EVENT_TOPIC = event_topic(ADDRESSES_EVENT_ABI)


def _matches(log: Dict[str, Any], topic: HexBytes, emitter: Optional[str]) -> bool:
    topics = log.get("topics") or []
    if not topics or HexBytes(topics[0]) != topic:
        return False
    if emitter is not None and "address" in log:
        return is_same_address(log["address"], emitter)
    return True


def find_event_log(
    logs: List[Dict[str, Any]], event_abi: Dict[str, Any], emitter: Optional[str] = None
) -> Dict[str, Any]:
    """
    Returns the single log matching the event signature
    (and emitted by `emitter`, when given).
    """
    topic = event_topic(event_abi)
    matching = [log for log in logs if _matches(log, topic, emitter)]
    if not matching:
        raise EventNotFoundError(
            f"No '{event_signature(event_abi)}' log found among {len(logs)} receipt log(s)."
        )
    if len(matching) > 1:
        raise AmbiguousEventError(
            f"Expected exactly one '{event_signature(event_abi)}' log, got {len(matching)}."
        )
    return matching[0]


def decode_addresses_event(receipt, emitter: Optional[str] = None) -> DeployedProxies:
    """Decodes the DeployFactory 'Addresses' event from a deployment receipt."""
    log = find_event_log(logs=receipt.logs, event_abi=ADDRESSES_EVENT_ABI, emitter=emitter)
    types = [i["type"] for i in ADDRESSES_EVENT_ABI["inputs"]]
    values = decode(types, HexBytes(log["data"]))
    return DeployedProxies(*(to_checksum_address(value) for value in values))
