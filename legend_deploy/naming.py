from ens import ENS
from ens.utils import label_to_hash
from hexbytes import HexBytes

ROOT_NODE = HexBytes(b"\x00" * 32)


def labelhash(label: str) -> HexBytes:
    """Returns the keccak256 hash of a single, normalized name label."""
    return HexBytes(label_to_hash(label))


def namehash(name: str) -> HexBytes:
    """Returns the ENS namehash of a name; the empty name is the root node."""
    if not name:
        return ROOT_NODE
    return HexBytes(ENS.namehash(name))
