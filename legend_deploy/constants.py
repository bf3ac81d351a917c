from pathlib import Path

from web3 import Web3

import legend_deploy

#
# Filesystem
#

DEPLOYMENT_DIR = Path(legend_deploy.__file__).parent
CONSTRUCTOR_PARAMS_DIR = DEPLOYMENT_DIR / "constructor_params"
DEFAULT_PARAMS_FILEPATH = CONSTRUCTOR_PARAMS_DIR / "legend.yml"

ADDRESSES_DIR = Path("info")
ADDRESSES_FILENAME = "addresses.json"

#
# Contracts
#

UTILS_LIBRARY = "Utils"
TOKEN_CONTRACT = "ZecreyRelatedERC20"
ZNS_REGISTRY = "ZNSRegistry"
ZNS_RESOLVER = "PublicResolver"
ZNS_PRICE_ORACLE = "StablePriceOracle"
ZNS_CONTROLLER = "ZNSController"
GOVERNANCE = "Governance"
ASSET_GOVERNANCE = "AssetGovernance"
VERIFIER = "ZecreyVerifier"
ZECREY_LEGEND = "ZecreyLegend"
DEPLOY_FACTORY = "DeployFactory"

#
# Default constructor parameters
#

TOTAL_SUPPLY = Web3.to_wei(100_000_000, "ether")
GENESIS_ACCOUNT_ROOT = "0x01ef55cdf3b9b0d65e6fb6317f79627534d971fd96c811281af618c0028d5e7a"
LISTING_FEE = Web3.to_wei(100, "ether")
LISTING_CAP = 2**16 - 1
BASE_DOMAIN = "legend"
RENT_PRICES = [0, 1, 2]

# (name, symbol) in deployment order; the first one is the listing token
TOKENS = [("LEG", "LEG"), ("REY", "REY")]

#
# Addresses event emitted by DeployFactory
#

ADDRESSES_EVENT_NAME = "Addresses"
ADDRESSES_EVENT_INPUTS = [
    "governance",
    "assetGovernance",
    "verifier",
    "znsController",
    "znsResolver",
    "zecreyLegend",
    "gatekeeper",
]

#
# Address map keys, in output order
#

PROXY_ADDRESS_KEYS = [
    "governance",
    "assetGovernance",
    "verifierProxy",
    "znsControllerProxy",
    "znsResolverProxy",
    "zecreyLegendProxy",
    "upgradeGateKeeper",
]
TOKEN_ADDRESS_KEY_SUFFIX = "Token"
