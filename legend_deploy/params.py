import typing
from collections import OrderedDict
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional

from ape import networks
from ape.api import AccountAPI, ReceiptAPI
from ape.cli.choices import select_account
from ape.contracts.base import ContractContainer, ContractInstance, ContractTransactionHandler
from hexbytes import HexBytes
from web3 import Web3

from legend_deploy import constants
from legend_deploy.confirm import _confirm_resolution, _continue, _describe_call
from legend_deploy.utils import _load_yaml, check_plugins, validate_chain_id

w3 = Web3()

MAX_UINT16 = 2**16 - 1


class TokenParameters(NamedTuple):
    name: str
    symbol: str


def _check_uint(name: str, value: Any, max_value: Optional[int] = None) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise LegendParameters.Invalid(f"'{name}' must be a non-negative integer, got {value!r}.")
    if max_value is not None and value > max_value:
        raise LegendParameters.Invalid(f"'{name}' must be at most {max_value}, got {value}.")


def validate_parameters(params: "LegendParameters") -> None:
    """Validates the constructor literals of a deployment."""
    _check_uint("total_supply", params.total_supply)
    _check_uint("listing_fee", params.listing_fee)
    _check_uint("listing_cap", params.listing_cap, max_value=MAX_UINT16)

    if len(params.genesis_account_root) != 32:
        raise LegendParameters.Invalid(
            f"'genesis_account_root' must be 32 bytes, got {len(params.genesis_account_root)}."
        )

    base_domain = params.base_domain
    if not isinstance(base_domain, str) or not base_domain or "." in base_domain:
        raise LegendParameters.Invalid(
            f"'base_domain' must be a single, non-empty label, got {params.base_domain!r}."
        )

    if not isinstance(params.rent_prices, list):
        raise LegendParameters.Invalid("'rent_prices' must be a list of integers.")
    for price in params.rent_prices:
        _check_uint("rent_prices", price)

    if not params.tokens:
        raise LegendParameters.Invalid("At least one token is required.")
    symbols = [token.symbol for token in params.tokens]
    duplicates = {symbol for symbol in symbols if symbols.count(symbol) > 1}
    if duplicates:
        duplicates = ", ".join(sorted(duplicates))
        raise LegendParameters.Invalid(f"Duplicate token symbol(s): {duplicates}.")


class LegendParameters:
    """
    Constructor literals and output location of a Zecrey Legend deployment.
    Defaults reproduce the mainline deployment.
    """

    class Invalid(Exception):
        """Raised when the deployment parameters are invalid"""

    # constants section of the params file -> attribute
    CONSTANTS = OrderedDict(
        TOTAL_SUPPLY="total_supply",
        GENESIS_ACCOUNT_ROOT="genesis_account_root",
        LISTING_FEE="listing_fee",
        LISTING_CAP="listing_cap",
        BASE_DOMAIN="base_domain",
        RENT_PRICES="rent_prices",
    )

    def __init__(
        self,
        total_supply: int = constants.TOTAL_SUPPLY,
        tokens: Optional[List[TokenParameters]] = None,
        genesis_account_root: typing.Union[str, bytes] = constants.GENESIS_ACCOUNT_ROOT,
        listing_fee: int = constants.LISTING_FEE,
        listing_cap: int = constants.LISTING_CAP,
        base_domain: str = constants.BASE_DOMAIN,
        rent_prices: Optional[List[int]] = None,
        addresses_filepath: Optional[Path] = None,
        chain_id: Optional[int] = None,
    ):
        if tokens is None:
            tokens = [TokenParameters(*token) for token in constants.TOKENS]
        if rent_prices is None:
            rent_prices = list(constants.RENT_PRICES)
        if addresses_filepath is None:
            addresses_filepath = constants.ADDRESSES_DIR / constants.ADDRESSES_FILENAME

        try:
            self.genesis_account_root = HexBytes(genesis_account_root)
        except (TypeError, ValueError):
            raise self.Invalid(f"'genesis_account_root' is not hex: {genesis_account_root!r}.")

        self.total_supply = total_supply
        self.tokens = list(tokens)
        self.listing_fee = listing_fee
        self.listing_cap = listing_cap
        self.base_domain = base_domain
        self.rent_prices = rent_prices
        self.addresses_filepath = Path(addresses_filepath)
        self.chain_id = chain_id

        validate_parameters(self)

    @property
    def listing_token(self) -> TokenParameters:
        return self.tokens[0]

    @classmethod
    def _section(cls, config: Dict, name: str, expected_type: type) -> Any:
        value = config.get(name)
        if value is None:
            return expected_type()
        if not isinstance(value, expected_type):
            raise cls.Invalid(
                f"'{name}' section of params file must be a {expected_type.__name__}, "
                f"got {type(value).__name__}."
            )
        return value

    @classmethod
    def from_config(cls, config: Optional[Dict]) -> "LegendParameters":
        """Loads the parameters from a params config; missing entries use defaults."""
        print("Processing deployment parameters...")
        if config is None:
            config = dict()
        if not isinstance(config, dict):
            raise cls.Invalid("Params file must contain a mapping of sections.")
        kwargs = dict()

        deployment = cls._section(config, "deployment", dict)
        if deployment.get("chain_id") is not None:
            try:
                kwargs["chain_id"] = int(deployment["chain_id"])
            except (TypeError, ValueError):
                raise cls.Invalid(f"'chain_id' must be an integer, got {deployment['chain_id']!r}.")

        artifacts = cls._section(config, "artifacts", dict)
        if artifacts:
            artifacts_dir = Path(artifacts.get("dir", constants.ADDRESSES_DIR))
            filename = artifacts.get("filename", constants.ADDRESSES_FILENAME)
            kwargs["addresses_filepath"] = artifacts_dir / filename

        for name, value in cls._section(config, "constants", dict).items():
            try:
                kwargs[cls.CONSTANTS[name]] = value
            except KeyError:
                raise cls.Invalid(f"Unknown constant '{name}' in params file.")

        if "tokens" in config:
            tokens = list()
            for token in cls._section(config, "tokens", list):
                if not isinstance(token, dict) or set(token) != {"name", "symbol"}:
                    raise cls.Invalid(f"Malformed token entry {token!r}; expected name and symbol.")
                tokens.append(TokenParameters(name=token["name"], symbol=token["symbol"]))
            kwargs["tokens"] = tokens

        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, filepath: Path) -> "LegendParameters":
        return cls.from_config(_load_yaml(filepath))


def _validate_args(abi_inputs: typing.Sequence[Any], args: typing.Sequence[Any]) -> OrderedDict:
    """
    Returns the arguments keyed by ABI input name,
    or raises ValueError if they do not fit the ABI inputs.
    """
    if len(abi_inputs) != len(args):
        raise ValueError(f"Expected {len(abi_inputs)} argument(s), got {len(args)}.")
    named_args = OrderedDict()
    for position, (abi_input, arg) in enumerate(zip(abi_inputs, args)):
        if not w3.is_encodable(abi_input.type, arg):
            raise ValueError(
                f"Argument '{abi_input.name}' at position {position} has a value '{arg}' "
                f"whose type does not match expected ABI type '{abi_input.type}'"
            )
        named_args[abi_input.name or f"arg{position}"] = arg
    return named_args


def _match_overload(
    method_abis: List[Any], args: typing.Sequence[Any]
) -> typing.Tuple[Any, OrderedDict]:
    """
    Picks the first overload of a method accepting the arguments.
    Returns it along with the arguments keyed by input name.
    """
    if not method_abis:
        raise ValueError("No method abis provided for validation of args")

    mismatches = list()
    for abi in method_abis:
        try:
            return abi, _validate_args(abi.inputs, args)
        except ValueError as e:
            mismatches.append(f"{abi.name}({', '.join(i.type for i in abi.inputs)}): {e}")
    reasons = "\n\t".join(mismatches)
    raise ValueError(
        f"Could not find ABI for '{method_abis[0].name}' with {len(args)} arg(s) "
        f"and given type(s):\n\t{reasons}"
    )


def _validate_constructor_args(
    contract_name: str, abi_inputs: List[Any], args: typing.Sequence[Any]
) -> OrderedDict:
    try:
        return _validate_args(abi_inputs, args)
    except ValueError as e:
        raise ValueError(f"Invalid {contract_name} constructor arguments: {e}")


class Transactor:
    """
    An ape account sending ABI-checked transactions, announcing each one
    and, unless autosigning, asking before it is signed.
    """

    def __init__(self, account: Optional[AccountAPI] = None, autosign: bool = False):
        self._account = select_account() if account is None else account
        self._autosign = autosign
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
        self._account.set_autosign(autosign)

    def get_account(self) -> AccountAPI:
        """Returns the transactor account."""
        return self._account

    def transact(self, method: ContractTransactionHandler, *args) -> ReceiptAPI:
        """Sends a transaction and returns its receipt once mined."""
        abi, named_args = _match_overload(method.abis, args)
        contract = method.contract
        description = _describe_call(
            contract.contract_type.name, contract.address, abi.name, named_args
        )
        print(f"\n{description}")
        if not self._autosign:
            _continue()
        return method(*args, sender=self._account)


class Deployer(Transactor):
    """
    Represents an ape account plus the parameters of a
    Zecrey Legend deployment, plus validated/annotated execution.
    """

    def __init__(
        self,
        params: LegendParameters,
        path: Optional[Path] = None,
        verify: bool = False,
        account: Optional[AccountAPI] = None,
        autosign: bool = False,
    ):
        super().__init__(account, autosign)

        check_plugins(verify=verify)
        validate_chain_id(params.chain_id)
        self.params = params
        self.path = path
        self.verify = verify
        self._print_deployment_info()

        if not self._autosign:
            # Confirms the start of the deployment.
            _continue()

    @classmethod
    def from_yaml(cls, filepath: Path, *args, **kwargs) -> "Deployer":
        params = LegendParameters.from_yaml(filepath)
        return cls(params, filepath, *args, **kwargs)

    def deploy(self, container: ContractContainer, *args) -> ContractInstance:
        """Deploys a contract and returns the instance once its address is assigned."""
        contract_name = container.contract_type.name
        resolved_params = _validate_constructor_args(
            contract_name=contract_name,
            abi_inputs=container.constructor.abi.inputs,
            args=args,
        )
        if not self._autosign:
            _confirm_resolution(resolved_params, contract_name)
        return self._account.deploy(container, *args, publish=self.verify)

    def _print_deployment_info(self):
        print(
            f"Account: {self.get_account().address}",
            f"Config: {self.path}",
            f"Addresses: {self.params.addresses_filepath}",
            f"Verify: {self.verify}",
            f"Ecosystem: {networks.provider.network.ecosystem.name}",
            f"Network: {networks.provider.network.name}",
            f"Chain ID: {networks.provider.network.chain_id}",
            f"Gas Price: {networks.provider.gas_price}",
            sep="\n",
        )
