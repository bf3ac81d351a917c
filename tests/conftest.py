from types import SimpleNamespace

import pytest
from eth_abi import encode
from eth_utils import keccak, to_checksum_address

from legend_deploy import factories as factories_module
from legend_deploy.constants import DEPLOY_FACTORY
from legend_deploy.events import ADDRESSES_EVENT_TOPIC
from legend_deploy.factories import ContractFactories
from legend_deploy.params import LegendParameters

# logs emitted by DeployFactory before its Addresses event
DEPLOY_FACTORY_LOG_INDEX = 8
FILLER_TOPIC = keccak(text="Upgraded(address)")


class ContractReverted(Exception):
    pass


class FakeReceipt:
    def __init__(self, logs=None):
        self.logs = logs or list()
        self.confirmed = False

    def await_confirmations(self):
        self.confirmed = True
        return self


class FakeMethod:
    def __init__(self, contract, name):
        self.contract = contract
        self.name = name


class FakeInstance:
    def __init__(self, contract_name, address, args=(), receipt=None):
        self.contract_type = SimpleNamespace(name=contract_name)
        self.address = address
        self.args = args
        self.receipt = receipt or FakeReceipt()

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        return FakeMethod(self, name)


class FakeContainer:
    def __init__(self, name):
        self.contract_type = SimpleNamespace(name=name)

    def at(self, address):
        return FakeInstance(self.contract_type.name, address)


class FakeChain:
    """Records deployments and transactions in submission order."""

    def __init__(self):
        self.nonce = 0
        self.history = list()
        self.reverting = set()
        self.emitted = list()
        self.instances = dict()

    def next_address(self):
        self.nonce += 1
        return to_checksum_address(keccak(text=f"contract-{self.nonce}")[-20:])

    def addresses_log(self, emitter):
        proxies = [self.next_address() for _ in range(7)]
        self.emitted.append(proxies)
        filler = [
            {"address": self.next_address(), "topics": [FILLER_TOPIC], "data": b""}
            for _ in range(DEPLOY_FACTORY_LOG_INDEX)
        ]
        event = {
            "address": emitter,
            "topics": [ADDRESSES_EVENT_TOPIC],
            "data": encode(["address"] * 7, proxies),
        }
        return [*filler, event]


class FakeDeployer:
    def __init__(self, chain):
        self.chain = chain
        self.account = SimpleNamespace(address=chain.next_address())

    def get_account(self):
        return self.account

    def deploy(self, container, *args):
        name = container.contract_type.name
        if name in self.chain.reverting:
            raise ContractReverted(f"{name} constructor reverted")
        address = self.chain.next_address()
        logs = self.chain.addresses_log(emitter=address) if name == DEPLOY_FACTORY else None
        self.chain.history.append(("deploy", name, args))
        instance = FakeInstance(name, address, args=args, receipt=FakeReceipt(logs))
        self.chain.instances.setdefault(name, list()).append(instance)
        return instance

    def transact(self, method, *args):
        contract = method.contract
        self.chain.history.append(
            ("transact", contract.contract_type.name, method.name, contract.address, args)
        )
        return FakeReceipt()


def fake_factories():
    return ContractFactories(
        **{
            field: FakeContainer(name)
            for field, name in zip(
                ContractFactories._fields,
                [
                    "ZecreyRelatedERC20",
                    "ZNSRegistry",
                    "PublicResolver",
                    "StablePriceOracle",
                    "ZNSController",
                    "Governance",
                    "AssetGovernance",
                    "ZecreyVerifier",
                    "ZecreyLegend",
                    "DeployFactory",
                ],
            )
        }
    )


@pytest.fixture
def chain():
    return FakeChain()


@pytest.fixture
def deployer(chain):
    return FakeDeployer(chain)


@pytest.fixture
def contract_factories():
    return fake_factories()


@pytest.fixture
def linked_libraries(monkeypatch):
    """Replaces ape project lookups and library linking with fakes."""
    linked = list()
    monkeypatch.setattr(factories_module, "get_contract_container", FakeContainer)
    monkeypatch.setattr(factories_module, "link_library", linked.append)
    return linked


@pytest.fixture
def params(tmp_path):
    return LegendParameters(addresses_filepath=tmp_path / "info" / "addresses.json")
