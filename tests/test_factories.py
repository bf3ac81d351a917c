from legend_deploy import factories as factories_module
from legend_deploy.factories import ContractFactories, get_contract_factories

from conftest import FakeContainer


def test_library_linked_before_main_contract(deployer, chain, monkeypatch):
    events = list()

    def lookup(name):
        events.append(("lookup", name))
        return FakeContainer(name)

    def link(library):
        events.append(("link", library.contract_type.name, library.address))

    monkeypatch.setattr(factories_module, "get_contract_container", lookup)
    monkeypatch.setattr(factories_module, "link_library", link)

    factories = get_contract_factories(deployer)

    (utils,) = chain.instances["Utils"]
    link_position = events.index(("link", "Utils", utils.address))
    assert events.index(("lookup", "Utils")) < link_position
    assert events.index(("lookup", "ZecreyLegend")) > link_position
    assert factories.zecrey_legend.contract_type.name == "ZecreyLegend"


def test_all_factories_resolved(deployer, linked_libraries):
    factories = get_contract_factories(deployer)

    assert isinstance(factories, ContractFactories)
    assert [container.contract_type.name for container in factories] == [
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
    ]
    (library,) = linked_libraries
    assert library.contract_type.name == "Utils"


def test_redeployed_library_is_relinked(deployer, linked_libraries):
    get_contract_factories(deployer)
    get_contract_factories(deployer)

    first, second = linked_libraries
    assert first.address != second.address
