from typing import NamedTuple

from ape import compilers
from ape.contracts import ContractContainer, ContractInstance

from legend_deploy.constants import (
    ASSET_GOVERNANCE,
    DEPLOY_FACTORY,
    GOVERNANCE,
    TOKEN_CONTRACT,
    UTILS_LIBRARY,
    VERIFIER,
    ZECREY_LEGEND,
    ZNS_CONTROLLER,
    ZNS_PRICE_ORACLE,
    ZNS_REGISTRY,
    ZNS_RESOLVER,
)
from legend_deploy.utils import get_contract_container


class ContractFactories(NamedTuple):
    """Contract containers used by a Zecrey Legend deployment."""

    token: ContractContainer
    zns_registry: ContractContainer
    zns_resolver: ContractContainer
    zns_price_oracle: ContractContainer
    zns_controller: ContractContainer
    governance: ContractContainer
    asset_governance: ContractContainer
    verifier: ContractContainer
    zecrey_legend: ContractContainer
    deploy_factory: ContractContainer


def link_library(library: ContractInstance) -> None:
    """
    Registers a deployed library with the solidity compiler;
    contracts using it are compiled against its address from now on.
    """
    print(f"Linking {library.contract_type.name} library at {library.address}...")
    compilers.solidity.add_library(library)


def get_contract_factories(deployer) -> ContractFactories:
    """
    Deploys the Utils library and returns all contract containers.
    ZecreyLegend is looked up only after the library is linked, so
    a redeployed library always yields freshly linked bytecode.
    """
    utils = deployer.deploy(get_contract_container(UTILS_LIBRARY))
    link_library(utils)

    return ContractFactories(
        token=get_contract_container(TOKEN_CONTRACT),
        zns_registry=get_contract_container(ZNS_REGISTRY),
        zns_resolver=get_contract_container(ZNS_RESOLVER),
        zns_price_oracle=get_contract_container(ZNS_PRICE_ORACLE),
        zns_controller=get_contract_container(ZNS_CONTROLLER),
        governance=get_contract_container(GOVERNANCE),
        asset_governance=get_contract_container(ASSET_GOVERNANCE),
        verifier=get_contract_container(VERIFIER),
        zecrey_legend=get_contract_container(ZECREY_LEGEND),
        deploy_factory=get_contract_container(DEPLOY_FACTORY),
    )
