from pathlib import Path

from ape.utils import EMPTY_BYTES32

from legend_deploy.addresses import AddressMap, build_address_map, write_addresses
from legend_deploy.events import decode_addresses_event
from legend_deploy.factories import ContractFactories, get_contract_factories
from legend_deploy.naming import labelhash, namehash
from legend_deploy.params import LegendParameters


def deploy_legend(deployer, factories: ContractFactories, params: LegendParameters) -> AddressMap:
    """
    Deploys the Zecrey Legend contracts in dependency order, wires them
    through DeployFactory and returns the name -> address map of the deployment.

    `deployer` deploys containers and sends transactions on behalf of
    the owner account, waiting for each one to be mined.
    """
    owner = deployer.get_account()
    governor = owner.address

    # Step 1: deploy zns registry
    print("Deploy ZNS registry...")
    zns_registry = deployer.deploy(factories.zns_registry)

    # Step 2: deploy contracts to be proxied by DeployFactory
    print("Deploy Governance...")
    governance = deployer.deploy(factories.governance)
    print("Deploy Verifier...")
    verifier = deployer.deploy(factories.verifier)
    print("Deploy ZecreyLegend...")
    zecrey_legend = deployer.deploy(factories.zecrey_legend)
    print("Deploy ZNSController...")
    zns_controller = deployer.deploy(factories.zns_controller)
    print("Deploy ZNSResolver...")
    zns_resolver = deployer.deploy(factories.zns_resolver)

    # Step 3: deploy DeployFactory and finish the deployment
    print("Deploy PriceOracle...")
    price_oracle = deployer.deploy(factories.zns_price_oracle, list(params.rent_prices))

    print("Deploy Tokens...")
    tokens = list()
    for token in params.tokens:
        instance = deployer.deploy(factories.token, params.total_supply, token.name, token.symbol)
        tokens.append((token.symbol, instance))
    listing_token = dict(tokens)[params.listing_token.symbol]

    base_node = namehash(params.base_domain)
    print("Deploy DeployFactory...")
    deploy_factory = deployer.deploy(
        factories.deploy_factory,
        governance.address,
        verifier.address,
        zecrey_legend.address,
        zns_controller.address,
        zns_resolver.address,
        params.genesis_account_root,
        verifier.address,
        governor,
        listing_token.address,
        params.listing_fee,
        params.listing_cap,
        zns_registry.address,
        price_oracle.address,
        base_node,
    )

    # proxies and the gatekeeper are created inside the DeployFactory constructor
    receipt = deploy_factory.receipt
    receipt.await_confirmations()
    proxies = decode_addresses_event(receipt, emitter=deploy_factory.address)

    asset_governance = factories.asset_governance.at(proxies.asset_governance)
    print("Add tokens into assetGovernance asset list...")
    for _, token in tokens:
        deployer.transact(asset_governance.addAsset, token.address)

    # Step 4: register zns base node
    print("Register ZNS base node...")
    deployer.transact(
        zns_registry.setSubnodeOwner,
        namehash(""),
        labelhash(params.base_domain),
        proxies.zns_controller,
        EMPTY_BYTES32,
    )

    return build_address_map(
        proxies=proxies,
        tokens=[(symbol, token.address) for symbol, token in tokens],
    )


def run(deployer, params: LegendParameters) -> Path:
    """
    Runs a complete deployment and saves its addresses.
    Nothing is written unless every step succeeds.
    """
    factories = get_contract_factories(deployer)
    addresses = deploy_legend(deployer=deployer, factories=factories, params=params)
    print("Save deployed contract addresses...")
    return write_addresses(addresses=addresses, filepath=params.addresses_filepath)
