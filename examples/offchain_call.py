"""Example: read a contract that answers through an offchain gateway."""

from __future__ import annotations

import asyncio
import logging
import os

from dotenv import load_dotenv
from eth_account import Account

from ccip_read import CCIPReadProvider, ResolverConfig, Web3ChainClient

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger("offchain_call")


async def main() -> None:
    """Call a lookup-enabled contract, then send a transaction through it."""
    rpc_url = os.getenv("RPC_URL", "http://localhost:8545")
    contract = os.getenv("CONTRACT_ADDRESS")
    call_data = os.getenv("CALL_DATA")
    if not contract or not call_data:
        raise ValueError("CONTRACT_ADDRESS and CALL_DATA must be set")

    config = ResolverConfig.from_env()
    private_key = os.getenv("PRIVATE_KEY")
    account = Account.from_key(private_key) if private_key else None

    client = Web3ChainClient.from_url(
        rpc_url, account=account, request_timeout=config.request_timeout
    )
    provider = CCIPReadProvider(client, config=config)

    network = await provider.detect_network()
    logger.info("Connected to chain %s", network.chain_id)

    result = await provider.call({"to": contract, "data": call_data})
    logger.info("Resolved result: 0x%s", result.hex())

    tx_data = os.getenv("TX_DATA")
    if account is None or not tx_data:
        return

    signer = provider.get_signer()
    tx_hash = await signer.send_transaction({"to": contract, "data": tx_data})
    receipt = await client.web3.eth.wait_for_transaction_receipt(tx_hash)
    logger.info("Transaction %s mined, status=%s", tx_hash.to_0x_hex(), receipt["status"])


if __name__ == "__main__":
    asyncio.run(main())
