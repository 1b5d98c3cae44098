"""Constants for the EIP-3668 offchain lookup protocol."""

from web3 import Web3

OFFCHAIN_LOOKUP_SIGNATURE = "OffchainLookup(address,string[],bytes,bytes4,bytes)"

# 0x556f1830
OFFCHAIN_LOOKUP_SELECTOR: bytes = bytes(Web3.keccak(text=OFFCHAIN_LOOKUP_SIGNATURE)[:4])

OFFCHAIN_LOOKUP_TYPES = ["address", "string[]", "bytes", "bytes4", "bytes"]

# callback(bytes result, bytes extraData)
CALLBACK_ARGUMENT_TYPES = ["bytes", "bytes"]

SENDER_PLACEHOLDER = "{sender}"
DATA_PLACEHOLDER = "{data}"

SELECTOR_SIZE = 4
WORD_SIZE = 32

# Key of the gas limit in a web3 transaction dict
GAS_LIMIT_FIELD = "gas"
