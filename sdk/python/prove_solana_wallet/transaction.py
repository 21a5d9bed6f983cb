from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, List, Optional, Union

from solders.hash import Hash
from solders.instruction import AccountMeta, CompiledInstruction, Instruction
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID
from solders.system_program import TransferParams, decode_transfer, transfer
from solders.transaction import Transaction

from .config import DEFAULT_CONFIG, Config
from .errors import (
    ConfigurationError,
    ExpiredProofError,
    InvalidProofStructureError,
    MalformedEvidenceError,
    NetworkError,
    ReplayError,
    SignatureError,
    SigningError,
)
from .gateway import LedgerGateway, open_gateway
from .keys import ExternalKey, KeyMaterial, OwnedKey, SignCallback, as_pubkey, default_signer, verify_detached

logger = logging.getLogger(__name__)


async def make_transaction(gateway: LedgerGateway, from_pubkey: Pubkey, to_pubkey: Pubkey, amount: int) -> Transaction:
    instruction = transfer(TransferParams(from_pubkey=from_pubkey, to_pubkey=to_pubkey, lamports=amount))
    anchor = await gateway.fetch_anchor()
    try:
        blockhash = Hash.from_string(anchor)
    except Exception as exc:
        raise NetworkError(f"gateway returned an invalid blockhash: {anchor!r}") from exc
    message = Message.new_with_blockhash([instruction], from_pubkey, blockhash)
    return Transaction.new_unsigned(message)


async def prove_transaction(key: KeyMaterial, signer: Optional[SignCallback] = None, config: Config = DEFAULT_CONFIG) -> bytes:
    if isinstance(key, OwnedKey):
        if signer is not None:
            raise ConfigurationError("Provide a keypair or a signer, not both")
        sign = default_signer(key)
    elif isinstance(key, ExternalKey):
        if signer is None:
            raise ConfigurationError("Provide either a keypair or a signer")
        sign = signer
    else:
        raise ConfigurationError("key must be an OwnedKey or an ExternalKey")

    public_key = key.public_key
    async with open_gateway(config) as gateway:
        transaction = await make_transaction(gateway, public_key, public_key, 0)
    signed = await sign(transaction)
    if signed is None:
        raise SigningError("signer returned no transaction")
    logger.debug("built transaction proof for %s", public_key)
    return bytes(signed)


def decode_evidence(evidence: bytes) -> Transaction:
    if not isinstance(evidence, (bytes, bytearray, memoryview)):
        raise MalformedEvidenceError("evidence must be bytes")
    try:
        return Transaction.from_bytes(bytes(evidence))
    except Exception as exc:
        raise MalformedEvidenceError(f"evidence is not a serialized transaction: {exc}") from exc


def check_signatures(transaction: Transaction, public_key: Pubkey) -> None:
    message = transaction.message
    required = message.header.num_required_signatures
    signers = list(message.account_keys)[:required]
    signatures = list(transaction.signatures)
    if required == 0 or len(signers) != required or len(signatures) != required:
        # some expected signature is missing
        raise SignatureError("Signatures not verified")
    message_bytes = bytes(message)
    for signer, signature in zip(signers, signatures):
        if not verify_detached(message_bytes, bytes(signature), bytes(signer)):
            raise SignatureError(f"Signatures not verified: bad signature for {signer}")
    if public_key not in signers:
        raise SignatureError(f"Missing signature for {public_key}")


def _account_meta(message: Message, keys: List[Pubkey], index: int) -> AccountMeta:
    header = message.header
    signed = header.num_required_signatures
    if index < signed:
        writable = index < signed - header.num_readonly_signed_accounts
    else:
        writable = index < len(keys) - header.num_readonly_unsigned_accounts
    return AccountMeta(keys[index], index < signed, writable)


def _decode_transfer(message: Message, compiled: CompiledInstruction) -> TransferParams:
    reason = InvalidProofStructureError.REASON_NOT_A_TRANSFER
    text = "Invalid instruction. The transaction must contain a Transfer instruction"
    keys = list(message.account_keys)
    try:
        program_id = keys[compiled.program_id_index]
        accounts = [_account_meta(message, keys, index) for index in compiled.accounts]
    except IndexError as exc:
        raise InvalidProofStructureError(reason, text) from exc
    if program_id != SYSTEM_PROGRAM_ID or len(accounts) < 2:
        raise InvalidProofStructureError(reason, text)
    try:
        return decode_transfer(Instruction(program_id, bytes(compiled.data), accounts))
    except Exception as exc:
        logger.debug("instruction is not a system transfer: %s", exc)
        raise InvalidProofStructureError(reason, text) from exc


def check_transaction_parameters(transaction: Transaction) -> None:
    message = transaction.message
    instructions = list(message.instructions)
    if len(instructions) != 1:
        raise InvalidProofStructureError(
            InvalidProofStructureError.REASON_INSTRUCTION_COUNT,
            "Incorrect instruction count. The transaction must contain only one Transfer instruction",
        )

    params = _decode_transfer(message, instructions[0])
    if params["from_pubkey"] != params["to_pubkey"]:
        raise InvalidProofStructureError(InvalidProofStructureError.REASON_NOT_SELF_TO_SELF, "The transaction must be self-to-self")
    if params["lamports"] != 0:
        raise InvalidProofStructureError(InvalidProofStructureError.REASON_NONZERO_AMOUNT, "The transaction must have zero value")


def check_static(evidence: bytes, public_key: Union[Pubkey, str]) -> Transaction:
    transaction = decode_evidence(evidence)
    check_signatures(transaction, as_pubkey(public_key))
    check_transaction_parameters(transaction)
    return transaction


async def check_transaction_not_broadcast(gateway: LedgerGateway, transaction: Transaction) -> None:
    signatures = list(transaction.signatures)
    if not signatures:
        raise SignatureError("Transaction has no signature")
    if await gateway.lookup_transaction(str(signatures[0])):
        raise ReplayError("Transaction was broadcast!")


async def check_recent_block(gateway: LedgerGateway, transaction: Transaction) -> None:
    blockhash = transaction.message.recent_blockhash
    if blockhash == Hash.default():
        raise ExpiredProofError("Transaction has no recent blockhash!")
    # the age of the block is not checked, only that the ledger still knows it
    if not await gateway.lookup_anchor(str(blockhash)):
        raise ExpiredProofError("Block was not found")


async def _join_checks(checks: List[Awaitable[None]]) -> None:
    # every check runs to completion before the gateway is released; the first failure to complete is raised
    tasks = [asyncio.ensure_future(check) for check in checks]
    first_failure: Optional[Exception] = None
    try:
        for finished in asyncio.as_completed(tasks):
            try:
                await finished
            except Exception as exc:
                if first_failure is None:
                    first_failure = exc
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
    if first_failure is not None:
        raise first_failure


async def verify_transaction(evidence: bytes, public_key: Union[Pubkey, str], config: Config = DEFAULT_CONFIG) -> None:
    transaction = check_static(evidence, public_key)
    if not (config.broadcast_check or config.recent_block_check):
        logger.debug("liveness checks disabled, accepting proof on static checks only")
        return

    async with open_gateway(config) as gateway:
        checks = []
        if config.broadcast_check:
            checks.append(check_transaction_not_broadcast(gateway, transaction))
        if config.recent_block_check:
            checks.append(check_recent_block(gateway, transaction))
        await _join_checks(checks)
