"""Chain access for the registry: account probes and transaction submission."""

from __future__ import annotations

from solana.exceptions import SolanaRpcException
from solana.rpc.api import Client
from solana.rpc.core import RPCException, UnconfirmedTxError
from solana.rpc.types import TxOpts
from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.rpc.responses import GetAccountInfoResp
from solders.signature import Signature
from solders.transaction import Transaction

from .constants import DEFAULT_COMMITMENT


class RpcError(RuntimeError):
    """Raised when an RPC call or transaction fails."""


_CLIENT_ERRORS = (SolanaRpcException, RPCException, UnconfirmedTxError)


class RegistryClient:
    def __init__(
        self,
        rpc_url: str,
        commitment: str = DEFAULT_COMMITMENT,
        client: Client | None = None,
    ) -> None:
        self.rpc_url = rpc_url
        self.commitment = commitment
        self._client = client if client is not None else Client(rpc_url, commitment=commitment)

    def account_exists(self, address: Pubkey) -> bool:
        try:
            resp = self._client.get_account_info(address)
        except _CLIENT_ERRORS as exc:
            raise RpcError(f"getAccountInfo failed for {address}: {exc}") from exc
        if not isinstance(resp, GetAccountInfoResp):
            raise RpcError(f"getAccountInfo failed for {address}: {resp}")
        return resp.value is not None

    def latest_blockhash(self) -> Hash:
        try:
            return self._client.get_latest_blockhash().value.blockhash
        except _CLIENT_ERRORS as exc:
            raise RpcError(f"getLatestBlockhash failed: {exc}") from exc

    def send_instruction(self, instruction: Instruction, signer: Keypair) -> Signature:
        """Sign a single-instruction transaction, send it and wait for confirmation."""
        message = Message([instruction], signer.pubkey())
        tx = Transaction.new_unsigned(message)
        tx.sign([signer], self.latest_blockhash())
        try:
            sig = self._client.send_raw_transaction(
                bytes(tx),
                opts=TxOpts(skip_preflight=False, preflight_commitment=self.commitment),
            ).value
            statuses = self._client.confirm_transaction(sig, commitment=self.commitment).value
        except _CLIENT_ERRORS as exc:
            raise RpcError(f"Failed to send transaction to the network: {exc}") from exc
        status = statuses[0] if statuses else None
        if status is not None and status.err is not None:
            raise RpcError(f"Transaction {sig} failed: {status.err}")
        return sig
