"""Upload verified-build metadata to the registry program."""

from __future__ import annotations

from typing import Callable, Sequence

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import ID as SYSTEM_PROGRAM_ID

from . import __version__
from .accounts import candidate_pdas, registry_program_id
from .config import UserConfig
from .params import InputParams, OperationKind, create_ix_data
from .util import prompt_user_input


def build_input_params(git_url: str, commit: str | None, args: Sequence[str]) -> InputParams:
    return InputParams(
        version=__version__,
        git_url=git_url,
        commit=commit or "",
        args=tuple(args),
    )


def build_instruction(
    kind: OperationKind,
    params: InputParams | None,
    pda_account: Pubkey,
    signer_pubkey: Pubkey,
    program_address: Pubkey,
) -> Instruction:
    metas = [
        AccountMeta(pda_account, False, True),
        AccountMeta(signer_pubkey, True, False),
        AccountMeta(program_address, False, False),
        AccountMeta(SYSTEM_PROGRAM_ID, False, False),
    ]
    return Instruction(registry_program_id(), create_ix_data(kind, params), metas)


def process_registry_ix(
    params: InputParams | None,
    pda_account: Pubkey,
    program_address: Pubkey,
    kind: OperationKind,
    user_config: UserConfig,
) -> Signature:
    signer = user_config.signer
    ix = build_instruction(kind, params, pda_account, signer.pubkey(), program_address)
    sig = user_config.client.send_instruction(ix, signer)
    print(f"Program uploaded successfully. Transaction ID: {sig}")
    return sig


def upload_program(
    params: InputParams,
    program_address: Pubkey,
    user_config: UserConfig,
    confirm: Callable[[str], bool] = prompt_user_input,
) -> Signature | None:
    """Initialize or update the registry entry for ``program_address``.

    The entry owned by the local signer is updated when it exists. When only the
    OtterSec signer's entry exists the user is asked before a new entry is
    created; declining is not an error and nothing is sent.
    """
    pdas = candidate_pdas(user_config.signer.pubkey(), program_address)
    client = user_config.client

    if client.account_exists(pdas.current):
        print("Program already uploaded by the current signer. Updating the program.")
        return process_registry_ix(
            params, pdas.current, program_address, OperationKind.UPDATE, user_config
        )

    if client.account_exists(pdas.alternate):
        if not confirm(
            "Program already uploaded by another signer. Do you want to upload a new program? (Y/n) "
        ):
            return None
        return process_registry_ix(
            params, pdas.current, program_address, OperationKind.INITIALIZE, user_config
        )

    return process_registry_ix(
        params, pdas.current, program_address, OperationKind.INITIALIZE, user_config
    )


def close_program(program_address: Pubkey, user_config: UserConfig) -> Signature:
    """Close the local signer's registry entry for ``program_address``."""
    pdas = candidate_pdas(user_config.signer.pubkey(), program_address)
    if not user_config.client.account_exists(pdas.current):
        raise ValueError(
            f"No registry entry for {program_address} owned by {user_config.signer.pubkey()}"
        )
    signer = user_config.signer
    ix = build_instruction(OperationKind.CLOSE, None, pdas.current, signer.pubkey(), program_address)
    sig = user_config.client.send_instruction(ix, signer)
    print(f"Registry entry closed. Transaction ID: {sig}")
    return sig
