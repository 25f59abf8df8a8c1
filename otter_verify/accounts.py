"""Registry account derivation."""

from __future__ import annotations

from dataclasses import dataclass

from solders.pubkey import Pubkey

from .constants import ALTERNATE_SIGNER, PDA_SEED_TAG, REGISTRY_PROGRAM_ID


def parse_pubkey(value: str | Pubkey, name: str) -> Pubkey:
    if isinstance(value, Pubkey):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a base58 public key")
    try:
        return Pubkey.from_string(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} is not a valid public key: {value}") from exc


def registry_program_id() -> Pubkey:
    return Pubkey.from_string(REGISTRY_PROGRAM_ID)


def alternate_signer() -> Pubkey:
    return Pubkey.from_string(ALTERNATE_SIGNER)


def pda_seeds(signer: Pubkey, program_address: Pubkey) -> list[bytes]:
    return [PDA_SEED_TAG, bytes(signer), bytes(program_address)]


def derive_pda(
    signer: Pubkey,
    program_address: Pubkey,
    registry_program: Pubkey | None = None,
) -> tuple[Pubkey, int]:
    """Return the registry PDA and bump for (signer, program_address)."""
    program_id = registry_program if registry_program is not None else registry_program_id()
    return Pubkey.find_program_address(pda_seeds(signer, program_address), program_id)


@dataclass(frozen=True)
class CandidatePdas:
    current: Pubkey
    alternate: Pubkey


def candidate_pdas(signer: Pubkey, program_address: Pubkey) -> CandidatePdas:
    current, _ = derive_pda(signer, program_address)
    alternate, _ = derive_pda(alternate_signer(), program_address)
    return CandidatePdas(current=current, alternate=alternate)
