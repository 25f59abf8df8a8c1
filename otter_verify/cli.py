"""CLI entrypoint for otter-verify."""

from __future__ import annotations

import argparse
import os
import sys

from . import __version__
from .accounts import candidate_pdas, parse_pubkey
from .config import (
    get_user_config,
    load_keypair,
    load_explicit_config,
    resolve_keypair_path,
    resolve_rpc_url,
    UserConfig,
)
from .constants import CLUSTER_URLS
from .rpc import RegistryClient, RpcError
from .upload import build_input_params, close_program, upload_program
from .util import prompt_user_input


def _user_config_from_args(args: argparse.Namespace) -> UserConfig:
    return get_user_config(
        config_path=args.config,
        keypair=args.keypair,
        rpc_url=args.rpc_url,
        cluster=args.cluster,
    )


def _build_args(args: argparse.Namespace) -> list[str]:
    trailing = list(args.trailing_args or [])
    if trailing[:1] == ["--"]:
        trailing = trailing[1:]
    return list(args.build_args or []) + trailing


def _cmd_upload(args: argparse.Namespace) -> int:
    program_address = parse_pubkey(args.program_id, "--program-id")
    if not args.yes and not prompt_user_input("Do you want to update it to On-Chain Program ?. (Y/n) "):
        print("Exiting without uploading the program.")
        return 0

    print("Uploading the program to the Solana blockchain...")
    params = build_input_params(args.git_url, args.commit, _build_args(args))
    user_config = _user_config_from_args(args)
    upload_program(params, program_address, user_config, confirm=prompt_user_input)
    return 0


def _cmd_close(args: argparse.Namespace) -> int:
    program_address = parse_pubkey(args.program_id, "--program-id")
    if not args.yes and not prompt_user_input(
        f"Close the registry entry for {program_address}? (Y/n) "
    ):
        print("Exiting without closing the registry entry.")
        return 0
    user_config = _user_config_from_args(args)
    close_program(program_address, user_config)
    return 0


def _cmd_pda(args: argparse.Namespace) -> int:
    program_address = parse_pubkey(args.program_id, "--program-id")
    cfg = load_explicit_config(args.config)
    if args.signer:
        signer = parse_pubkey(args.signer, "--signer")
    else:
        signer = load_keypair(resolve_keypair_path(args.keypair, cfg)).pubkey()
    pdas = candidate_pdas(signer, program_address)

    client = None
    if args.check:
        client = RegistryClient(resolve_rpc_url(args.rpc_url, args.cluster, cfg))

    for label, address in (("current", pdas.current), ("otter", pdas.alternate)):
        line = f"{label:<8} {address}"
        if client is not None:
            line += "  exists" if client.account_exists(address) else "  missing"
        print(line)
    return 0


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", "-C", help="Solana CLI config file (default: ~/.config/solana/cli/config.yml)")
    parser.add_argument("--keypair", "-k", help="Signer keypair file (overrides config keypair_path)")
    parser.add_argument("--rpc-url", "-u", help="RPC URL (overrides --cluster and config json_rpc_url)")
    parser.add_argument("--cluster", choices=sorted(CLUSTER_URLS), help="Named cluster RPC URL")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog=os.path.basename(sys.argv[0]))
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_upload = sub.add_parser("upload", help="Upload verified-build metadata to the registry")
    p_upload.add_argument("--program-id", required=True, help="Address of the deployed program")
    p_upload.add_argument("--git-url", required=True, help="Repository the program was built from")
    p_upload.add_argument("--commit", help="Commit hash the program was built from")
    p_upload.add_argument("--yes", "-y", action="store_true", help="Skip the confirmation prompt")
    p_upload.add_argument(
        "--build-args",
        nargs=argparse.REMAINDER,
        help="Arguments the program was built with (must come last)",
    )
    p_upload.add_argument(
        "trailing_args",
        nargs=argparse.REMAINDER,
        help="Build arguments given after --",
    )
    _add_common_args(p_upload)
    p_upload.set_defaults(func=_cmd_upload)

    p_close = sub.add_parser("close", help="Close the signer's registry entry for a program")
    p_close.add_argument("--program-id", required=True, help="Address of the deployed program")
    p_close.add_argument("--yes", "-y", action="store_true", help="Skip the confirmation prompt")
    _add_common_args(p_close)
    p_close.set_defaults(func=_cmd_close)

    p_pda = sub.add_parser("pda", help="Show the registry addresses for a program")
    p_pda.add_argument("--program-id", required=True, help="Address of the deployed program")
    p_pda.add_argument("--signer", help="Signer public key (default: the configured keypair)")
    p_pda.add_argument("--check", action="store_true", help="Query the RPC for account existence")
    _add_common_args(p_pda)
    p_pda.set_defaults(func=_cmd_pda)

    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except FileNotFoundError as exc:
        print(str(exc))
        return 1
    except (RpcError, ValueError) as exc:
        print(str(exc))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
