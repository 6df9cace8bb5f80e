"""
CLI Module

Architectural Intent:
- Command-line interface for cairn
- Entry point for all user interactions
- Delegates to application use cases via composition root
- Supports --verbose/--debug flags for log level control
"""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
import traceback
from typing import Optional

from cairn import composition_root
from cairn.application.dtos.reconcile_dtos import (
    FindResourceRequest,
    ReconcileRequest,
    ReconcileResponse,
    ResourceOutcome,
)
from cairn.domain.entities.reconciliation_pass import PassState
from cairn.domain.errors import ManifestError, TransportError
from cairn.infrastructure.config import load_config
from cairn.infrastructure.logging import configure_logging, resolve_level
from cairn.infrastructure.manifest_loader import load_manifest


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cairn",
        description="cairn: declarative reconciliation of Azure managed disks",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit structured JSON log lines"
    )
    parser.add_argument(
        "--config", "-c", default=None, help="Path to cairn config (JSON)"
    )
    parser.add_argument(
        "--simulate",
        action="store_true",
        help="Reconcile against an in-memory cloud instead of Azure",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    apply_parser = subparsers.add_parser(
        "apply", help="Converge Azure to the resources declared in a manifest"
    )
    apply_parser.add_argument(
        "--manifest", "-m", required=True, help="Path to desired-state manifest"
    )

    plan_parser = subparsers.add_parser(
        "plan", help="Show what apply would change, without changing anything"
    )
    plan_parser.add_argument(
        "--manifest", "-m", required=True, help="Path to desired-state manifest"
    )

    find_parser = subparsers.add_parser("find", help="Show the actual state of a resource")
    find_parser.add_argument(
        "--kind", "-k", choices=["disk", "resource-group"], default="disk"
    )
    find_parser.add_argument(
        "--resource-group", "-g", default=None, help="Resource group of the disk"
    )
    find_parser.add_argument("--name", "-n", required=True, help="Resource name")

    list_parser = subparsers.add_parser("list", help="Show every disk in a resource group")
    list_parser.add_argument(
        "--resource-group", "-g", required=True, help="Resource group to list"
    )

    return parser


def _describe(outcome: ResourceOutcome) -> str:
    if outcome.state == PassState.VALIDATED:
        if not outcome.existed:
            return "would create"
        return f"would update {', '.join(outcome.changed_fields)}"
    if outcome.state == PassState.APPLIED:
        if not outcome.existed:
            return "created"
        return f"updated {', '.join(outcome.changed_fields)}"
    if outcome.state == PassState.UNCHANGED:
        return "up to date"
    return f"{outcome.state.name.lower()}: {outcome.message}"


def print_response(response: ReconcileResponse) -> None:
    for outcome in response.outcomes:
        marker = "[-]" if outcome.state == PassState.REJECTED else "[+]"
        print(f"{marker} {outcome.label}: {_describe(outcome)}")

    total = len(response.outcomes)
    if response.success:
        verb = "planned" if response.dry_run else "reconciled"
        print(f"[+] {total} resource(s) {verb}.")
    else:
        print(f"[-] {len(response.rejected)} of {total} resource(s) rejected.")


async def _reconcile(container, manifest_path: str, dry_run: bool) -> bool:
    manifest = load_manifest(manifest_path)
    request = ReconcileRequest(
        resource_groups=manifest.resource_groups,
        disks=manifest.disks,
        dry_run=dry_run,
    )
    action = "Planning" if dry_run else "Reconciling"
    print(f"[*] {action} {len(manifest)} resource(s) from {manifest_path}...")
    response = await container.reconcile.execute(request)
    print_response(response)
    return response.success


async def _find(container, args: argparse.Namespace) -> bool:
    request = FindResourceRequest(
        kind=args.kind, name=args.name, resource_group=args.resource_group
    )
    resource = await container.find.execute(request)
    if resource is None:
        where = f"{request.resource_group}/" if request.resource_group else ""
        print(f"[-] {request.kind} {where}{request.name} not found")
        return False
    print(json.dumps(resource.to_dict(), indent=2, sort_keys=True))
    return True


async def _list(container, args: argparse.Namespace) -> bool:
    disks = await container.list_disks.execute(args.resource_group)
    if not disks:
        print(f"[*] No disks in resource group {args.resource_group}")
        return True
    print(json.dumps([d.to_dict() for d in disks], indent=2, sort_keys=True))
    return True


async def async_main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)

    # Configure logging based on flags
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = resolve_level(config.log_level)
    configure_logging(level=level, json_format=args.json_logs)

    verbose = args.verbose or args.debug

    if args.command is None:
        parser.print_help()
        return

    if args.simulate:
        config = dataclasses.replace(
            config, azure=dataclasses.replace(config.azure, simulate=True)
        )

    try:
        container = composition_root.create_container(config)
    except ValueError as e:
        print(f"[-] Configuration error: {e}")
        sys.exit(1)

    try:
        if args.command in ("apply", "plan"):
            ok = await _reconcile(container, args.manifest, args.command == "plan")
        elif args.command == "list":
            ok = await _list(container, args)
        else:
            ok = await _find(container, args)
    except ManifestError as e:
        print(f"[-] Invalid manifest: {e}")
        sys.exit(1)
    except TransportError as e:
        print(f"[-] Cloud gateway error during {e.operation or args.command}: {e}")
        if verbose:
            traceback.print_exc()
        sys.exit(1)
    except ValueError as e:
        print(f"[-] {e}")
        sys.exit(1)
    except Exception as e:
        print(f"[-] {args.command.capitalize()} Failed: {e}")
        if verbose:
            traceback.print_exc()
        sys.exit(1)
    finally:
        await container.close()

    if not ok:
        sys.exit(1)


def main():
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
