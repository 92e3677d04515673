import argparse
import logging
import os
import sys
from pathlib import Path

from folio.app_shell.bootstrap import ManagerContext
from folio.app_shell.logging_setup import configure_logging
from folio.components.content import PublishGuardError, VersionOptions
from folio.config.loader import ConfigError, load_config
from folio.config.models import FolioConfig
from folio.handlers.common import CommonPart

logger = logging.getLogger("folio.cli")

CONFIG_PATH = os.environ.get("FOLIO_CONFIG_PATH", "folio.yaml")


def get_config(path: str) -> FolioConfig:
    config_path = Path(path)
    if not config_path.exists():
        logger.warning("Config file %s not found, using defaults.", path)
        return FolioConfig()

    try:
        return load_config(config_path)
    except ConfigError as e:
        print(f"CRITICAL: {e}", file=sys.stderr)
        sys.exit(1)


def handle_types(ctx: ManagerContext, args: argparse.Namespace) -> None:
    definitions = ctx.manager.get_content_type_definitions()
    if not definitions:
        print("No content types declared.")
        return
    for definition in definitions:
        parts = ", ".join(p.name for p in definition.parts) or "-"
        print(f"{definition.name} ({definition.display_name}): {parts}")


def handle_walkthrough(ctx: ManagerContext, args: argparse.Namespace) -> None:
    """Run one item through draft -> publish -> new draft -> unpublish."""
    manager = ctx.manager

    item = manager.new(args.content_type)
    common = item.as_part(CommonPart)
    if common is not None:
        common.set("title", args.title)
    manager.create(item, VersionOptions.draft())
    print(f"Created draft {item.id} v{item.version}")

    try:
        manager.publish(item)
    except PublishGuardError as e:
        print(f"Publish blocked: {e}")
        return
    print(f"Published v{item.version}")

    if item.id is None:
        return
    draft = manager.get(item.id, VersionOptions.draft_required())
    if draft is not None:
        print(f"Opened draft v{draft.version}")

    manager.unpublish(item)
    print("Unpublished")

    for version in manager.get_all_versions(item.id):
        record = version.version_record
        if record is not None:
            print(f"  v{record.number} latest={record.latest} published={record.published}")

    print(f"Audit events: {', '.join(ctx.audit_log.actions())}")


def main() -> None:
    parser = argparse.ArgumentParser(description="folio content manager CLI")
    parser.add_argument("--config", default=CONFIG_PATH, help="Path to folio.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # check-config
    subparsers.add_parser("check-config", help="Validate the config file")

    # types
    subparsers.add_parser("types", help="List declared content types")

    # walkthrough
    walk_parser = subparsers.add_parser(
        "walkthrough", help="Exercise the lifecycle on an in-memory store"
    )
    walk_parser.add_argument("content_type", help="Content type name, declared or not")
    walk_parser.add_argument("--title", default="Untitled", help="Title for the item")

    args = parser.parse_args()

    config = get_config(args.config)
    configure_logging(config.logging)

    if args.command == "check-config":
        print("Configuration Validated.")
        return

    ctx = ManagerContext.create(config)

    if args.command == "types":
        handle_types(ctx, args)
    elif args.command == "walkthrough":
        handle_walkthrough(ctx, args)


if __name__ == "__main__":
    main()
