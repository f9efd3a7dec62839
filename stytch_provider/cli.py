"""Command-line entry point for the Stytch provider.

    stytch-provider validate --config resources.yaml
    stytch-provider import stytch_redirect_url my-project.test.https://example.com/cb
    stytch-provider upgrade-state --state terraform.tfstate --output upgraded.tfstate
"""
from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .config import load_settings
from .core.diagnostics import Diagnostic, DiagnosticError, Diagnostics
from .provider import StytchProvider

logger = logging.getLogger(__name__)

RESOURCE_PREFIX = "stytch_"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )


def _print_diagnostics(prefix: str, diags: Diagnostics) -> None:
    for diag in diags:
        print(f"[{prefix}] {diag}", file=sys.stderr)


def validate_config(provider: StytchProvider, document: Any) -> Diagnostics:
    """Validate a YAML document of ``type_name -> {name: attributes}``."""
    diags = Diagnostics()
    if not isinstance(document, dict):
        diags.add_error("Invalid configuration file", "Top level must be a mapping of resource type to resources.")
        return diags
    
    for type_name, instances in document.items():
        try:
            resource = provider.resource(type_name)
        except KeyError as exc:
            diags.add_error("Invalid resource type", str(exc.args[0]), type_name)
            continue
        if not isinstance(instances, dict):
            diags.add_error("Invalid resource block", f"{type_name} must map resource names to attributes.", type_name)
            continue
        for name, attrs in instances.items():
            address = f"{type_name}.{name}"
            for diag in resource.validate_config(attrs or {}):
                attribute = f"{address}.{diag.attribute}" if diag.attribute else address
                diags.append(Diagnostic(diag.severity, diag.summary, diag.detail, attribute))
    return diags


def upgrade_state_document(provider: StytchProvider, document: Dict[str, Any]) -> int:
    """Upgrade every stytch_* instance in a Terraform state document in place.
    
    Returns:
        Number of instances upgraded
    """
    upgraded = 0
    for block in document.get("resources") or []:
        type_name = block.get("type", "")
        if not type_name.startswith(RESOURCE_PREFIX) or block.get("mode", "managed") != "managed":
            continue
        if type_name not in provider.resources:
            logger.warning(f"[upgrade-state] Skipping {type_name}.{block.get('name')}: resource type is not managed by this provider")
            continue
        current = provider.resource(type_name).schema.version
        for instance in block.get("instances") or []:
            version = int(instance.get("schema_version", 0))
            if version == current:
                continue
            logger.info(f"[upgrade-state] Upgrading {type_name}.{block.get('name')} from v{version} to v{current}")
            instance["attributes"] = provider.upgrade_resource_state(type_name, version, instance.get("attributes"))
            instance["schema_version"] = current
            upgraded += 1
    return upgraded


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(prog="stytch-provider", description="Stytch provider resource tooling")
    parser.add_argument("--log-level", default=None, help="Override STYTCH_LOG_LEVEL")
    
    sub = parser.add_subparsers(dest="cmd")
    
    sv = sub.add_parser("validate", help="Validate a YAML resource configuration offline")
    sv.add_argument("--config", required=True, type=Path)
    
    si = sub.add_parser("import", help="Import an existing object and print its state")
    si.add_argument("type_name")
    si.add_argument("import_id")
    
    su = sub.add_parser("upgrade-state", help="Upgrade stytch_* instances in a state file")
    su.add_argument("--state", required=True, type=Path)
    su.add_argument("--output", type=Path, default=None, help="Defaults to overwriting --state")
    
    args = parser.parse_args(argv)
    
    if not args.cmd:
        parser.print_help()
        return 0
    
    config = load_settings()
    configure_logging(args.log_level or config.log_level)
    provider = StytchProvider(config)
    
    if args.cmd == "validate":
        try:
            document = yaml.safe_load(args.config.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            print(f"[validate] Error: cannot read {args.config}: {e}", file=sys.stderr)
            return 1
        diags = validate_config(provider, document)
        _print_diagnostics("validate", diags)
        if diags.has_error():
            return 1
        print(f"[validate] {args.config}: configuration is valid")
        return 0
    
    try:
        provider.configure()
        if args.cmd == "import":
            state = provider.import_resource(args.type_name, args.import_id)
            redacted = provider.resource(args.type_name).schema.redact(state)
            print(json.dumps(redacted, indent=2, sort_keys=True))
        elif args.cmd == "upgrade-state":
            document = json.loads(args.state.read_text(encoding="utf-8"))
            count = upgrade_state_document(provider, document)
            output = args.output or args.state
            output.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
            print(f"[upgrade-state] Upgraded {count} instance(s), wrote {output}")
    except DiagnosticError as e:
        _print_diagnostics(args.cmd, e.diagnostics)
        return 1
    except KeyError as e:
        print(f"[{args.cmd}] Error: {e.args[0]}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"[{args.cmd}] Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
