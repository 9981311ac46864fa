#!/usr/bin/env python3
"""
Command line entry point.

Collects platform facts, checks processor and firmware compatibility, prints a
diagnostic breakdown and signals the outcome through the exit code:

    0  compatible (or operator override in GUISoft mode)
    1  anything else: parse failure, retrieval failure, unsupported
       manufacturer, compatibility mismatch
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .compatibility import (
    CheckSettings,
    CompatibilityVerdict,
    Fetcher,
    MemoryCheckScope,
    check_compatibility,
)
from .exceptions import ParseError, RetrievalError, UnsupportedManufacturerError
from .hardware import PlatformFacts, platform_profile
from .presentation import Mode, TkDialogPresenter, build_dialog_request

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser ready for argument parsing
    """
    parser = argparse.ArgumentParser(
        prog="upgradekit",
        description="Check processor and firmware compatibility for a Windows 11 upgrade",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--mode",
        "-m",
        choices=[mode.value for mode in Mode],
        default=Mode.SILENT.value,
        help="How a negative outcome is presented",
    )
    parser.add_argument("--cpu", metavar="NAME", help="Processor string to check instead of the detected one")
    parser.add_argument("--json", action="store_true", help="Print the verdict as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show every intermediate check")
    parser.add_argument("--debug", "-d", action="store_true", help="Display debug output")

    check_group = parser.add_argument_group("CHECK OPTIONS")
    check_group.add_argument(
        "--memory-check",
        choices=[scope.value for scope in MemoryCheckScope],
        default=MemoryCheckScope.ALL.value,
        help="Machines the memory threshold applies to",
    )
    check_group.add_argument(
        "--abort-on-retrieval-failure",
        action="store_true",
        help="Abort instead of treating an unreachable vendor page as 'not listed'",
    )
    check_group.add_argument("--timeout", type=float, default=30.0, help="Vendor page request timeout in seconds")

    dialog_group = parser.add_argument_group("DIALOG OPTIONS")
    dialog_group.add_argument("--organization", default="IT Department", help="Organization name shown in dialogs")
    dialog_group.add_argument("--package", default="Windows 11 Upgrade", help="Package name shown in dialogs")
    dialog_group.add_argument(
        "--dialog-timeout", type=int, default=600, help="Seconds before the dialog closes on its own (0 = never)"
    )
    return parser


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure root logging from the command line flags."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        stream=sys.stderr,
    )


def settings_from_args(args: argparse.Namespace) -> CheckSettings:
    return CheckSettings(
        memory_check_scope=MemoryCheckScope(args.memory_check),
        abort_on_retrieval_failure=args.abort_on_retrieval_failure,
        request_timeout=args.timeout,
        organization=args.organization,
        package_name=args.package,
        dialog_timeout=args.dialog_timeout,
    )


def _print_facts(facts: PlatformFacts) -> None:
    print(f"  UEFI boot:    {facts.booted_uefi}")
    print(f"  Secure Boot:  {facts.secure_boot}")
    print(f"  TPM active:   {facts.tpm_active}")
    print(f"  TPM enabled:  {facts.tpm_enabled}")
    print(f"  TPM 2.0:      {facts.tpm_is_v2}")
    print(f"  Memory:       {facts.memory_mb:,} MB")
    print(f"  Virtual:      {facts.is_vm}")


def _print_verdict(verdict: CompatibilityVerdict, facts: PlatformFacts, as_json: bool = False) -> None:
    if as_json:
        payload = verdict.model_dump()
        payload["facts"] = facts.model_dump()
        print(json.dumps(payload, indent=2))
        return

    status = "COMPATIBLE" if verdict.final else "NOT COMPATIBLE"
    print(f"Result: {status}")
    print(f"  Processor:    {verdict.processor or 'n/a'}{' (virtual machine)' if verdict.is_vm else ''}")
    print(f"  Manufacturer: {verdict.manufacturer_ok}")
    print(f"  Brand:        {verdict.brand_ok}")
    print(f"  Model:        {verdict.model_ok}")
    print(f"  Platform:     {verdict.platform_ok} (memory ok: {verdict.memory_ok})")
    _print_facts(facts)
    if verdict.failed_checks():
        print(f"  Failed:       {', '.join(verdict.failed_checks())}")


def _print_error(error: Exception, facts: PlatformFacts, as_json: bool = False) -> None:
    if as_json:
        print(json.dumps({"final": False, "error": str(error), "facts": facts.model_dump()}, indent=2))
        return

    print("Result: CHECK FAILED")
    print(f"  Error:        {error}")
    _print_facts(facts)


def _handle_negative(mode: Mode, settings: CheckSettings, presenter, **dialog_kwargs) -> int:
    if not mode.shows_dialog:
        return EXIT_FAILURE

    request = build_dialog_request(settings, **dialog_kwargs)
    if presenter.present(request, allow_override=mode.allows_override):
        logger.warning("Operator chose to continue despite failed compatibility checks")
        return EXIT_SUCCESS
    return request.error_code


def run_check(
    mode: Mode = Mode.SILENT,
    settings: Optional[CheckSettings] = None,
    processor_name: Optional[str] = None,
    facts: Optional[PlatformFacts] = None,
    presenter=None,
    fetcher: Optional[Fetcher] = None,
    as_json: bool = False,
) -> int:
    """
    Run one compatibility check and return the process exit code.

    Facts and the processor string are detected from the host unless given.
    """
    settings = settings or CheckSettings()
    presenter = presenter or TkDialogPresenter()

    if facts is None or processor_name is None:
        profile = platform_profile()
        if facts is None:
            facts = profile.facts
        processor_name = processor_name or profile.processor_name or ""
    logger.info(f"Checking processor {processor_name!r} with facts {facts.model_dump()}")

    try:
        verdict = check_compatibility(processor_name, facts, settings=settings, fetcher=fetcher)
    except UnsupportedManufacturerError as e:
        logger.error(f"Aborting: {e}")
        _print_error(e, facts, as_json=as_json)
        return EXIT_FAILURE
    except (ParseError, RetrievalError) as e:
        logger.error(f"Compatibility check failed: {e}")
        _print_error(e, facts, as_json=as_json)
        return _handle_negative(mode, settings, presenter, error=e, facts=facts)

    _print_verdict(verdict, facts, as_json=as_json)

    if verdict.final:
        return EXIT_SUCCESS
    return _handle_negative(mode, settings, presenter, verdict=verdict, facts=facts)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        int: Exit code (0 for compatible, 1 otherwise)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, debug=args.debug)

    return run_check(
        mode=Mode(args.mode),
        settings=settings_from_args(args),
        processor_name=args.cpu,
        as_json=args.json,
    )


if __name__ == "__main__":
    sys.exit(main())
