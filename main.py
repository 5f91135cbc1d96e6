#!/usr/bin/env python3
"""
Main entry point for devsetup - bootstrap a development machine
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

# Load environment variables from .env file
load_dotenv()

from devsetup.core.catalog import build_specs
from devsetup.core.git_defaults import configure_git
from devsetup.core.preconditions import verify_preconditions
from devsetup.core.provisioner import Provisioner
from devsetup.errors import ConfigurationError, PreconditionError
from devsetup.integrations.command_runner import CommandRunner
from devsetup.integrations.package_managers import AptRefresh
from devsetup.models.installation import ProvisionResult, RunSummary
from devsetup.models.tool import ToolSpec
from devsetup.utils.logging import setup_root_logger
from devsetup.utils.prompt import confirm_install
from devsetup.utils.reporter import StatusReporter
from config.settings import Settings, PROFILES

EXIT_OK = 0
EXIT_PRECONDITION = 1
EXIT_CONFIG = 2


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="devsetup",
        description="Install the development tools missing from this machine"
    )

    parser.add_argument(
        "--profile",
        choices=PROFILES,
        help="Tool catalog to apply (default: detected from the OS)"
    )

    parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Skip confirmation prompts"
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file (JSON format)"
    )

    parser.add_argument(
        "--list",
        action="store_true",
        help="List the tools of the profile and exit"
    )

    parser.add_argument(
        "--skip-git-config",
        action="store_true",
        help="Do not apply Git defaults after a wsl run"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        help="Log file path (default: logs/devsetup.log)"
    )

    return parser.parse_args(argv)


def load_config(args) -> Settings:
    """Load configuration from file and command line."""
    config_data = {}
    if args.config:
        if not args.config.exists():
            raise ConfigurationError(f"Config file not found: {args.config}")
        try:
            with open(args.config) as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {args.config}: {e}") from e
        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file {args.config} must contain a JSON object")

    # Override with command line args
    if args.profile:
        config_data["profile"] = args.profile
    if args.force:
        config_data["interactive"] = False
    if args.skip_git_config:
        config_data["configure_git"] = False
    if args.log_level:
        config_data.setdefault("logging", {})["level"] = args.log_level
    if args.log_file:
        config_data.setdefault("logging", {})["file_path"] = str(args.log_file)

    try:
        return Settings(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def list_tools(profile: str, settings: Settings, reporter: StatusReporter) -> None:
    """Print the tools a run would check, in order."""
    specs = build_specs(profile, settings)
    reporter.step(f"Tools in the '{profile}' profile:")
    for spec in specs:
        reporter.stream.write(f"  - {spec.name}: {spec.description or ''} [{spec.detect.describe()}]\n")


def report_summary(results: List[ProvisionResult], summary: RunSummary, reporter: StatusReporter) -> None:
    """Print per-tool outcomes and the totals."""
    reporter.blank()
    reporter.step("Summary:")
    for result in results:
        reporter.stream.write(f"  {result.tool_name}: {result.status.value}\n")
    reporter.info(
        f"{summary.total} tools: {summary.already_present} already present, "
        f"{summary.installed} installed, {summary.failed} failed "
        f"({summary.duration_seconds:.1f}s)"
    )
    if summary.failed:
        reporter.warning("Some tools could not be installed; see the guidance printed above.")


def report_next_steps(profile: str, reporter: StatusReporter) -> None:
    reporter.blank()
    reporter.warning("Important notes:")
    if profile == "wsl":
        reporter.stream.write("1. Restart your terminal or run 'source ~/.bashrc' to use Homebrew\n")
        reporter.stream.write("2. Consider switching to zsh: chsh -s $(which zsh)\n")
    else:
        reporter.stream.write("1. Restart your computer to finish enabling WSL\n")
        reporter.stream.write("2. Open the new Linux distribution and run this tool again with --profile wsl\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    reporter = StatusReporter()

    try:
        settings = load_config(args)
    except ConfigurationError as e:
        reporter.error(str(e))
        return EXIT_CONFIG

    setup_root_logger(
        settings.logging.file_path,
        settings.logging.level,
        max_file_size_mb=settings.logging.max_file_size_mb,
        backup_count=settings.logging.backup_count
    )
    logger = logging.getLogger(__name__)
    logger.info(f"Arguments: {vars(args)}")

    profile = settings.resolved_profile()

    if args.list:
        try:
            list_tools(profile, settings, reporter)
        except ConfigurationError as e:
            reporter.error(str(e))
            return EXIT_CONFIG
        return EXIT_OK

    reporter.step(f"devsetup ({profile} profile)")

    try:
        verify_preconditions(profile, settings.windows.minimum_build, reporter=reporter)
        specs = build_specs(profile, settings)
    except PreconditionError as e:
        reporter.error(e.message)
        if e.remediation:
            reporter.error(e.remediation)
        return EXIT_PRECONDITION
    except ConfigurationError as e:
        reporter.error(str(e))
        return EXIT_CONFIG

    provisioner = Provisioner(
        confirm=confirm_install,
        reporter=reporter,
        confirmed=not settings.interactive
    )

    start = time.monotonic()
    if specs and not provisioner.confirm_run(specs):
        results = provisioner.cancelled(specs)
    elif profile == "wsl":
        results = run_wsl(provisioner, specs, settings, reporter)
    else:
        results = provisioner.run(specs, interactive=settings.interactive)

    summary = RunSummary.from_results(results, time.monotonic() - start)
    logger.info(f"Run complete: {summary.model_dump()}")

    if summary.cancelled:
        return EXIT_OK

    report_summary(results, summary, reporter)
    report_next_steps(profile, reporter)
    return EXIT_OK


def run_wsl(provisioner: Provisioner,
            specs: List[ToolSpec],
            settings: Settings,
            reporter: StatusReporter) -> List[ProvisionResult]:
    """Refresh apt, provision the catalog, then apply Git defaults."""
    if specs:
        reporter.step("Updating system packages...")
        refresh = AptRefresh().install()
        if refresh.success:
            reporter.info("System packages updated.")
        else:
            reporter.warning(f"Could not update system packages: {refresh.error}")

    results = provisioner.run(specs, interactive=settings.interactive)

    if settings.configure_git:
        configure_git(CommandRunner(capture_output=True), reporter)
    return results


if __name__ == "__main__":
    sys.exit(main())
