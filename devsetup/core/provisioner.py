"""
Provisioner - applies an ordered list of ToolSpecs to the current machine.

Each tool is checked, installed only if absent, and reported before the next
one starts. A failed install is downgraded to fallback guidance and never
stops the remaining tools.
"""

import logging
from typing import Callable, Iterable, List, Optional

from ..errors import DetectionError, UserCancelled
from ..models.installation import InstallOutcome, ProvisionResult, ProvisionStatus
from ..models.tool import ToolSpec
from ..utils.reporter import StatusReporter

ConfirmCallback = Callable[[List[ToolSpec]], bool]


class Provisioner:
    """Installs missing tools sequentially, tolerating individual failures."""

    def __init__(self,
                 confirm: Optional[ConfirmCallback] = None,
                 reporter: Optional[StatusReporter] = None,
                 confirmed: bool = False):
        """
        Initialize the provisioner.

        Args:
            confirm: Asks the user to approve the run; returns True to proceed
            reporter: Destination for status lines
            confirmed: Treat the run as already approved (e.g. --force)
        """
        self.logger = logging.getLogger(__name__)
        self.confirm = confirm
        self.reporter = reporter or StatusReporter()
        self.confirmed = confirmed

    def run(self, specs: Iterable[ToolSpec], interactive: bool = True) -> List[ProvisionResult]:
        """
        Provision every spec in order.

        Preconditions (privileges, OS version, host environment) must be
        checked by the caller beforehand.

        Args:
            specs: Tools to provision, in order
            interactive: Require confirmation before the first install

        Returns:
            One result per spec, in the same order
        """
        specs = list(specs)
        if not specs:
            self.logger.info("No tools to provision")
            return []

        if interactive and not self.confirm_run(specs):
            return self.cancelled(specs)

        self.logger.info(f"Provisioning {len(specs)} tools")
        return [self._provision(spec) for spec in specs]

    def confirm_run(self, specs: List[ToolSpec]) -> bool:
        """Ask for approval once; a granted approval covers later runs too."""
        if self.confirmed:
            return True
        if self.confirm is None:
            self.logger.warning("Interactive run without a confirmation prompt; treating as declined")
            return False
        try:
            self.confirmed = bool(self.confirm(specs))
        except UserCancelled:
            self.confirmed = False
        return self.confirmed

    def cancelled(self, specs: Iterable[ToolSpec]) -> List[ProvisionResult]:
        """Results for a declined run: every tool cancelled, nothing installed."""
        self.reporter.warning("Installation cancelled by user.")
        return [
            ProvisionResult(tool_name=spec.name, status=ProvisionStatus.CANCELLED).complete()
            for spec in specs
        ]

    def _provision(self, spec: ToolSpec) -> ProvisionResult:
        """Take one tool from Unknown to a terminal state."""
        self.reporter.step(f"Checking {spec.name}...")

        if self._is_present(spec):
            self.reporter.info(f"{spec.name} is already installed.")
            return ProvisionResult(
                tool_name=spec.name,
                status=ProvisionStatus.ALREADY_PRESENT
            ).complete()

        result = ProvisionResult(tool_name=spec.name, status=ProvisionStatus.INSTALLED)
        self.reporter.step(f"Installing {spec.name}...")
        outcome = self._install(spec)
        result.outcome = outcome

        if outcome.success:
            self.reporter.info(f"{spec.name} installed successfully.")
            return result.complete()

        self.logger.error(f"Install of {spec.name} failed: {outcome.error}")
        self.reporter.warning(f"Failed to install {spec.name}, continuing...")
        self.reporter.warning(spec.fallback_message)
        result.status = ProvisionStatus.INSTALL_FAILED_FALLBACK_SHOWN
        result.message = spec.fallback_message
        return result.complete()

    def _is_present(self, spec: ToolSpec) -> bool:
        """A probe that fails counts as absent, so the tool gets (re)installed."""
        try:
            return self._detect(spec)
        except DetectionError as e:
            self.logger.warning(f"{e}; assuming it is not installed", exc_info=True)
            return False

    def _detect(self, spec: ToolSpec) -> bool:
        try:
            return bool(spec.detect.is_present())
        except DetectionError:
            raise
        except Exception as e:
            raise DetectionError(f"Detection for {spec.name} failed: {e}") from e

    def _install(self, spec: ToolSpec) -> InstallOutcome:
        try:
            return spec.install.install()
        except Exception as e:
            self.logger.error(f"Install action for {spec.name} raised: {e}", exc_info=True)
            return InstallOutcome.failed(str(e))
