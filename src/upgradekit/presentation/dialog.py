"""
Negative-outcome presentation.

The compatibility core never renders UI. On a negative outcome in a GUI mode it
builds a DialogRequest and hands it to a presenter; the presenter reports back
whether the operator chose to continue anyway (GUISoft only).
"""

import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from ..compatibility import CheckSettings, CompatibilityVerdict
from ..hardware.hardware_schema import PlatformFacts
from ..utils import safe_import

logger = logging.getLogger(__name__)

DEFAULT_STEP = "Hardware compatibility check"


class Mode(str, Enum):
    """How a negative outcome is presented."""
    SILENT = "Silent"       # exit code only
    GUI_HARD = "GUIHard"    # blocking dialog, no way to continue
    GUI_SOFT = "GUISoft"    # blocking dialog with an operator override

    @property
    def shows_dialog(self) -> bool:
        return self is not Mode.SILENT

    @property
    def allows_override(self) -> bool:
        return self is Mode.GUI_SOFT


class DialogRequest(BaseModel):
    """Everything a modal-dialog presenter needs to show a negative outcome."""
    organization: str = Field(..., description="Organization name")
    package_name: str = Field(..., description="Deployment package name")
    title: str = Field(..., description="Dialog title")
    message: str = Field(..., description="Multi-line message body")
    error_code: int = Field(1, description="Exit code the run will end with")
    timeout: int = Field(0, ge=0, description="Seconds before the dialog closes on its own (0 = never)")
    reboot: bool = Field(False, description="Whether a reboot is required afterwards")
    step: str = Field(DEFAULT_STEP, description="Deployment step that produced the dialog")


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def describe_failures(verdict: CompatibilityVerdict, facts: Optional[PlatformFacts] = None) -> List[str]:
    """Human readable line for every failed check."""
    lines = []
    if verdict.manufacturer_ok is False:
        lines.append("The processor manufacturer is not supported.")
    if verdict.brand_ok is False:
        lines.append(f"The processor family of {verdict.processor} is not on the supported list.")
    if verdict.model_ok is False:
        lines.append(f"The processor model of {verdict.processor} is not on the supported list.")
    if verdict.retrieval_error:
        lines.append(f"The supported processor list could not be retrieved ({verdict.retrieval_error}).")
    if not verdict.platform_ok:
        if facts is None:
            lines.append("The firmware does not meet the requirements.")
        else:
            lines.append(
                f"Firmware: UEFI boot {_yes_no(facts.booted_uefi)}, Secure Boot {_yes_no(facts.secure_boot)}, "
                f"TPM active {_yes_no(facts.tpm_active)}, TPM enabled {_yes_no(facts.tpm_enabled)}, "
                f"TPM 2.0 {_yes_no(facts.tpm_is_v2)}."
            )
            if verdict.memory_ok is False:
                lines.append(f"Installed memory ({facts.memory_mb:,} MB) is below the minimum.")
    return lines


def build_dialog_request(
    settings: CheckSettings,
    verdict: Optional[CompatibilityVerdict] = None,
    error: Optional[Exception] = None,
    facts: Optional[PlatformFacts] = None,
    step: str = DEFAULT_STEP,
) -> DialogRequest:
    """
    Compose the dialog for a negative verdict or for an error that prevented one.
    """
    header = f"This computer does not meet the requirements for {settings.package_name}."
    if error is not None:
        details = [str(error)]
    elif verdict is not None:
        details = describe_failures(verdict, facts)
    else:
        details = []

    message = "\n".join([header, ""] + [f"- {line}" for line in details]) if details else header
    return DialogRequest(
        organization=settings.organization,
        package_name=settings.package_name,
        title=f"{settings.organization} - {settings.package_name}",
        message=message,
        error_code=1,
        timeout=settings.dialog_timeout,
        reboot=False,
        step=step,
    )


class LogPresenter:
    """Presenter that only logs the request; never overrides."""

    def present(self, request: DialogRequest, allow_override: bool = False) -> bool:
        logger.error(f"[{request.step}] {request.title}: {request.message}")
        return False


class TkDialogPresenter:
    """
    Modal tkinter message box.

    GUIHard shows an error box. GUISoft asks whether to continue anyway and
    returns the operator's answer. The box closes itself after
    ``request.timeout`` seconds, which counts as "do not continue".
    """

    def present(self, request: DialogRequest, allow_override: bool = False) -> bool:
        tkinter = safe_import("tkinter")
        messagebox = safe_import("tkinter.messagebox")
        if not tkinter or not messagebox:
            logger.warning("tkinter is not available, falling back to log output")
            return LogPresenter().present(request, allow_override)

        try:
            root = tkinter.Tk()
        except tkinter.TclError as e:
            # No display (service session, SSH)
            logger.warning(f"Cannot open a dialog ({e}), falling back to log output")
            return LogPresenter().present(request, allow_override)

        root.withdraw()
        root.attributes("-topmost", True)
        if request.timeout:
            root.after(request.timeout * 1000, root.destroy)

        try:
            if allow_override:
                answer = messagebox.askyesno(
                    request.title,
                    f"{request.message}\n\nContinue anyway?",
                    icon=messagebox.WARNING,
                    parent=root,
                )
            else:
                messagebox.showerror(request.title, request.message, parent=root)
                answer = False
        except tkinter.TclError:
            # Dialog torn down by the timeout
            answer = False

        try:
            root.destroy()
        except tkinter.TclError:
            pass

        logger.info(f"Dialog closed (override={bool(answer)})")
        return bool(answer)
