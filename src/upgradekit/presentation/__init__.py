"""
Dialog presentation for negative outcomes.
"""

from .dialog import (
    Mode,
    DialogRequest,
    build_dialog_request,
    describe_failures,
    LogPresenter,
    TkDialogPresenter,
)

__all__ = [
    "Mode",
    "DialogRequest",
    "build_dialog_request",
    "describe_failures",
    "LogPresenter",
    "TkDialogPresenter",
]
