"""
Turn Input and Result.

Defines what the dialogue engine receives and returns for one user message.
"""

from dataclasses import dataclass
from typing import Optional, Union

from ..models import BusinessReceipt, GiftSession, Receipt
from .forms import FormPayload
from .ui import UiHint


@dataclass(frozen=True)
class TurnInput:
    """One user message, already stripped, plus an optional structured form."""
    text: str = ""
    form: Optional[FormPayload] = None

    @property
    def command(self) -> str:
        """Lower-cased text for matching command words."""
        return self.text.lower()


@dataclass
class TurnResult:
    """Result from processing one user message."""
    session: GiftSession
    reply: str
    ui: Optional[UiHint] = None
    receipt: Optional[Union[Receipt, BusinessReceipt]] = None
