"""Re-export individual schema modules for easy imports."""

from .user import Credentials, DemoUserOut, TokenOut, UserMe, UserOut
from .prefs import PreferencesIn, PreferencesOut
from .plan import PlanOut, PlanRequest

__all__ = [
    "Credentials",
    "DemoUserOut",
    "TokenOut",
    "UserMe",
    "UserOut",
    "PreferencesIn",
    "PreferencesOut",
    "PlanOut",
    "PlanRequest",
]
