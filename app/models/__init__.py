from .account import Authentication, Decentralization
from .store import StoreInfo, ChurnHistory, ActiveHistory
from .action import ChurnAction, ActiveAction
from .dropdown import DropdownChurnAction, DropdownActiveAction, DropdownWhy

__all__ = [
    "Authentication",
    "Decentralization",
    "StoreInfo",
    "ChurnHistory",
    "ActiveHistory",
    "ChurnAction",
    "ActiveAction",
    "DropdownChurnAction",
    "DropdownActiveAction",
    "DropdownWhy",
]
