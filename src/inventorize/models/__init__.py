from .inventory import Configuration, Inventory, Record
from .report import FailureKind, Report

__all__ = [
    "Configuration",
    "FailureKind",
    "Inventory",
    "Record",
    "Report",
]
