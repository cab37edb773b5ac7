"""CLI utilities"""

from .output import (
    console,
    ConsoleReporter,
    format_plan,
    format_deploy_result,
    format_status,
    print_error,
    print_warning,
    print_info,
)

__all__ = [
    "console",
    "ConsoleReporter",
    "format_plan",
    "format_deploy_result",
    "format_status",
    "print_error",
    "print_warning",
    "print_info",
]
