"""CLI utility functions"""

from .output import (
    console,
    format_deploy_result,
    print_error,
    print_success,
)

__all__ = [
    # Output utilities
    'console',
    'format_deploy_result',
    'print_error',
    'print_success',
]
