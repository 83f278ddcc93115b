"""
apodwall Decorators

Decorators shared by command line entry points.
"""

import sys
from functools import wraps

import click

from apodwall.cli_utils.console import fail


def catch_errors(func):
    """
    Catch and format errors with the "fail" console template and gracefully
    exit the application with an error code.

    click's own exceptions (usage errors, --help, --version) are re-raised so that
    click renders them with its usual messages and exit codes.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except Exception as error:
            fail(str(error))
            sys.exit(1)

    return wrapper
