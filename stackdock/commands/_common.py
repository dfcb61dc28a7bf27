"""
Shared helpers for stackdock commands.

Each command builds a StackDockCore from the global options, starts one
engine operation and waits for it to settle before reporting.
"""
import asyncio
from typing import Callable, Optional

import click
from pydantic import ValidationError

from stackdock.core import StackDockCore
from stackdock.exceptions import StackDockError
from stackdock.managers.engine import MutationResult


def get_core(ctx: click.Context) -> StackDockCore:
    """Build a core from the options collected by the root group."""
    try:
        return StackDockCore(**ctx.obj)
    except StackDockError as e:
        raise click.ClickException(str(e))


def run_operation(
    ctx: click.Context,
    start: Callable[[StackDockCore], "asyncio.Future[MutationResult]"],
    core: Optional[StackDockCore] = None,
    check: bool = True,
) -> MutationResult:
    """Run one engine operation to settlement.

    Args:
        ctx: Click context holding the core options.
        start: Receives the core and starts the operation.
        core: Core to run against. A new one is built when omitted.
        check: Raise when the operation was rolled back.

    Returns:
        The settled MutationResult.

    Raises:
        click.ClickException: On invalid input or a rolled-back operation.
    """

    async def main() -> MutationResult:
        return await start(core or get_core(ctx))

    try:
        result = asyncio.run(main())
    except StackDockError as e:
        raise click.ClickException(str(e))
    except ValidationError as e:
        raise click.ClickException(e.errors()[0]["msg"])

    if check and not result.ok:
        raise click.ClickException(f"{result.error} (changes rolled back)")
    return result
