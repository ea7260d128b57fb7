"""Authenticated user command."""
from .context import CommandContext
from ..output import Renderable, RenderKind


def get_user(ctx: CommandContext, args) -> Renderable:
    return Renderable(RenderKind.USER, ctx.client.get_user())


def register(subparsers) -> None:
    parser = subparsers.add_parser("user", help="Show the authenticated user")
    parser.set_defaults(handler=get_user)
