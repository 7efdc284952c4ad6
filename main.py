import asyncio

from rich.console import Console
from rich.pretty import pprint

from admincommand import *


@admin_command("ban [roomId]", options={
    "roomId": {"description": "Room to ban", "demandOption": True},
    "reason": {"description": "Why the room is banned", "alias": "r"},
}, colorful=True, fancy=True)
async def ban(argv):
    """Bans a room"""
    argv.respond(f"banned {argv['roomId']} ({argv.get('reason', 'no reason')})")


if __name__ == '__main__':
    console = Console()
    pprint(ban)
    console.print(ban.simple_help(), markup=False)
    console.print(ban)
    asyncio.run(ban.handle(HandlerArgs(
        lambda: console.print("matched"),
        lambda error: console.print("completed", error),
        lambda message: console.print(message, markup=False),
        roomId="!abc:example.org",
    )))
