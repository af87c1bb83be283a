"""
Discord adapter — slash command registration and reply transport.

Uses discord.py (Gateway + application commands). Each slash command
forwards its options to the CommandDispatcher and sends the resulting Reply
back as an interaction response. Commands that wait on the network (gas,
mempool, status) defer first so Discord's 3-second ack window is met.
"""

from __future__ import annotations

from typing import Any, Optional

import discord
from discord import app_commands

from backend_bundlebot.bundlebot_logging import bind_user, get_logger
from backend_bundlebot.bot.dispatcher import CommandDispatcher
from backend_bundlebot.bot.replies import EmbedSpec, Reply

logger = get_logger(__name__)

DEFERRED_COMMANDS = frozenset({"gas", "mempool", "status"})


def to_discord_embed(spec: EmbedSpec) -> discord.Embed:
    embed = discord.Embed(title=spec.title, description=spec.description, color=spec.color)
    for f in spec.fields:
        embed.add_field(name=f.name, value=f.value, inline=f.inline)
    if spec.footer:
        embed.set_footer(text=spec.footer)
    return embed


async def send_reply(interaction: discord.Interaction, reply: Reply, *, deferred: bool = False) -> None:
    kwargs: dict[str, Any] = {"ephemeral": reply.ephemeral}
    if reply.content:
        kwargs["content"] = reply.content
    if reply.embeds:
        kwargs["embeds"] = [to_discord_embed(e) for e in reply.embeds]
    if deferred:
        await interaction.followup.send(**kwargs)
    else:
        await interaction.response.send_message(**kwargs)


async def run_command(
    dispatcher: CommandDispatcher,
    interaction: discord.Interaction,
    command: str,
    options: dict[str, Optional[str]] | None = None,
) -> None:
    deferred = command in DEFERRED_COMMANDS
    if deferred:
        await interaction.response.defer(ephemeral=True, thinking=True)
    user_id = str(interaction.user.id)
    log = bind_user(user_id, name=__name__, command=command)
    try:
        reply = await dispatcher.dispatch(command, user_id, options)
    except Exception as e:
        log.exception("command_failed", error=str(e))
        reply = Reply(content=f"❌ Failed to run /{command}: {e}")
    try:
        await send_reply(interaction, reply, deferred=deferred)
    except discord.HTTPException as e:
        log.error("reply_failed", error=str(e))


def register_commands(tree: app_commands.CommandTree, dispatcher: CommandDispatcher) -> None:
    """Attach the seven slash commands to the tree."""

    @tree.command(name="connect", description="Connect your Phantom wallet.")
    async def connect(interaction: discord.Interaction) -> None:
        await run_command(dispatcher, interaction, "connect")

    @tree.command(name="bundle", description="Bundle Solana transactions.")
    @app_commands.describe(
        address1="Solana address #1",
        amount1="Amount for address #1 (in SOL)",
        address2="Solana address #2",
        amount2="Amount for address #2 (in SOL)",
        address3="Solana address #3",
        amount3="Amount for address #3 (in SOL)",
        address4="Solana address #4",
        amount4="Amount for address #4 (in SOL)",
        address5="Solana address #5",
        amount5="Amount for address #5 (in SOL)",
    )
    async def bundle(
        interaction: discord.Interaction,
        address1: str,
        amount1: str,
        address2: Optional[str] = None,
        amount2: Optional[str] = None,
        address3: Optional[str] = None,
        amount3: Optional[str] = None,
        address4: Optional[str] = None,
        amount4: Optional[str] = None,
        address5: Optional[str] = None,
        amount5: Optional[str] = None,
    ) -> None:
        options = {
            "address1": address1, "amount1": amount1,
            "address2": address2, "amount2": amount2,
            "address3": address3, "amount3": amount3,
            "address4": address4, "amount4": amount4,
            "address5": address5, "amount5": amount5,
        }
        await run_command(dispatcher, interaction, "bundle", options)

    @tree.command(name="preview", description="Preview your transaction bundle.")
    async def preview(interaction: discord.Interaction) -> None:
        await run_command(dispatcher, interaction, "preview")

    @tree.command(name="status", description="Get real-time status updates.")
    async def status(interaction: discord.Interaction) -> None:
        await run_command(dispatcher, interaction, "status")

    @tree.command(name="send", description="Send your transaction bundle (sign with Phantom wallet).")
    async def send(interaction: discord.Interaction) -> None:
        await run_command(dispatcher, interaction, "send")

    @tree.command(name="gas", description="Show current Solana transaction fee (in SOL and USD).")
    async def gas(interaction: discord.Interaction) -> None:
        await run_command(dispatcher, interaction, "gas")

    @tree.command(name="mempool", description="Show current Solana mempool status.")
    async def mempool(interaction: discord.Interaction) -> None:
        await run_command(dispatcher, interaction, "mempool")


class BundleBotClient(discord.Client):
    """discord.Client with the bundle commands registered and synced on login."""

    def __init__(self, dispatcher: CommandDispatcher) -> None:
        super().__init__(intents=discord.Intents.default())
        self.dispatcher = dispatcher
        self.tree = app_commands.CommandTree(self)
        register_commands(self.tree, dispatcher)

    async def setup_hook(self) -> None:
        logger.info("slash_commands_registering", count=len(self.tree.get_commands()))
        try:
            synced = await self.tree.sync()
        except discord.HTTPException as e:
            logger.error("slash_commands_register_failed", error=str(e))
            return
        logger.info("slash_commands_registered", count=len(synced))

    async def on_ready(self) -> None:
        logger.info("discord_ready", user=str(self.user))
