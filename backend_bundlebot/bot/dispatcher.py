"""
Command dispatcher — chat interaction entry point.

Routes each slash command by name to the bundle life cycle (build, session,
history, status) or to a read-only network estimate (gas, mempool), and
returns a Reply. Every reply is ephemeral except the unknown-command one.
External failures degrade the reply (N/A, Error status) instead of raising.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Mapping, Optional

from backend_bundlebot.bundlebot_logging import bind_user
from backend_bundlebot.bot.replies import (
    COLOR_GREEN,
    COLOR_PURPLE,
    COLOR_YELLOW,
    EmbedField,
    EmbedSpec,
    Reply,
)
from backend_bundlebot.bundles.models import MAX_TRANSFERS, Transfer
from backend_bundlebot.context import AppContext
from backend_bundlebot.core.exceptions import ExternalServiceError, ValidationError
from backend_bundlebot.solana_rpc.network import (
    CongestionBand,
    estimate_congestion,
    estimate_fee,
)
from backend_bundlebot.status.reporter import TransferStatus

Options = Mapping[str, Optional[str]]
Handler = Callable[[str, Options], Awaitable[Reply]]

STATUS_LABELS = {
    TransferStatus.CONFIRMED: "✅ Confirmed",
    TransferStatus.FAILED: "❌ Failed",
    TransferStatus.PENDING: "⏳ Pending",
    TransferStatus.UNKNOWN: "❓ Unknown",
    TransferStatus.ERROR: "❓ Error",
}

CONGESTION_LABELS = {
    CongestionBand.NORMAL: "Normal",
    CongestionBand.MODERATE: "⚠️ Moderate",
    CongestionBand.HIGH: "\U0001f6a8 High",
}


def bundle_option_pairs(options: Options) -> list[tuple[str | None, str | None]]:
    """address1/amount1 .. address5/amount5 as ordered pairs."""
    return [
        (options.get(f"address{i}"), options.get(f"amount{i}"))
        for i in range(1, MAX_TRANSFERS + 1)
    ]


def _transfer_fields(transfers: tuple[Transfer, ...], suffixes: list[str] | None = None) -> tuple[EmbedField, ...]:
    fields = []
    for i, tx in enumerate(transfers):
        value = f"{tx.amount} SOL"
        if suffixes is not None:
            value = f"{value} — {suffixes[i]}"
        fields.append(EmbedField(name=f"#{i + 1}: {tx.address}", value=value))
    return tuple(fields)


class CommandDispatcher:
    """Stateless router; all state lives in the AppContext."""

    def __init__(self, ctx: AppContext) -> None:
        self.ctx = ctx
        self._handlers: dict[str, Handler] = {
            "connect": self.connect,
            "bundle": self.bundle,
            "preview": self.preview,
            "status": self.status,
            "send": self.send,
            "gas": self.gas,
            "mempool": self.mempool,
        }

    @property
    def command_names(self) -> list[str]:
        return list(self._handlers)

    async def dispatch(self, command: str, user_id: str, options: Options | None = None) -> Reply:
        log = bind_user(user_id, name=__name__, command=command)
        handler = self._handlers.get(command)
        if handler is None:
            log.warning("unknown_command")
            return Reply(content="Unknown command.", ephemeral=False)
        log.info("command_received")
        return await handler(user_id, options or {})

    async def connect(self, user_id: str, options: Options) -> Reply:
        url = self.ctx.settings.connect_url
        return Reply(content=f"\U0001f517 [Click here to connect your Phantom wallet]({url})")

    async def bundle(self, user_id: str, options: Options) -> Reply:
        try:
            bundle = self.ctx.builder.build_bundle(user_id, bundle_option_pairs(options))
        except ValidationError as e:
            bind_user(user_id, name=__name__).info("bundle_rejected", reason=type(e).__name__)
            return Reply(content=f"❌ {e}")

        session_id = self.ctx.sessions.create_session(bundle)
        self.ctx.history.append_history(user_id, session_id, bundle)
        sign_url = self.ctx.settings.sign_url(session_id)

        embed = EmbedSpec(
            title="\U0001f4e6 Bundle Created!",
            description="Here is your transaction bundle:",
            color=COLOR_PURPLE,
            fields=_transfer_fields(bundle.transfers),
            footer="You will review and sign this bundle yourself. Only sign what you trust.",
        )
        content = (
            f"✅ Your bundle is ready! [Click here to review and sign your bundle in a secure web page]({sign_url})\n\n"
            "**Security Tip:** You will sign all transactions yourself in your wallet. "
            "Never share your private key. Always review transaction details before signing."
        )
        return Reply(content=content, embeds=(embed,))

    async def preview(self, user_id: str, options: Options) -> Reply:
        bundle = self.ctx.builder.current_bundle(user_id)
        if bundle is None or len(bundle) == 0:
            return Reply(content="❌ No bundle found. Use /bundle to create one first.")
        embed = EmbedSpec(
            title="\U0001f440 Bundle Preview",
            description="Here is your current transaction bundle:",
            color=COLOR_GREEN,
            fields=_transfer_fields(bundle.transfers),
            footer="To sign and send, use the link provided after /bundle.",
        )
        return Reply(embeds=(embed,))

    async def status(self, user_id: str, options: Options) -> Reply:
        report = await self.ctx.reporter.report_statuses(user_id)
        if not report:
            return Reply(content="❌ No sent bundles found. Use /send to send a bundle first.")
        embeds = []
        for item in report:
            labels = [STATUS_LABELS[s] for s in item.statuses]
            embeds.append(
                EmbedSpec(
                    title=f"\U0001f4e6 Bundle #{item.number}",
                    description=f"Sent at: <t:{item.entry.time // 1000}:f>",
                    color=COLOR_PURPLE,
                    fields=_transfer_fields(item.entry.transfers, labels),
                    footer="Statuses update in real time.",
                )
            )
        return Reply(embeds=tuple(embeds))

    async def send(self, user_id: str, options: Options) -> Reply:
        return Reply(
            content=(
                "ℹ️ To send your bundle, use the secure web link provided after /bundle. "
                "You will review and sign all transactions yourself in your wallet."
            )
        )

    async def gas(self, user_id: str, options: Options) -> Reply:
        fee = await estimate_fee(self.ctx.prices)
        usd = f"${fee.usd:.6f}" if fee.usd is not None else "N/A"
        embed = EmbedSpec(
            title="⛽ Solana Gas Tracker",
            color=COLOR_GREEN,
            fields=(
                EmbedField(name="Fee per signature", value=f"{fee.sol:.6f} SOL", inline=True),
                EmbedField(name="Fee in USD", value=usd, inline=True),
            ),
            footer="Fees are approximate and may vary.",
        )
        return Reply(embeds=(embed,))

    async def mempool(self, user_id: str, options: Options) -> Reply:
        try:
            estimate = await estimate_congestion(self.ctx.performance_rpc)
        except ExternalServiceError:
            return Reply(content="❌ Failed to fetch mempool info.")
        embed = EmbedSpec(
            title="\U0001f4ca Solana Mempool Status",
            color=COLOR_YELLOW,
            fields=(
                EmbedField(
                    name="Recent Transactions (last slot)",
                    value=str(estimate.tx_count) if estimate.tx_count is not None else "N/A",
                    inline=True,
                ),
                EmbedField(name="Network Congestion", value=CONGESTION_LABELS[estimate.band], inline=True),
            ),
            footer="Live mempool and congestion info.",
        )
        return Reply(embeds=(embed,))
