# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""CLI command group for player analytics developer tooling.

Commands
--------
  player-analytics parse-url <media_url>
  player-analytics storage-key <video_id>
  player-analytics replay (--media-url URL | --video-type T --video-id ID --ping-url URL)
                          [--event play] [--event pause] ... [--metadata name=value] ...

``replay`` drives a real PlayerAnalytics instance through the given lifecycle
sequence and then destroys it, so every ping goes to the collector exactly as
a player would send it.

The ping sender is injected for testability via ``make_cli_group()``. In
production it is the default httpx sender.
"""

from __future__ import annotations

import asyncio
import logging

import click
from rich.console import Console

from player_analytics.analytics import PlayerAnalytics
from player_analytics.config.settings import PlayerAnalyticsSettings
from player_analytics.lib.errors import ConfigurationError, TransportError
from player_analytics.options import (
    ModelExplicitOptions,
    ModelMediaUrlOptions,
    parse_options,
    resolve_target,
)
from player_analytics.ping.sender import PingSender
from player_analytics.session.identity import build_storage_key

console = Console()
error_console = Console(stderr=True)

_REPLAY_EVENTS = ("play", "resume", "ready", "pause", "end")


def _parse_metadata(pairs: tuple[str, ...]) -> list[dict[str, str]]:
    metadata: list[dict[str, str]] = []
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(
                f"Expected name=value, got {pair!r}", param_hint="--metadata"
            )
        metadata.append({name: value})
    return metadata


async def _replay(
    options: ModelExplicitOptions | ModelMediaUrlOptions,
    events: tuple[str, ...],
    sender: PingSender | None,
    settings: PlayerAnalyticsSettings,
) -> str | None:
    async with PlayerAnalytics(options, sender=sender, settings=settings) as analytics:
        for name in events:
            await getattr(analytics, name)()
            console.print(f"  [green]✓[/green] {name}")
        return analytics.session_id


def make_cli_group(sender: PingSender | None = None) -> click.Group:
    """Construct the ``player-analytics`` Click group.

    Args:
        sender: Ping sender used by ``replay``. None selects the default
            httpx sender.
    """

    @click.group("player-analytics")
    @click.option(
        "--log-level",
        default=None,
        type=click.Choice(
            ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
        ),
        help="Log level (defaults to PLAYER_ANALYTICS_LOG_LEVEL).",
    )
    @click.pass_context
    def cli(ctx: click.Context, log_level: str | None) -> None:
        """Playback telemetry developer tools."""
        settings = PlayerAnalyticsSettings()
        logging.basicConfig(
            level=(log_level or settings.log_level).upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        ctx.obj = settings

    @cli.command("parse-url")
    @click.argument("media_url")
    @click.pass_obj
    def parse_url(settings: PlayerAnalyticsSettings, media_url: str) -> None:
        """Show the video type, id and ping URL derived from a media URL."""
        try:
            target = resolve_target(
                ModelMediaUrlOptions(media_url=media_url), settings.collector_base_url
            )
        except ConfigurationError as e:
            raise click.ClickException(e.message)
        console.print(f"  [bold]video_type:[/bold] {target.video_type}")
        console.print(f"  [bold]video_id:[/bold]   {target.video_id}")
        console.print(f"  [bold]ping_url:[/bold]   {target.ping_url}")

    @cli.command("storage-key")
    @click.argument("video_id")
    @click.pass_obj
    def storage_key(settings: PlayerAnalyticsSettings, video_id: str) -> None:
        """Show the key under which the session id for a video is persisted."""
        console.print(build_storage_key(video_id, settings.session_storage_key_prefix))

    @cli.command("replay")
    @click.option("--media-url", default=None, help="Media URL to derive the target from.")
    @click.option(
        "--video-type",
        default=None,
        type=click.Choice(["live", "vod"], case_sensitive=False),
        help="Video type (with --video-id and --ping-url).",
    )
    @click.option("--video-id", default=None, help="Video or live-stream id.")
    @click.option("--ping-url", default=None, help="Collector endpoint.")
    @click.option(
        "--event",
        "events",
        multiple=True,
        type=click.Choice(_REPLAY_EVENTS, case_sensitive=False),
        help="Lifecycle call to make, in order. Repeatable.",
    )
    @click.option(
        "--metadata",
        "metadata_pairs",
        multiple=True,
        help="Session metadata as name=value. Repeatable.",
    )
    @click.pass_obj
    def replay(
        settings: PlayerAnalyticsSettings,
        media_url: str | None,
        video_type: str | None,
        video_id: str | None,
        ping_url: str | None,
        events: tuple[str, ...],
        metadata_pairs: tuple[str, ...],
    ) -> None:
        """Send a lifecycle sequence to the collector, then destroy the session."""
        raw: dict[str, object] = {"metadata": _parse_metadata(metadata_pairs)}
        if media_url:
            raw["media_url"] = media_url
        else:
            raw.update(
                video_type=video_type and video_type.lower(),
                video_id=video_id,
                ping_url=ping_url,
            )

        try:
            options = parse_options(raw)
            resolve_target(options, settings.collector_base_url)
        except ConfigurationError as e:
            raise click.ClickException(e.message)

        names = tuple(name.lower() for name in events) or ("play", "pause")
        try:
            session_id = asyncio.run(_replay(options, names, sender, settings))
        except TransportError as e:
            error_console.print(f"[red]✗[/red] {e.message}")
            raise click.ClickException("Ping delivery failed.")

        if session_id:
            console.print(f"  [bold]session_id:[/bold] {session_id}")
        else:
            console.print("  No session id received.")

    return cli


#: Default ``player-analytics`` group using the httpx sender.
cli = make_cli_group()


def main() -> None:
    cli()


__all__ = ["cli", "main", "make_cli_group"]
