"""CLI entry point for the storefront demo."""

from __future__ import annotations

from functools import partial

import click


@click.group()
def main() -> None:
    """Storefront event bus demo."""


@main.command()
def events() -> None:
    """List every registered event and its payload fields."""
    from .bus.schemas import describe_registry

    for name, fields in describe_registry():
        click.echo(f"{name:<26} {', '.join(fields) if fields else '(none)'}")


@main.command()
@click.option("--config", default=None, help="Config file path (TOML)")
@click.option(
    "--log-format",
    type=click.Choice(["json", "console"]),
    default=None,
    help="Override the configured log format",
)
def demo(config: str | None, log_format: str | None) -> None:
    """Run a scripted cart session and print what it emitted."""
    import asyncio

    from .core.config import load_settings
    from .observability.logger import new_trace_id, setup_logging

    overrides: dict = {}
    if log_format:
        overrides["observability"] = {"log_format": log_format}
    settings = load_settings(config_path=config, overrides=overrides)
    setup_logging(settings.observability.log_level, settings.observability.log_format)
    new_trace_id()

    asyncio.run(_run_demo(settings))


def _demo_event_names() -> list:
    """Every registered event except the UI catalog, in registry order."""
    from .core.enums import EventName
    from .facades.ui import UIEvents

    return [name for name in EventName if name not in UIEvents.EVENT_NAMES]


async def _run_demo(settings) -> None:
    # Runs inside the event loop so notification expiry timers can be scheduled.
    from .app import Storefront
    from .bus.schemas import is_signal

    emitted: list[str] = []

    with Storefront.create(settings=settings) as app:
        for name in _demo_event_names():
            if is_signal(name):
                app.bus.subscribe_signal(name, partial(emitted.append, name.value))
            else:
                app.bus.subscribe(name, lambda _payload, n=name.value: emitted.append(n))

        app.analytics.page_view("/shop", title="Shop")
        app.cart.add_item("1", "Wireless Mouse", 29.99)
        app.cart.add_item("2", "Laptop Stand", 49.99)
        app.cart.add_item("1", "Wireless Mouse", 29.99)
        app.cart.update_quantity("2", 0)
        app.cart.checkout()

        click.echo("Events:")
        for value in emitted:
            click.echo(f"  {value}")

        click.echo("Cart:")
        for item in app.cart.items:
            click.echo(f"  {item.name} x{item.quantity} @ {item.price:.2f}")
        click.echo(
            f"  total items={app.cart.total_items} price={app.cart.total_price:.2f}"
        )

        click.echo("Notifications:")
        for n in app.notifications.notifications:
            click.echo(f"  [{n.kind.value}] {n.message}")

        app.cart.clear_cart()
        click.echo(f"After clear: {len(app.cart.items)} items")
