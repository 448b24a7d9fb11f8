"""CLI commands for the Order aggregate."""

from __future__ import annotations

import json

import click

from marketplace.application.dto import OmittedOrderDTO, OrderDTO
from marketplace.application.list_orders import ListScope
from marketplace.domain.exceptions import DomainException
from marketplace.domain.model.order import OrderStatus
from marketplace.infrastructure.bootstrap import (
    claim_order_handler,
    create_order_handler,
    delete_order_handler,
    list_orders_handler,
    show_order_handler,
    update_order_status_handler,
)

_STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)

actor_option = click.option("--actor", required=True, help="ID of the acting user.")
id_option = click.option("--id", "order_id", required=True, help="Order ID.")
json_option = click.option("--json", "as_json", is_flag=True, help="Print the API JSON shape.")


def _fail(exc: DomainException) -> click.ClickException:
    return click.ClickException(f"[{exc.http_status}] {exc}")


def _display_order(dto: OrderDTO | OmittedOrderDTO, as_json: bool) -> None:
    """Shared formatting for displaying an order."""
    if as_json:
        click.echo(json.dumps(dto.to_wire(), indent=2, ensure_ascii=False))
        return

    click.echo(f"Order {dto.id}  (status={dto.status})")
    if isinstance(dto, OmittedOrderDTO):
        click.echo(f"Prepared: {dto.prepared_at}")
    else:
        click.echo(f"Customer: {dto.customer}   Shop: {dto.shop}   Rider: {dto.rider or '-'}")
        click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M %Z}")
        if dto.note:
            click.echo(f"Note:     {dto.note}")
    click.echo(f"From:     {dto.shop_address.name}, {dto.shop_address.address}")
    click.echo(f"To:       {dto.customer_address.name}, {dto.customer_address.address}")

    if isinstance(dto, OmittedOrderDTO):
        return

    click.echo()
    click.echo(f"  {'Item':<24} {'Qty':>5} {'Price':>10}")
    click.echo(f"  {'-'*41}")
    for item in dto.items:
        click.echo(f"  {item.name:<24} {item.quantity:>5} {item.price:>10}")
    click.echo(f"  {'-'*41}")
    click.echo(f"  {'Delivery fee':<30} {dto.delivery_fee:>10}")
    click.echo(f"  {'Order Total':<30} {dto.total:>10}")


@click.command("create")
@actor_option
@click.option("--shop", "shop_id", required=True, help="Shop to order from.")
@click.option("--address", "address_id", required=True, help="Delivery address ID.")
@click.option("--note", default="", help="Note for the shop (max 100 chars).")
@json_option
def order_create(actor: str, shop_id: str, address_id: str, note: str, as_json: bool) -> None:
    """Turn the actor's cart for a shop into an order."""
    try:
        dto = create_order_handler().handle(actor, shop_id, address_id, note)
    except DomainException as exc:
        raise _fail(exc)

    _display_order(dto, as_json)


@click.command("show")
@actor_option
@id_option
@json_option
def order_show(actor: str, order_id: str, as_json: bool) -> None:
    """Show an order (redacted for non-participants)."""
    try:
        dto, redacted = show_order_handler().handle(actor, order_id)
    except DomainException as exc:
        raise _fail(exc)

    _display_order(dto, as_json)
    if redacted and not as_json:
        click.echo("(redacted view)")


@click.command("status")
@actor_option
@id_option
@click.option("--to", "status", required=True, type=_STATUS_CHOICE, help="Requested status.")
@json_option
def order_status(actor: str, order_id: str, status: str, as_json: bool) -> None:
    """Move an order to another status."""
    try:
        dto = update_order_status_handler().handle(actor, order_id, status)
    except DomainException as exc:
        raise _fail(exc)

    if as_json:
        _display_order(dto, as_json)
    else:
        click.echo(f"Order {order_id} is now {dto.status}.")


@click.command("claim")
@actor_option
@id_option
@json_option
def order_claim(actor: str, order_id: str, as_json: bool) -> None:
    """Claim a prepared order for delivery."""
    try:
        dto = claim_order_handler().handle(actor, order_id)
    except DomainException as exc:
        raise _fail(exc)

    if as_json:
        _display_order(dto, as_json)
    else:
        click.echo(f"Order {order_id} claimed, now {dto.status}.")


@click.command("delete")
@actor_option
@id_option
def order_delete(actor: str, order_id: str) -> None:
    """Delete one of your canceled orders."""
    try:
        delete_order_handler().handle(actor, order_id)
    except DomainException as exc:
        raise _fail(exc)

    click.echo(f"Order {order_id} deleted.")


@click.command("list")
@actor_option
@click.option(
    "--as", "scope",
    type=click.Choice([s.value for s in ListScope]),
    default=ListScope.CUSTOMER.value,
    show_default=True,
    help="Whose orders to list.",
)
@click.option("--shop", "shop_id", default=None, help="Shop ID (required with --as shop).")
@click.option("--status", default=None, type=_STATUS_CHOICE, help="Only this status.")
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--per-page", default=10, type=int, show_default=True)
@json_option
def order_list(
    actor: str,
    scope: str,
    shop_id: str | None,
    status: str | None,
    page: int,
    per_page: int,
    as_json: bool,
) -> None:
    """List orders, newest first."""
    try:
        dtos = list_orders_handler().handle(
            actor,
            ListScope(scope),
            shop_id=shop_id,
            status=OrderStatus.parse(status) if status else None,
            page=page,
            per_page=per_page,
        )
    except DomainException as exc:
        raise _fail(exc)

    if as_json:
        click.echo(json.dumps([dto.to_wire() for dto in dtos], indent=2, ensure_ascii=False))
        return

    click.echo(f"  {'Order':<36} {'Status':<11} {'Total':>10}  Created")
    click.echo(f"  {'-'*78}")
    for dto in dtos:
        click.echo(
            f"  {dto.id:<36} {dto.status:<11} {dto.total:>10}  "
            f"{dto.created_at:%Y-%m-%d %H:%M}"
        )
