"""Typer CLI: init-db, serve-api, list-services, close-account, set-kyc, verify-document."""

from __future__ import annotations

from pathlib import Path

import typer

from account_opening import SERVICE_NAMES
from account_opening.config import get_config, get_service_port
from account_opening.db import init_db, session_scope
from account_opening.errors import ServiceError
from account_opening.logging_config import setup_logging
from account_opening.repository import (
    account_repository,
    customer_repository,
    document_repository,
)
from account_opening.request_context import new_correlation_id, set_correlation_id
from account_opening.services import AccountService, CustomerService, DocumentService

app = typer.Typer(help="Account opening services CLI")


def _ensure_db(config_path: str | None = None) -> None:
    config = get_config(config_path)
    db_url = config.get("database", {}).get("url", "sqlite:///./data/account_opening.db")
    if db_url.startswith("sqlite:///") and ":memory:" not in db_url:
        Path(db_url.replace("sqlite:///", "")).parent.mkdir(parents=True, exist_ok=True)
    echo = config.get("database", {}).get("echo", False)
    setup_logging(config.get("app", {}).get("log_level", "INFO"))
    init_db(db_url, echo=echo)
    set_correlation_id(new_correlation_id())


@app.command("init-db")
def init_db_cmd(
    config: str | None = typer.Option(None, "--config", "-c", help="Config YAML path"),
) -> None:
    """Create the SQLite schema (Postgres schemas are managed by Alembic)."""
    _ensure_db(config)
    typer.echo("Database ready.")


@app.command("list-services")
def list_services(
    config: str | None = typer.Option(None, "--config", "-c", help="Config YAML path"),
) -> None:
    """Show each service and the port it binds to by default."""
    cfg = get_config(config)
    cors_services = (cfg.get("cors") or {}).get("services") or []
    for name in SERVICE_NAMES:
        cors = "cors" if name in cors_services else "-"
        typer.echo(f"{name:<14} port={get_service_port(cfg, name)}  {cors}")


@app.command("serve-api")
def serve_api(
    service: str | None = typer.Option(
        None, "--service", "-s", help="account | customer | document | notification (default: all)"
    ),
    config: str | None = typer.Option(None, "--config", "-c", help="Config YAML path"),
    host: str | None = typer.Option(None, "--host", "-h", help="Bind host"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
) -> None:
    """Start one service, or all four in a single app."""
    if service is not None and service not in SERVICE_NAMES:
        typer.echo(f"service must be one of {list(SERVICE_NAMES)}", err=True)
        raise typer.Exit(1)
    cfg = get_config(config)
    h = host or cfg.get("api", {}).get("host", "0.0.0.0")
    p = port if port is not None else get_service_port(cfg, service)
    _ensure_db(config)
    import uvicorn

    from account_opening.api import create_app

    uvicorn.run(
        create_app([service] if service else None, config_path=config),
        host=h,
        port=p,
        reload=False,
    )


@app.command("close-account")
def close_account_cmd(
    account_id: int = typer.Option(..., "--id", help="Account ID to close"),
    config: str | None = typer.Option(None, "--config", "-c", help="Config YAML path"),
) -> None:
    """Mark an account inactive."""
    _ensure_db(config)
    try:
        with session_scope() as session:
            account = AccountService(account_repository(session)).close_account(account_id)
    except ServiceError as e:
        typer.echo(e.message, err=True)
        raise typer.Exit(1) from e
    typer.echo(f"Closed account {account.id} ({account.account_number})")


@app.command("set-kyc")
def set_kyc_cmd(
    customer_id: int = typer.Option(..., "--id", help="Customer ID"),
    verified: bool = typer.Option(True, "--verified/--unverified", help="New KYC status"),
    config: str | None = typer.Option(None, "--config", "-c", help="Config YAML path"),
) -> None:
    """Set a customer's KYC verification status."""
    _ensure_db(config)
    try:
        with session_scope() as session:
            CustomerService(customer_repository(session)).update_kyc_status(customer_id, verified)
    except ServiceError as e:
        typer.echo(e.message, err=True)
        raise typer.Exit(1) from e
    typer.echo(f"Customer {customer_id} kyc_verified={verified}")


@app.command("verify-document")
def verify_document_cmd(
    document_id: int = typer.Option(..., "--id", help="Document ID"),
    verified: bool = typer.Option(True, "--verified/--unverified", help="New verification status"),
    config: str | None = typer.Option(None, "--config", "-c", help="Config YAML path"),
) -> None:
    """Mark a document verified (or not)."""
    _ensure_db(config)
    try:
        with session_scope() as session:
            DocumentService(document_repository(session)).verify_document(document_id, verified)
    except ServiceError as e:
        typer.echo(e.message, err=True)
        raise typer.Exit(1) from e
    typer.echo(f"Document {document_id} verified={verified}")


if __name__ == "__main__":
    app()
