"""Profile commands -- create, inspect and select store connections.

Provides the ``wcapi profile`` sub-command group.  A profile records the
store URL, API version/prefix, TLS setting and *where* the consumer key
and secret come from (``env:``, ``file:``, ``prompt`` or ``value:``).
"""

from __future__ import annotations

from typing import Optional

import typer

from wcapi.exceptions import WcapiError
from wcapi.models import DEFAULT_API_PREFIX, DEFAULT_VERSION, Profile, StoreEndpoint
from wcapi.output import error, format_response, info, print_data, success, warning

profile_app = typer.Typer(no_args_is_help=True)


@profile_app.command("add")
def profile_add(
    name: str = typer.Argument(help="Profile name."),
    store_url: str = typer.Option(..., "--url", help="Store base URL, e.g. https://shop.example."),
    key_source: str = typer.Option(
        "env:WC_CONSUMER_KEY", "--key-source", help="Consumer key source (env:, file:, prompt, value:)."
    ),
    secret_source: str = typer.Option(
        "env:WC_CONSUMER_SECRET",
        "--secret-source",
        help="Consumer secret source (env:, file:, prompt, value:).",
    ),
    version: str = typer.Option(DEFAULT_VERSION, "--api-version", help="API version segment."),
    api: bool = typer.Option(False, "--api/--legacy", help="Use the alternate API prefix."),
    api_prefix: str = typer.Option(DEFAULT_API_PREFIX, "--api-prefix", help="Prefix used with --api."),
    insecure: bool = typer.Option(False, "--insecure", help="Skip TLS certificate verification."),
    timeout: float = typer.Option(30.0, "--timeout", help="Request timeout in seconds."),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing profile."),
) -> None:
    """Create a profile for a store.

    Example::

        wcapi profile add shop --url https://shop.example --api
    """
    from wcapi.config import profile_exists, save_profile

    try:
        StoreEndpoint(base_url=store_url)
    except ValueError as exc:
        error(f"Invalid store URL {store_url!r}: {exc}")
        raise typer.Exit(code=2) from None

    if profile_exists(name) and not force:
        error(f"Profile '{name}' already exists (use --force to overwrite)")
        raise typer.Exit(code=2)

    if secret_source.startswith("value:"):
        warning("The consumer secret will be stored in plain text in the profile file.")
    if insecure:
        warning("TLS certificate verification is disabled for this profile.")

    profile = Profile(
        name=name,
        store_url=store_url,
        consumer_key_source=key_source,
        consumer_secret_source=secret_source,
        version=version,
        api=api,
        api_prefix=api_prefix,
        verify_ssl=not insecure,
        timeout=timeout,
    )
    save_profile(profile)
    success(f"Profile '{name}' saved.")


@profile_app.command("list")
def profile_list() -> None:
    """List profile names, marking the default with ``*``."""
    from wcapi.config import list_profiles, load_global_config

    try:
        default = load_global_config().default_profile
    except WcapiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    names = list_profiles()
    if not names:
        info("No profiles. Create one with 'wcapi profile add'.")
        return
    for name in names:
        print_data(f"* {name}" if name == default else f"  {name}")


@profile_app.command("show")
def profile_show(
    name: Optional[str] = typer.Argument(None, help="Profile name (default: active profile)."),
) -> None:
    """Show a profile and the API root it resolves to."""
    from wcapi.config import load_profile, resolve_profile

    try:
        profile = load_profile(name) if name else resolve_profile()
    except WcapiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    data = profile.model_dump(mode="json")
    data["root_url"] = profile.client_options().endpoint_for(profile.store_url).root_url
    format_response(data)


@profile_app.command("remove")
def profile_remove(
    name: str = typer.Argument(help="Profile name."),
) -> None:
    """Delete a profile (and clear it as the default)."""
    from wcapi.config import delete_profile, load_global_config, save_global_config

    try:
        delete_profile(name)
        config = load_global_config()
        if config.default_profile == name:
            config.default_profile = None
            save_global_config(config)
    except WcapiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    success(f"Profile '{name}' removed.")


@profile_app.command("use")
def profile_use(
    name: str = typer.Argument(help="Profile name."),
) -> None:
    """Make a profile the default."""
    from wcapi.config import load_global_config, profile_exists, save_global_config

    if not profile_exists(name):
        error(f"Profile '{name}' not found")
        raise typer.Exit(code=2)
    try:
        config = load_global_config()
    except WcapiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    config.default_profile = name
    save_global_config(config)
    success(f"Default profile set to '{name}'.")
