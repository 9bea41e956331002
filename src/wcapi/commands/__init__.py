"""Built-in CLI sub-commands for wcapi.

This package groups the Typer command modules that form the CLI's
top-level command tree:

* :mod:`~wcapi.commands.request` -- ``get``, ``post``, ``put``, ``delete``,
  ``options`` and ``sign``, registered directly on the root app.
* :mod:`~wcapi.commands.profile` -- the ``profile`` sub-application for
  managing store connections.
"""
