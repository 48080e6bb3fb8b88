"""Built-in CLI sub-commands for adcomponents.

* :mod:`~adcomponents.commands.components` -- ``list``, ``show``, ``call``
  and ``fallback``, registered directly on the root app.
* :mod:`~adcomponents.commands.config` -- the ``config`` sub-command group
  for viewing and modifying global settings.
"""
