# evtail/cli/constants.py
"""CLI constants and styling."""

BANNER = r"""
    [bold #5e81ac]█▀▀[/] [bold #81a1c1]█ █[/] [bold #88c0d0]▀█▀[/] [bold #8fbcbb]▄▀█[/] [bold #a3be8c]█[/] [bold #4c566a]█[/]
    [bold #5e81ac]██▄[/] [bold #81a1c1]▀▄▀[/] [bold #88c0d0] █ [/] [bold #8fbcbb]█▀█[/] [bold #a3be8c]█[/] [bold #4c566a]█▄▄[/]

    [#4c566a]tail and filter platform event feeds[/#4c566a]
"""

SOURCE_ENV_VAR = "EVTAIL_SOURCE"
