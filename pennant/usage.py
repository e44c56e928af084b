"""
Pennant usage/help rendering.

Layout (plain mode, width 80)

    tool sub 1.2.0
    usage:
      cli> tool sub [named flags] [source] [target]
      named flags:
        -h --help : (type: boolean, default: false)
          show the help
        -c --count: (type: integer, default: 1)
          how many times
      wild flags:
        [0] source: (type: text, default: "")
        [1] target: (type: text, default: "out")
      commands:
        ...

- The header is the full command path followed by the version.
- Ids are padded to the widest id of their section.
- Help text is wrapped to the command width with a 6-space hanging indent.
- Text defaults are quoted; other kinds use their canonical rendering.

Palette keys
- program-name, version, usage-label, usage-section, section-label
- flag-id, wild-id, kind, default, flag-help
- children, children-description, panel-title

Define a mapping named __styles__ in __main__ to override any palette entry.
Styling applies only when the command is colorful.
"""
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .kinds import Kind, render as format

_INDENT = 6


def render(command, /, console=None):
    """
    build the help renderable for a command.
    """
    console = console or Console()
    styles = defaultdict(str, {
        "program-name": "bold #FF4D94",
        "version": "#9CA3AF",
        "usage-label": "bold #00E6FF",
        "usage-section": "bold #36C5F0",
        "section-label": "bold #FFFFFF",
        "flag-id": "bold #22C55E",
        "wild-id": "bold #FFD600",
        "kind": "#36C5F0",
        "default": "#FF4D94",
        "flag-help": "#9CA3AF",
        "children": "bold #36C5F0",
        "children-description": "#9CA3AF",
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if command.colorful else ""

    def text(fragment, style=""):
        return Text(str(fragment), styler(style))

    width = command.width - 4 * command.fancy
    registry = command.registry
    named, wild = registry.max_id_width()

    head = Text(" ").join(text(step.name, "program-name") for step in command.path)
    if command.version:
        head.append(" ").append(text(command.version, "version"))
    renders = [head]

    def entry(flag, padding, style):
        default = format(flag.kind, flag.default)
        if flag.kind is Kind.TEXT:
            default = '"%s"' % default
        line = Text.assemble(
            " " * 4,
            text(flag.name(padding), style),
            ": (type: ",
            text(flag.kind, "kind"),
            ", default: ",
            text(default, "default"),
            ")",
        )
        if flag.help:
            for segment in text(flag.help, "flag-help").wrap(console, width - _INDENT):
                line.append("\n").append(" " * _INDENT).append(segment)
        return line

    if registry.named or registry.wild:
        renders.append(text("usage", "usage-label").append(":"))
        synopsis = Text.assemble("  cli> ", text(" ".join(step.name for step in command.path), "program-name"))
        if registry.named:
            synopsis.append(" ").append(text("[named flags]", "usage-section"))
        for flag in registry.wild:
            synopsis.append(" ").append(text("[%s]" % flag.placeholder, "usage-section"))
        renders.append(synopsis)

        if registry.named:
            renders.append(Text("  ").append(text("named flags", "section-label")).append(":"))
            renders.extend(entry(flag, named, "flag-id") for flag in registry.named)

        if registry.wild:
            renders.append(Text("  ").append(text("wild flags", "section-label")).append(":"))
            renders.extend(entry(flag, wild, "wild-id") for flag in registry.wild)

    if command.children:
        renders.append(Text("  ").append(text("commands", "section-label")).append(":"))
        padding = max(map(len, command.children))
        for name, child in command.children.items():
            line = Text.assemble(" " * 4, text(name.ljust(padding), "children"))
            if child.descr:
                line.append("  ").append(text(child.descr, "children-description"))
            renders.append(line)

    renderable = Group(*renders)
    if command.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{command.name} HELP".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
            width=command.width,
        )
    return renderable


__all__ = (
    "render",
)
