"""
Argot help and usage rendering.

Everything here is pure: the functions read the parser declaration and return
rich Text, they never print and never touch descriptor results, so rendering
the same parser twice yields identical output.

Layout
    <descr>
    USAGE: prog [--int|-i] [--max-depth|-L ...] [--] <operation> [root]

      Positional Arguments:
        <operation>                Operation evaluated on left and right values.

      Options:
        --argot                    License attribution for the argot library.
        --help|-h                  Show this message.
        [--int|-i]                 Values are considered as int.
    <epilog>

Names are padded to a 25 column field followed by one space; longer names push
their description to the right.

Palette keys (overridable through __styles__ in __main__, applied only when the
parser is colorful)
- usage-label, program-name, option-name, cardinal-name, terminator
- section-label, argument-description, description-section, epilog-section
- error-banner, error-message
"""
from collections import defaultdict

from rich.text import Text

from .arguments import ATTRIBUTION, HELP, HELP_SHORT

PADDING = 25
INDENT = " " * 4


def painter(parser, /):
    """
    Build the text(fragment, key) helper used by every renderer.

    The helper turns any fragment into Text and, when the parser is colorful,
    styles it with the palette entry named by key. Falsy fragments become an
    empty Text so optional sections can be passed through unconditionally.
    """
    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "description-section": "italic #A3A3A3",
        "epilog-section": "#737373",

        # === Sections / descriptors ===
        "section-label": "bold #FFFFFF",
        "option-name": "bold #00E6FF",
        "cardinal-name": "bold #FFD600",
        "terminator": "#9CA3AF",
        "argument-description": "#9CA3AF",

        # === Faults ===
        "error-banner": "bold #EF4444",
        "error-message": "#F97316",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if parser.colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text()
        if isinstance(fragment, Text):
            return fragment.copy() if parser.colorful else Text(fragment.plain)
        return Text(str(fragment), styler(style))

    return text


def _option_names(parser, option):
    names = []
    if parser.long_prefix:
        names.append(parser.long_prefix + option.name)
    if parser.short_prefix and option.short is not None:
        names.append(parser.short_prefix + option.short)
    return "|".join(names) or option.name


def _option_label(parser, option):
    label = _option_names(parser, option)
    if option.valued:
        label += " ..."
    return label if option.required else f"[{label}]"


def _cardinal_label(parser, position, cardinal):
    return f"<{cardinal.name}>" if position < parser.required else f"[{cardinal.name}]"


def _builtins(parser):
    """
    Yield (label, description) for the built-in entries that are reachable.
    """
    if parser.long_prefix:
        yield parser.long_prefix + ATTRIBUTION, f"License attribution for the {ATTRIBUTION} library."
    if not parser.nohelp:
        names = []
        if parser.long_prefix:
            names.append(parser.long_prefix + HELP)
        if parser.short_prefix:
            names.append(parser.short_prefix + HELP_SHORT)
        if names:
            yield "|".join(names), "Show this message."


def format_usage(parser, /):
    """
    Render the one-line usage summary.

    An explicit usage text declared on the parser replaces the synthesized
    part; the "USAGE:" label is always kept.
    """
    text = painter(parser)

    usage = Text()
    usage.append(text("USAGE", "usage-label")).append(": ")

    if parser.usage:
        return usage.append(text(parser.usage))

    usage.append(text(parser.name, "program-name"))
    for option in parser.options:
        usage.append(" ").append(text(_option_label(parser, option), "option-name"))
    if parser.terminator:
        usage.append(" ").append(text(f"[{parser.terminator}]", "terminator"))
    for position, cardinal in enumerate(parser.cardinals):
        usage.append(" ").append(text(_cardinal_label(parser, position, cardinal), "cardinal-name"))
    return usage


def _entry(text, label, descr, style):
    line = Text(INDENT).append(text(label, style))
    if descr:
        line.append(" " * max(PADDING - len(label), 0)).append(" ").append(text(descr, "argument-description"))
    return line


def format_help(parser, /):
    """
    Render the complete help screen: description, usage, positional
    arguments, options (built-ins first) and epilog, in that order.
    """
    text = painter(parser)
    lines = []

    if parser.descr:
        lines.append(text(parser.descr, "description-section"))
    lines.append(format_usage(parser))

    if parser.cardinals:
        lines.append(Text())
        lines.append(Text("  ").append(text("Positional Arguments", "section-label")).append(":"))
        for position, cardinal in enumerate(parser.cardinals):
            lines.append(_entry(text, _cardinal_label(parser, position, cardinal), cardinal.descr, "cardinal-name"))

    lines.append(Text())
    lines.append(Text("  ").append(text("Options", "section-label")).append(":"))
    for label, descr in _builtins(parser):
        lines.append(_entry(text, label, descr, "option-name"))
    for option in parser.options:
        lines.append(_entry(text, _option_label(parser, option), option.descr, "option-name"))

    if parser.epilog:
        lines.append(text(parser.epilog, "epilog-section"))
    return Text("\n").join(lines)


def format_attribution(parser, /):
    """
    Render the license notice printed by the attribution keyword.
    """
    text = painter(parser)
    return Text("\n").join((
        Text("Copyright (c) 2026 The argot authors"),
        Text.assemble(
            "This program uses ",
            text(ATTRIBUTION, "program-name"),
            ", a MIT-licensed Python library, for its command-line interface.",
        ),
    ))


__all__ = (
    "PADDING",
    "painter",
    "format_usage",
    "format_help",
    "format_attribution",
)
