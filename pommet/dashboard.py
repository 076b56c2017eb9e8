"""Terminal dashboard that shows the managed plugins and their state."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from pommet.plugin import Plugin, PluginStatus

PROJECT_NAME = "pommet"
PROJECT_VERSION = "v0.1.0"
PROJECT_DESCRIPTION = "php mini development toolkit"

STATUS_TEXT = {PluginStatus.ON: "RUNNING", PluginStatus.OFF: "STOPPED"}

TABLE_TITLE = " Plugins (↑↓/jk: navigate, Space: toggle) "
EMPTY_TITLE = "No Toggleable Plugins"
EMPTY_MESSAGE = "No toggleable plugins available"
HIGHLIGHT_SYMBOL = "► "
NAVIGATION_LINE = "Navigation: ↑↓ or j/k • Toggle: Space • Quit: q"
ACCESS_LINE = "Access: Apache at localhost • phpMyAdmin at localhost/phpmyadmin"

_MIN_WIDTH = 24


@dataclass(frozen=True)
class TableRow:
    """One line of the plugin table."""

    name: str
    status: str
    selected: bool


class Dashboard:
    """Builds the dashboard view for a list of plugins and a selection."""

    def __init__(self, plugins: Sequence[Plugin], selected_index: int = 0) -> None:
        self.plugins = plugins
        self.selected_index = selected_index

    def header_lines(self) -> list[str]:
        """Text of the project information panel."""
        return [PROJECT_NAME, PROJECT_VERSION, PROJECT_DESCRIPTION]

    def table_rows(self) -> list[TableRow]:
        """Rows for the toggleable plugins, in order, marking the selected one."""
        toggleable = [plugin for plugin in self.plugins if plugin.is_toggleable]
        return [
            TableRow(
                name=plugin.name,
                status=STATUS_TEXT[plugin.status],
                selected=position == self.selected_index,
            )
            for position, plugin in enumerate(toggleable)
        ]

    def instruction_lines(self) -> list[str]:
        """Text of the quick guide panel."""
        return [NAVIGATION_LINE, ACCESS_LINE]

    def render(self, term) -> str:
        """Return the whole screen as a string drawn for a blessed terminal."""
        width = max(term.width, _MIN_WIDTH)
        lines: list[str] = []
        lines.extend(self._render_header(term, width))
        lines.extend(self._render_table(term, width))
        lines.extend(self._render_instructions(term, width))
        return term.home + term.clear + "\n".join(lines)

    def _render_header(self, term, width: int) -> list[str]:
        half = width // 2
        name, version, description = self.header_lines()
        left = _box(
            term,
            " Project Info ",
            [term.bold_magenta(name), term.green(version)],
            half,
            term.magenta,
            centered=True,
        )
        right = _box(
            term,
            " Details ",
            [term.bright_white(description)],
            width - half,
            term.blue,
            centered=True,
        )
        right.extend([" " * (width - half)] * (len(left) - len(right)))
        return [a + b for a, b in zip(left, right)]

    def _render_table(self, term, width: int) -> list[str]:
        rows = self.table_rows()
        if not rows:
            return _box(
                term,
                EMPTY_TITLE,
                [term.red(EMPTY_MESSAGE)],
                width,
                term.red,
                centered=True,
            )
        inner = width - 2
        name_width = max(inner * 70 // 100 - len(HIGHLIGHT_SYMBOL), 1)
        body = [
            term.bold_magenta(" " * len(HIGHLIGHT_SYMBOL) + "Plugin Name".ljust(name_width) + "Status"),
            "",
        ]
        for row in rows:
            prefix = HIGHLIGHT_SYMBOL if row.selected else " " * len(HIGHLIGHT_SYMBOL)
            text = prefix + row.name.ljust(name_width) + row.status
            if row.selected:
                body.append(term.bold_bright_white_on_blue(term.ljust(text, inner)))
            elif row.status == STATUS_TEXT[PluginStatus.ON]:
                body.append(term.bold_green(text))
            else:
                body.append(term.red(text))
        return _box(term, TABLE_TITLE, body, width, term.blue, centered=False)

    def _render_instructions(self, term, width: int) -> list[str]:
        body = [term.yellow(line) for line in self.instruction_lines()]
        return _box(term, " Quick Guide ", body, width, term.magenta, centered=True)


def _box(
    term,
    title: str,
    body: list[str],
    width: int,
    border: Callable[[str], str],
    *,
    centered: bool,
) -> list[str]:
    """Frame ``body`` in a border ``width`` columns wide with ``title`` on top."""
    inner = max(width - 2, 0)
    shown_title = term.truncate(title, inner)
    top = border("┌" + shown_title + "─" * (inner - term.length(shown_title)) + "┐")
    bottom = border("└" + "─" * inner + "┘")
    framed = [top]
    for line in body:
        line = term.truncate(line, inner)
        padded = term.center(line, inner) if centered else term.ljust(line, inner)
        framed.append(border("│") + padded + border("│"))
    framed.append(bottom)
    return framed