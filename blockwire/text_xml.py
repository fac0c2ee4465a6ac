"""A small tag markup for chat text, in the style of ``<bold>hi</bold>``."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Iterator, Optional, Union

from blockwire.ident import Identifier
from blockwire.text import Text, TextComponent
from blockwire.text_style import TextColour, colour_from_name


@dataclass(frozen=True)
class XmlTagOpen:
    name: str


@dataclass(frozen=True)
class XmlTagClose:
    name: str


@dataclass(frozen=True)
class XmlData:
    content: str


XmlEvent = Union[XmlTagOpen, XmlTagClose, XmlData]


class XmlReader:
    """Splits markup into open tags, close tags and text.

    A backslash escapes the next character. Angle brackets nest inside a tag.
    An unterminated tag ends the stream.
    """

    def __init__(self, xml: str) -> None:
        self._xml = xml
        self._i = 0

    def __iter__(self) -> Iterator[XmlEvent]:
        return self

    def _char(self, index: int) -> Optional[str]:
        return self._xml[index] if 0 <= index < len(self._xml) else None

    def __next__(self) -> XmlEvent:
        first = self._char(self._i)
        if first is None:
            raise StopIteration
        if first == "<":
            return self._read_tag()
        return self._read_data()

    def _read_tag(self) -> XmlEvent:
        self._i += 1
        ch = self._char(self._i)
        if ch is None:
            raise StopIteration
        closing = ch == "/"
        if closing:
            self._i += 1
        depth = 1
        escaped = False
        name: list[str] = []
        while True:
            self._i += 1
            ch = self._char(self._i - 1)
            if ch is None:
                raise StopIteration
            if escaped:
                name.append(ch)
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == "<":
                depth += 1
                name.append(ch)
            elif ch == ">":
                depth -= 1
                if depth == 0:
                    break
                name.append(ch)
            else:
                name.append(ch)
        text = "".join(name).strip()
        return XmlTagClose(text) if closing else XmlTagOpen(text)

    def _read_data(self) -> XmlEvent:
        escaped = False
        content: list[str] = []
        while True:
            self._i += 1
            ch = self._char(self._i - 1)
            if ch is None:
                break
            if escaped:
                content.append(ch)
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == "<":
                self._i -= 1
                break
            else:
                content.append(ch)
        return XmlData("".join(content))


@dataclass(frozen=True)
class _Style:
    colour: Optional[TextColour] = None
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    strikethrough: Optional[bool] = None
    obfuscate: Optional[bool] = None
    insertion: Optional[str] = None
    font: Optional[Identifier] = None

    def apply(self, component: TextComponent) -> TextComponent:
        if self.colour is not None:
            component = component.colour(self.colour)
        if self.bold is not None:
            component = component.bold(self.bold)
        if self.italic is not None:
            component = component.italic(self.italic)
        if self.underline is not None:
            component = component.underline(self.underline)
        if self.strikethrough is not None:
            component = component.strikethrough(self.strikethrough)
        if self.obfuscate is not None:
            component = component.obfuscate(self.obfuscate)
        if self.insertion is not None:
            component = component.insertion(self.insertion)
        if self.font is not None:
            component = component.font(self.font)
        return component


_BOOLEAN_TAGS: dict[str, tuple[str, ...]] = {
    "bold": ("bold", "b", "strong"),
    "italic": ("italic", "i", "em", "emphasis", "emphasise", "emphasize"),
    "underline": ("underline", "u", "ul", "underlined", "under"),
    "strikethrough": ("strikethrough", "st", "strike"),
    "obfuscate": ("obfuscate", "obf", "obfuscated"),
}
_FLAG_FOR_TAG: dict[str, tuple[str, bool]] = {}
for _field, _names in _BOOLEAN_TAGS.items():
    for _name in _names:
        _FLAG_FOR_TAG[_name] = (_field, True)
        _FLAG_FOR_TAG["!" + _name] = (_field, False)

_KEYBIND_PREFIXES = ("key:", "keybind:", "keybinding:")
_TRANSLATE_PREFIXES = ("lang:", "translate:", "translation:", "translatable:")
_INSERTION_PREFIXES = ("insert:", "insertion:")


def _strip_any(name: str, prefixes: tuple[str, ...]) -> Optional[str]:
    for prefix in prefixes:
        if name.startswith(prefix):
            return name[len(prefix):]
    return None


def _try_colour(name: str) -> Optional[TextColour]:
    try:
        return colour_from_name(name)
    except ValueError:
        return None


def text_from_xml(xml: str, allow_interaction: bool, allow_newline: bool) -> Text:
    """Build text from markup. Unknown tags are tried as colour names, otherwise ignored."""
    components: list[TextComponent] = []
    _parse(XmlReader(xml), components, None, allow_interaction, allow_newline, _Style())
    return Text(components)


def _parse(
    reader: XmlReader,
    components: list[TextComponent],
    current_tag: Optional[str],
    allow_interaction: bool,
    allow_newline: bool,
    style: _Style,
) -> None:
    current_content = ""

    def push(factory: Callable[[str], TextComponent], content: str) -> None:
        nonlocal current_content
        if content:
            wrapper = TextComponent.of_literal("")
            components.append(replace(wrapper, extra=(style.apply(factory(content)),)))
            current_content = ""

    for event in reader:
        if isinstance(event, XmlTagOpen):
            push(TextComponent.of_literal, current_content)
            name = event.name
            inner = style
            if name.startswith("colour:") or name.startswith("color:"):
                colour = _try_colour(name.split(":", 1)[1])
                if colour is not None:
                    inner = replace(inner, colour=colour)
            elif name in ("!colour", "colour"):
                inner = replace(inner, colour=None)
            elif name in _FLAG_FOR_TAG:
                field_name, flag = _FLAG_FOR_TAG[name]
                inner = replace(inner, **{field_name: flag})
            elif name == "reset":
                inner = _Style()
            elif _strip_any(name, _KEYBIND_PREFIXES) is not None:
                push(TextComponent.of_keybind, _strip_any(name, _KEYBIND_PREFIXES))
                continue
            elif _strip_any(name, _TRANSLATE_PREFIXES) is not None:
                push(TextComponent.of_translate, _strip_any(name, _TRANSLATE_PREFIXES))
                continue
            elif allow_interaction and _strip_any(name, _INSERTION_PREFIXES) is not None:
                inner = replace(inner, insertion=_strip_any(name, _INSERTION_PREFIXES))
            elif name.startswith("font:"):
                inner = replace(inner, font=Identifier.parse(name[len("font:"):]))
            elif allow_newline and name in ("newline", "nl"):
                push(TextComponent.of_literal, "\n")
                continue
            else:
                colour = _try_colour(name)
                if colour is not None:
                    inner = replace(inner, colour=colour)
            _parse(reader, components, name.split(":")[0], allow_interaction, allow_newline, inner)
        elif isinstance(event, XmlTagClose):
            if not event.name:
                break
            if current_tag is not None and event.name == current_tag:
                break
        else:
            current_content += event.content
    push(TextComponent.of_literal, current_content)