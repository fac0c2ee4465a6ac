"""Chat text: components, hover events and their JSON and NBT forms."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Iterator, Mapping, Optional, Union
from uuid import UUID

from blockwire.ident import Identifier
from blockwire.nbt import Nbt, NbtCompound, NbtElement, NbtTag
from blockwire.text_style import (
    ClickAction,
    LiteralContent,
    KeybindContent,
    NamedColour,
    TextClickEvent,
    TextColour,
    TextContent,
    TextStyle,
    TranslateContent,
    colour_from_name,
    content_from_json,
)
from blockwire.wire import PacketReader, PacketWriter


def _string(value: str) -> NbtElement:
    return NbtElement(NbtTag.STRING, value)


def _dumps(data: Any) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class JsonText:
    """Text serialised as a JSON string, written as a protocol string."""

    value: str

    def into_inner(self) -> str:
        return self.value

    def encode(self, writer: PacketWriter) -> None:
        writer.write_string(self.value)

    @classmethod
    def decode(cls, reader: PacketReader) -> JsonText:
        return cls(reader.read_string())


@dataclass
class NbtText:
    """Text held as an NBT element, written as a tagged element."""

    element: NbtElement

    def into_inner(self) -> NbtElement:
        return self.element

    def encode(self, writer: PacketWriter) -> None:
        self.element.encode(writer)

    @classmethod
    def decode(cls, reader: PacketReader) -> NbtText:
        return cls(NbtElement.decode(reader))


@dataclass(frozen=True)
class ShowEntityTextHoverEvent:
    """The entity shown when hovering over text."""

    kind: Identifier
    uuid: UUID
    name: Optional[Text] = None

    def to_nbt(self) -> NbtCompound:
        nbt = NbtCompound()
        if self.name is not None:
            nbt.insert("name", _string(self.name.to_json().value))
        nbt.insert("kind", _string(str(self.kind)))
        nbt.insert("uuid", _string(str(self.uuid)))
        return nbt

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name is not None:
            data["name"] = self.name._json_list()
        data["type"] = str(self.kind)
        data["id"] = str(self.uuid)
        return data

    @classmethod
    def _from_json(cls, data: Any) -> ShowEntityTextHoverEvent:
        if not isinstance(data, Mapping):
            raise ValueError("show_entity contents must be an object")
        kind, uuid = data.get("type"), data.get("id")
        if not isinstance(kind, str) or not isinstance(uuid, str):
            raise ValueError("show_entity contents need a type and an id")
        name = data.get("name")
        return cls(
            kind=Identifier.parse(kind),
            uuid=UUID(uuid),
            name=None if name is None else Text._from_json_list(name),
        )


@dataclass(frozen=True)
class ShowTextHoverEvent:
    """Text shown when hovering."""

    text: Text

    def write_nbt(self, compound: NbtCompound) -> None:
        compound.insert("action", _string("show_text"))
        compound.insert("contents", self.text.to_nbt().element)

    def to_json(self) -> dict[str, Any]:
        return {"action": "show_text", "contents": self.text._json_list()}


@dataclass(frozen=True)
class ShowEntityHoverEvent:
    """An entity shown when hovering."""

    show_entity: ShowEntityTextHoverEvent

    def write_nbt(self, compound: NbtCompound) -> None:
        compound.insert("action", _string("show_entity"))
        compound.insert("contents", self.show_entity.to_nbt())

    def to_json(self) -> dict[str, Any]:
        return {"action": "show_entity", "contents": self.show_entity.to_json()}


TextHoverEvent = Union[ShowTextHoverEvent, ShowEntityHoverEvent]


def _hover_from_json(data: Any) -> TextHoverEvent:
    if not isinstance(data, Mapping):
        raise ValueError("hover event must be an object")
    action = data.get("action")
    if "contents" not in data:
        raise ValueError("hover event has no contents")
    contents = data["contents"]
    if action == "show_text":
        return ShowTextHoverEvent(Text._from_json_list(contents))
    if action == "show_entity":
        return ShowEntityHoverEvent(ShowEntityTextHoverEvent._from_json(contents))
    raise ValueError(f"unknown hover action {action!r}")


@dataclass(frozen=True)
class TextComponent:
    """A piece of content with a style and child components."""

    content: TextContent = field(default_factory=LiteralContent)
    style: TextStyle = field(default_factory=TextStyle)
    extra: tuple[TextComponent, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", tuple(self.extra))

    @classmethod
    def of_literal(cls, literal: str) -> TextComponent:
        return cls().with_literal(literal)

    @classmethod
    def of_translate(cls, translation: str) -> TextComponent:
        return cls().with_translate(translation)

    @classmethod
    def of_translate_fallback(cls, translation: str, fallback: str) -> TextComponent:
        return cls().with_translate_fallback(translation, fallback)

    @classmethod
    def of_translate_interpolate(cls, translation: str, interpolate: Iterable[str]) -> TextComponent:
        return cls().with_translate_interpolate(translation, interpolate)

    @classmethod
    def of_translate_fallback_interpolate(
        cls, translation: str, fallback: str, interpolate: Iterable[str]
    ) -> TextComponent:
        return cls().with_translate_fallback_interpolate(translation, fallback, interpolate)

    @classmethod
    def of_keybind(cls, keybind: str) -> TextComponent:
        return cls().with_keybind(keybind)

    def with_content(self, content: TextContent) -> TextComponent:
        return replace(self, content=content)

    def with_literal(self, literal: str) -> TextComponent:
        return self.with_content(LiteralContent(str(literal)))

    def with_translate(self, translation: str) -> TextComponent:
        return self.with_content(TranslateContent(str(translation)))

    def with_translate_fallback(self, translation: str, fallback: str) -> TextComponent:
        return self.with_content(TranslateContent(str(translation), str(fallback)))

    def with_translate_interpolate(self, translation: str, interpolate: Iterable[str]) -> TextComponent:
        return self.with_content(TranslateContent(str(translation), None, tuple(map(str, interpolate))))

    def with_translate_fallback_interpolate(
        self, translation: str, fallback: str, interpolate: Iterable[str]
    ) -> TextComponent:
        return self.with_content(TranslateContent(str(translation), str(fallback), tuple(map(str, interpolate))))

    def with_keybind(self, keybind: str) -> TextComponent:
        return self.with_content(KeybindContent(str(keybind)))

    def _restyle(self, **changes: Any) -> TextComponent:
        return replace(self, style=replace(self.style, **changes))

    def colour(self, colour: TextColour) -> TextComponent:
        return self._restyle(colour=colour)

    def reset_colour(self) -> TextComponent:
        return self._restyle(colour=NamedColour.WHITE)

    def inherit_colour(self) -> TextComponent:
        return self._restyle(colour=None)

    def font(self, font: Identifier) -> TextComponent:
        return self._restyle(font=font)

    def reset_font(self) -> TextComponent:
        return self._restyle(font=Identifier.vanilla("default"))

    def inherit_font(self) -> TextComponent:
        return self._restyle(font=None)

    def bold(self, bold: bool) -> TextComponent:
        return self._restyle(bold=bool(bold))

    def reset_bold(self) -> TextComponent:
        return self._restyle(bold=False)

    def inherit_bold(self) -> TextComponent:
        return self._restyle(bold=None)

    def italic(self, italic: bool) -> TextComponent:
        return self._restyle(italic=bool(italic))

    def reset_italic(self) -> TextComponent:
        return self._restyle(italic=False)

    def inherit_italic(self) -> TextComponent:
        return self._restyle(italic=None)

    def underline(self, underline: bool) -> TextComponent:
        return self._restyle(underline=bool(underline))

    def reset_underline(self) -> TextComponent:
        return self._restyle(underline=False)

    def inherit_underline(self) -> TextComponent:
        return self._restyle(underline=None)

    def strikethrough(self, strikethrough: bool) -> TextComponent:
        return self._restyle(strikethrough=bool(strikethrough))

    def reset_strikethrough(self) -> TextComponent:
        return self._restyle(strikethrough=False)

    def inherit_strikethrough(self) -> TextComponent:
        return self._restyle(strikethrough=None)

    def obfuscate(self, obfuscate: bool) -> TextComponent:
        return self._restyle(obfuscate=bool(obfuscate))

    def reset_obfuscate(self) -> TextComponent:
        return self._restyle(obfuscate=False)

    def inherit_obfuscate(self) -> TextComponent:
        return self._restyle(obfuscate=None)

    def insertion(self, insertion: str) -> TextComponent:
        return self._restyle(insertion=insertion)

    def reset_insertion(self) -> TextComponent:
        return self._restyle(insertion="")

    def inherit_insertion(self) -> TextComponent:
        return self._restyle(insertion=None)

    def click_event(self, click_event: TextClickEvent) -> TextComponent:
        return self._restyle(click_event=click_event)

    def reset_click_event(self) -> TextComponent:
        return self._restyle(click_event=TextClickEvent(ClickAction.RUN_COMMAND, ""))

    def inherit_click_event(self) -> TextComponent:
        return self._restyle(click_event=None)

    def hover_event(self, hover_event: TextHoverEvent) -> TextComponent:
        return self._restyle(hover_event=hover_event)

    def reset_hover_event(self) -> TextComponent:
        return self._restyle(hover_event=ShowTextHoverEvent(Text()))

    def inherit_hover_event(self) -> TextComponent:
        return self._restyle(hover_event=None)

    def __str__(self) -> str:
        return str(self.content) + "".join(str(child) for child in self.extra)

    def to_nbt(self) -> NbtCompound:
        nbt = self.content.to_nbt()
        nbt.extend(self.style.to_nbt())
        if self.extra:
            children = [NbtElement(NbtTag.COMPOUND, child.to_nbt()) for child in self.extra]
            nbt.insert("extra", NbtElement(NbtTag.LIST, children))
        return nbt

    def to_json(self) -> dict[str, Any]:
        data = {**self.content.to_json(), **self.style.to_json()}
        if self.extra:
            data["extra"] = [child.to_json() for child in self.extra]
        return data

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> TextComponent:
        if not isinstance(data, Mapping):
            raise ValueError("a text component must be an object")
        style = TextStyle.from_json(data)
        hover = data.get("hoverEvent")
        if hover is not None:
            style = replace(style, hover_event=_hover_from_json(hover))
        extra = data.get("extra", [])
        if not isinstance(extra, list):
            raise ValueError("extra must be a list")
        return cls(content_from_json(data), style, tuple(cls.from_json(child) for child in extra))

    def encode(self, writer: PacketWriter) -> None:
        Nbt(root=self.to_nbt()).encode(writer)


class Text:
    """A sequence of text components."""

    def __init__(self, components: Union[TextComponent, Iterable[TextComponent], None] = None) -> None:
        if components is None:
            self._components: list[TextComponent] = []
        elif isinstance(components, TextComponent):
            self._components = [components]
        else:
            self._components = list(components)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Text):
            return NotImplemented
        return self._components == other._components

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[TextComponent]:
        return iter(self._components)

    def __repr__(self) -> str:
        return self.to_json().value

    def __str__(self) -> str:
        return "".join(str(component) for component in self._components)

    def push(self, component: TextComponent) -> None:
        self._components.append(component)

    def components(self) -> list[TextComponent]:
        return list(self._components)

    def _json_list(self) -> list[dict[str, Any]]:
        return [component.to_json() for component in self._components]

    def to_json(self) -> JsonText:
        if not self._components:
            return JsonText('[{"text":""}]')
        return JsonText(_dumps(self._json_list()))

    def to_nbt(self) -> NbtText:
        if not self._components:
            return NbtText(_string(""))
        return NbtText(
            NbtElement(
                NbtTag.LIST,
                [NbtElement(NbtTag.COMPOUND, component.to_nbt()) for component in self._components],
            )
        )

    @classmethod
    def _from_json_list(cls, data: Any) -> Text:
        if not isinstance(data, list):
            raise ValueError("text must be a list of components")
        return cls(TextComponent.from_json(item) for item in data)

    @classmethod
    def from_json(cls, json_text: Union[str, JsonText]) -> Text:
        """Parse a JSON array of components; raise ValueError on invalid input."""
        if isinstance(json_text, JsonText):
            json_text = json_text.value
        return cls._from_json_list(json.loads(json_text))

    @classmethod
    def from_nbt_text(cls, nbt_text: NbtText) -> Text:
        """Read text back from NBT; only literal content can be recovered."""
        element = nbt_text.element
        if element.tag is NbtTag.STRING:
            return cls()
        if element.tag is NbtTag.LIST:
            return cls(
                _compound_to_component(item.value) for item in element.value if item.tag is NbtTag.COMPOUND
            )
        if element.tag is NbtTag.COMPOUND:
            return cls([_compound_to_component(element.value)])
        raise ValueError(f"NBT text cannot be a {element.tag.name} element")


def _nbt_flag(compound: NbtCompound, key: str) -> Optional[bool]:
    element = compound.get(key)
    if element is not None and element.tag is NbtTag.BYTE:
        return element.value != 0
    return None


def _nbt_string(compound: NbtCompound, key: str) -> Optional[str]:
    element = compound.get(key)
    if element is not None and element.tag is NbtTag.STRING:
        return element.value
    return None


def _compound_to_component(compound: NbtCompound) -> TextComponent:
    literal = _nbt_string(compound, "text")
    if literal is None:
        raise ValueError("only literal text content can be read from NBT")
    colour_name = _nbt_string(compound, "color")
    colour = None
    if colour_name is not None:
        try:
            colour = colour_from_name(colour_name)
        except ValueError:
            colour = None
    font = _nbt_string(compound, "font")
    style = TextStyle(
        colour=colour,
        font=None if font is None else Identifier.parse(font),
        bold=_nbt_flag(compound, "bold"),
        italic=_nbt_flag(compound, "italic"),
        underline=_nbt_flag(compound, "underlined"),
        strikethrough=_nbt_flag(compound, "strikethrough"),
        obfuscate=_nbt_flag(compound, "obfuscated"),
    )
    extra_element = compound.get("extra")
    extra: list[TextComponent] = []
    if extra_element is not None and extra_element.tag is NbtTag.LIST:
        extra = [
            _compound_to_component(item.value) for item in extra_element.value if item.tag is NbtTag.COMPOUND
        ]
    return TextComponent(LiteralContent(literal), style, tuple(extra))