"""Text colours, click events, styles and content kinds for chat components."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union

from blockwire.ident import Identifier
from blockwire.nbt import NbtCompound, NbtElement, NbtTag


class NamedColour(str, Enum):
    """The sixteen named chat colours, valued by their wire names."""

    BLACK = "black"
    DARK_BLUE = "dark_blue"
    DARK_GREEN = "dark_green"
    DARK_AQUA = "dark_aqua"
    DARK_RED = "dark_red"
    PURPLE = "dark_purple"
    GOLD = "gold"
    GREY = "gray"
    DARK_GREY = "dark_gray"
    BLUE = "blue"
    GREEN = "green"
    AQUA = "aqua"
    RED = "red"
    PINK = "light_purple"
    YELLOW = "yellow"
    WHITE = "white"


@dataclass(frozen=True)
class RgbColour:
    """An arbitrary colour given by its red, green and blue bytes."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for component in (self.r, self.g, self.b):
            if not 0 <= component <= 0xFF:
                raise ValueError(f"colour component {component} is outside 0..255")


TextColour = Union[NamedColour, RgbColour]

_NAME_ALIASES: dict[str, NamedColour] = {
    "black": NamedColour.BLACK,
    "dark_blue": NamedColour.DARK_BLUE,
    "dark_green": NamedColour.DARK_GREEN,
    "dark_aqua": NamedColour.DARK_AQUA,
    "dark_cyan": NamedColour.DARK_AQUA,
    "dark_red": NamedColour.DARK_RED,
    "dark_pink": NamedColour.PURPLE,
    "purple": NamedColour.PURPLE,
    "gold": NamedColour.GOLD,
    "orange": NamedColour.GOLD,
    "grey": NamedColour.GREY,
    "gray": NamedColour.GREY,
    "dark_grey": NamedColour.DARK_GREY,
    "dark_gray": NamedColour.DARK_GREY,
    "blue": NamedColour.BLUE,
    "green": NamedColour.GREEN,
    "aqua": NamedColour.AQUA,
    "cyan": NamedColour.AQUA,
    "red": NamedColour.RED,
    "pink": NamedColour.PINK,
    "yellow": NamedColour.YELLOW,
    "white": NamedColour.WHITE,
}


def _is_hex(digits: str) -> bool:
    return bool(digits) and all(ch in string.hexdigits for ch in digits)


def colour_from_name(name: str) -> TextColour:
    """Parse a friendly colour name or a ``#rrggbb``, ``#rgb``, ``#vv`` or ``#v`` code."""
    named = _NAME_ALIASES.get(name)
    if named is not None:
        return named
    if name.startswith("#") and _is_hex(name[1:]):
        digits = name[1:]
        if len(digits) == 6:
            return RgbColour(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
        if len(digits) == 3:
            r, g, b = (int(ch, 16) * 17 for ch in digits)
            return RgbColour(r, g, b)
        if len(digits) == 2:
            grey = int(digits, 16)
            return RgbColour(grey, grey, grey)
        if len(digits) == 1:
            grey = int(digits, 16) * 17
            return RgbColour(grey, grey, grey)
    raise ValueError(f"unknown colour {name!r}")


def colour_to_json(colour: TextColour) -> str:
    """The JSON string form: a colour name or ``#rrggbb``."""
    if isinstance(colour, RgbColour):
        return f"#{colour.r:02x}{colour.g:02x}{colour.b:02x}"
    return NamedColour(colour).value


def colour_from_json(value: str) -> TextColour:
    """Parse the JSON string form; only exact names and ``#rrggbb`` are accepted."""
    if not isinstance(value, str):
        raise ValueError("Not a hex colour code")
    try:
        return NamedColour(value)
    except ValueError:
        pass
    if len(value) == 7 and value.startswith("#") and _is_hex(value[1:]):
        return RgbColour(int(value[1:3], 16), int(value[3:5], 16), int(value[5:7], 16))
    raise ValueError("Not a hex colour code")


def colour_to_nbt(colour: TextColour) -> NbtElement:
    return NbtElement(NbtTag.STRING, colour_to_json(colour))


def _string(value: str) -> NbtElement:
    return NbtElement(NbtTag.STRING, value)


def _byte(flag: bool) -> NbtElement:
    return NbtElement(NbtTag.BYTE, 1 if flag else 0)


class ClickAction(str, Enum):
    OPEN_URL = "open_url"
    RUN_COMMAND = "run_command"
    SUGGEST_COMMAND = "suggest_command"
    CHANGE_PAGE = "change_page"
    COPY_TO_CLIPBOARD = "copy_to_clipboard"


@dataclass(frozen=True)
class TextClickEvent:
    """What happens when text is clicked. A page change holds a page number, the rest a string."""

    action: ClickAction
    value: Union[str, int]

    def __post_init__(self) -> None:
        action = ClickAction(self.action)
        object.__setattr__(self, "action", action)
        if action is ClickAction.CHANGE_PAGE:
            if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value < 0:
                raise ValueError("a page change needs a non-negative page number")
        elif not isinstance(self.value, str):
            raise ValueError(f"{action.value} needs a string value")

    def write_nbt(self, compound: NbtCompound) -> None:
        compound.insert("action", _string(self.action.value))
        compound.insert("value", _string(str(self.value)))

    def to_json(self) -> dict[str, str]:
        return {"action": self.action.value, "value": str(self.value)}

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> TextClickEvent:
        try:
            action = ClickAction(data["action"])
            value = data["value"]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"invalid click event: {data!r}") from exc
        return cls(action, value)


def _optional_bool(data: Mapping[str, Any], key: str) -> Optional[bool]:
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        raise ValueError(f"{key} must be a boolean")
    return value


@dataclass(frozen=True)
class TextStyle:
    """Formatting of a text component; None means inherited from the parent."""

    colour: Optional[TextColour] = None
    font: Optional[Identifier] = None
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    strikethrough: Optional[bool] = None
    obfuscate: Optional[bool] = None
    insertion: Optional[str] = None
    click_event: Optional[TextClickEvent] = None
    hover_event: Any = None

    def to_nbt(self) -> NbtCompound:
        nbt = NbtCompound()
        if self.colour is not None:
            nbt.insert("color", colour_to_nbt(self.colour))
        if self.font is not None:
            nbt.insert("font", _string(str(self.font)))
        for key, flag in self._flags():
            if flag is not None:
                nbt.insert(key, _byte(flag))
        if self.insertion is not None:
            nbt.insert("insertion", _string(self.insertion))
        if self.click_event is not None:
            sub = NbtCompound()
            self.click_event.write_nbt(sub)
            nbt.insert("clickEvent", sub)
        if self.hover_event is not None:
            sub = NbtCompound()
            self.hover_event.write_nbt(sub)
            nbt.insert("hoverEvent", sub)
        return nbt

    def _flags(self) -> list[tuple[str, Optional[bool]]]:
        return [
            ("bold", self.bold),
            ("italic", self.italic),
            ("underlined", self.underline),
            ("strikethrough", self.strikethrough),
            ("obfuscated", self.obfuscate),
        ]

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.colour is not None:
            data["color"] = colour_to_json(self.colour)
        if self.font is not None:
            data["font"] = str(self.font)
        for key, flag in self._flags():
            if flag is not None:
                data[key] = flag
        if self.insertion is not None:
            data["insertion"] = self.insertion
        if self.click_event is not None:
            data["clickEvent"] = self.click_event.to_json()
        if self.hover_event is not None:
            data["hoverEvent"] = self.hover_event.to_json()
        return data

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> TextStyle:
        """Read the style keys of a component; hover events are left to the component reader."""
        colour = data.get("color")
        font = data.get("font")
        insertion = data.get("insertion")
        if font is not None and not isinstance(font, str):
            raise ValueError("font must be a string")
        if insertion is not None and not isinstance(insertion, str):
            raise ValueError("insertion must be a string")
        click = data.get("clickEvent")
        return cls(
            colour=None if colour is None else colour_from_json(colour),
            font=None if font is None else Identifier.parse(font),
            bold=_optional_bool(data, "bold"),
            italic=_optional_bool(data, "italic"),
            underline=_optional_bool(data, "underlined"),
            strikethrough=_optional_bool(data, "strikethrough"),
            obfuscate=_optional_bool(data, "obfuscated"),
            insertion=insertion,
            click_event=None if click is None else TextClickEvent.from_json(click),
        )


@dataclass(frozen=True)
class LiteralContent:
    literal: str = ""

    def __str__(self) -> str:
        return self.literal

    def to_nbt(self) -> NbtCompound:
        nbt = NbtCompound()
        nbt.insert("text", _string(self.literal))
        return nbt

    def to_json(self) -> dict[str, Any]:
        return {"text": self.literal}


@dataclass(frozen=True)
class TranslateContent:
    translate: str
    fallback: Optional[str] = None
    interpolate: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "interpolate", tuple(self.interpolate))

    def __str__(self) -> str:
        return self.translate

    def to_nbt(self) -> NbtCompound:
        nbt = NbtCompound()
        nbt.insert("translate", _string(self.translate))
        if self.fallback is not None:
            nbt.insert("fallback", _string(self.fallback))
        if self.interpolate:
            nbt.insert("with", NbtElement(NbtTag.LIST, [_string(item) for item in self.interpolate]))
        return nbt

    def to_json(self) -> dict[str, Any]:
        return {"translate": self.translate, "fallback": self.fallback, "with": list(self.interpolate)}


@dataclass(frozen=True)
class KeybindContent:
    keybind: str

    def __str__(self) -> str:
        return self.keybind

    def to_nbt(self) -> NbtCompound:
        nbt = NbtCompound()
        nbt.insert("keybind", _string(self.keybind))
        return nbt

    def to_json(self) -> dict[str, Any]:
        return {"keybind": self.keybind}


TextContent = Union[LiteralContent, TranslateContent, KeybindContent]


def content_from_json(data: Mapping[str, Any]) -> TextContent:
    """Pick the first content kind whose keys are present: literal, translation, keybind."""
    text = data.get("text")
    if isinstance(text, str):
        return LiteralContent(text)
    translate = data.get("translate")
    fallback = data.get("fallback")
    interpolate = data.get("with")
    if (
        isinstance(translate, str)
        and (fallback is None or isinstance(fallback, str))
        and isinstance(interpolate, list)
        and all(isinstance(item, str) for item in interpolate)
    ):
        return TranslateContent(translate, fallback, tuple(interpolate))
    keybind = data.get("keybind")
    if isinstance(keybind, str):
        return KeybindContent(keybind)
    raise ValueError(f"no text content in {dict(data)!r}")