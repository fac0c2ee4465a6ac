# blockwire

Python data structures and wire encodings for the Minecraft network protocol.

The package provides the values that travel inside packets and the code that writes them to
bytes and, for most of them, reads them back.

## Modules

- `blockwire.wire`: `PacketWriter` and `PacketReader` for the primitive types (bytes, booleans,
  big-endian integers and floats, VarInt-prefixed UTF-8 strings), and the variable-length
  integers `Var32` and `Var64`. Bad input raises `DecodeError`, as either `EndOfBufferError`
  or `InvalidDataError`. Values that cannot be written raise `EncodeError`.
- `blockwire.ident`: namespaced `Identifier` values such as `minecraft:stone`.
  `Identifier.parse` splits at the first colon, and uses the `minecraft` namespace when there
  is no colon.
- `blockwire.registry`: ordered `Registry` objects with tags, the `RegEntry` ids that point
  into them, read-only `RegistryFrozen` views, and the `RegValue` base class for values that
  can produce registry data.
- `blockwire.geometry`: `Angle`, `BlockPos`, `ChunkSectionPosition` and `Vec3d`. Positions are
  packed into 64-bit integers.
- `blockwire.nbt`: `NbtTag`, `NbtElement`, `NbtCompound` and `Nbt` in network form, with
  Java-style modified UTF-8 strings. `to_nbt_element` converts plain Python values.
- `blockwire.colour`: packed RGB `Colour` values.
- `blockwire.chunk`: `DataArray` bit packing, the palette formats `SingleValued`, `Indirect` and
  `Direct`, `PalettedContainer`, `ChunkSection` and `ChunkSectionData`. These are encode-only.
- `blockwire.sequences`: `LengthPrefixVec`, `ConsumeAllVec` and `LengthPrefixHashMap`. Items are
  written with their own `encode` method or a callable you pass in, and read with a callable.
- `blockwire.choices`: `Either`, `OptionVarInt`, `RegOr` and `IdSet`.
- `blockwire.text_style`: `NamedColour`, `RgbColour`, `colour_from_name`, `TextClickEvent`,
  `TextStyle` and the content kinds `LiteralContent`, `TranslateContent` and `KeybindContent`.
- `blockwire.text`: `TextComponent` and `Text`, with JSON (`to_json`, `from_json`) and NBT
  (`to_nbt`, `from_nbt_text`) forms, plus `JsonText`, `NbtText` and the hover events
  `ShowTextHoverEvent` and `ShowEntityHoverEvent`.
- `blockwire.text_xml`: `text_from_xml`, a small tag markup parser for text, and the
  `XmlReader` tokenizer it uses.
- `blockwire.registry_values`: simple registry value types (`Block`, `EntityType`, `Item`,
  `BlockState`, `SoundEvent` and others), plus `item_entry_from_str`. `BannerPattern` and
  `WolfVariant` build their own registry-data NBT.
- `blockwire.dimension` and `blockwire.biome`: `DimType` and `Biome`, with their
  monster-spawn light levels and biome effects, which build their own registry-data NBT.
- `blockwire.particle`: `Particle`, referenced by identifier.

## Installation

```
pip install blockwire
```

The package is pure Python with no runtime dependencies. It needs Python 3.10 or newer.

## Examples

VarInts:

```python
from blockwire.wire import PacketReader, PacketWriter, Var32

writer = PacketWriter()
Var32(-1).encode(writer)
data = writer.to_bytes()          # b"\xff\xff\xff\xff\x0f"
assert Var32.decode(PacketReader(data)).as_i32() == -1
```

Registries:

```python
from blockwire.ident import Identifier
from blockwire.registry import Registry

registry = Registry()
registry.insert(Identifier("test", "a"), 10)
registry.insert(Identifier("test", "b"), 20)
entry = registry.get_entry(Identifier.parse("test:b"))
assert registry.lookup(entry) == 20
```

Text components:

```python
from blockwire.text import Text, TextComponent
from blockwire.text_style import NamedColour

text = Text([TextComponent.of_literal("Hello,").colour(NamedColour.DARK_GREEN)])
print(text.to_json().value)       # [{"text":"Hello,","color":"dark_green"}]
```

Markup:

```python
from blockwire.text_xml import text_from_xml

text = text_from_xml("<bold>Hi</bold> there", allow_interaction=False, allow_newline=True)
```

## What it does not do

- It does not open connections or run a server or client. It also does not frame, compress
  or encrypt packets, and it does not define the packets themselves. It deals only with the
  values inside them.
- It does not include vanilla registry contents, so every `Registry` starts empty.
- Some values can only be encoded: chunk data, `Particle` and `TextComponent`.
- NBT text can only be read back for literal content.
- There are no registry value types for damage types, chat types or painting variants.
  There are also no item slot components or entity metadata.

## Running the tests

```
pip install -e ".[test]"
pytest
```