"""Minecraft network protocol values: VarInts, NBT, registries, text and chunk data with their wire encodings."""

__version__ = "0.1.0"