"""Building blocks for a Minecraft Java Edition server: buffers, VarInts, NBT,
compression, encryption, configuration and task scheduling."""

__version__ = "0.1.0"