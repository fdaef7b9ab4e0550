"""Status bar blocks for load, memory, mail, network, keyboard layout, music and phone state."""

__version__ = "0.1.0"