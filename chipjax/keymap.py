"""Physical keyboard to hex keypad layouts.

The COSMAC VIP keypad::

    1 2 3 C
    4 5 6 D
    7 8 9 E
    A 0 B F

is laid over the left-hand 4x4 block of a PC keyboard. Layouts map the
characters on those keys to keypad values; the host translates them to its
own key codes.
"""

QWERTY = {
    '1': 0x1, '2': 0x2, '3': 0x3, '4': 0xC,
    'q': 0x4, 'w': 0x5, 'e': 0x6, 'r': 0xD,
    'a': 0x7, 's': 0x8, 'd': 0x9, 'f': 0xE,
    'z': 0xA, 'x': 0x0, 'c': 0xB, 'v': 0xF,
}

AZERTY = {
    '1': 0x1, '2': 0x2, '3': 0x3, '4': 0xC,
    'a': 0x4, 'z': 0x5, 'e': 0x6, 'r': 0xD,
    'q': 0x7, 's': 0x8, 'd': 0x9, 'f': 0xE,
    'w': 0xA, 'x': 0x0, 'c': 0xB, 'v': 0xF,
}

LAYOUTS = {
    "qwerty": QWERTY,
    "azerty": AZERTY,
}


def get_layout(name: str) -> dict[str, int]:
    if name not in LAYOUTS:
        raise ValueError(f"Unknown keyboard layout '{name}'. Available: {list(LAYOUTS.keys())}")
    return LAYOUTS[name]
