import time

from chipjax import Machine, Mode
from chipjax.rendering import display_to_text, save_frame


def hex_digits_rom() -> bytes:
    """Draw the sixteen built-in hex glyphs in two rows, then loop forever."""
    words = [0x00E0, 0x6000, 0x6101, 0x6201]  # CLS, V0 = digit, V1 = x, V2 = y
    loop = 0x200 + 2 * len(words)
    words += [
        0xF029,  # I = glyph V0
        0xD125,  # draw at (V1, V2)
        0x7106,  # x += 6
        0x7001,  # digit += 1
        0x3008,  # after eight glyphs start the second row
        0x1200 | (loop + 16),
        0x6101,
        0x7208,
        0x3010,  # stop after sixteen
        0x1200 | loop,
    ]
    words.append(0x1200 | (0x200 + 2 * len(words)))
    return b"".join(word.to_bytes(2, "big") for word in words)


if __name__ == "__main__":
    machine = Machine(hex_digits_rom(), Mode.BASE, seed=0)

    start = time.time()
    frames = 0
    while machine.state.pc != 0x200 + len(hex_digits_rom()) - 2:
        machine.run(11)
        machine.tick_timers()
        frames += 1
    end = time.time()

    print(f"Frames: {frames}, instructions: {machine.cycles}")
    print("Execution time (s):", end - start)
    print(display_to_text(machine.framebuffer()))

    save_frame(machine.framebuffer(), "hex_digits.png", scale=8, color_scheme="amber")
