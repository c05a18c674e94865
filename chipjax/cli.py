"""Command-line host: loads a ROM and drives a Machine in a window or headless."""

import argparse
import sys
import time

from chipjax import __version__
from chipjax.config import Mode, UnknownOpcodePolicy
from chipjax.constants import TIMER_FREQUENCY
from chipjax.display import resolution as display_resolution
from chipjax.errors import EmulationError
from chipjax.keymap import LAYOUTS, get_layout
from chipjax.logging import RunLogger
from chipjax.machine import Machine
from chipjax.rendering import COLOR_SCHEMES, create_color_scheme, display_to_rgb, display_to_text, save_frame


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chipjax",
        description="CHIP-8 / SUPER-CHIP interpreter",
    )
    parser.add_argument("rom_path", help="Path to the ROM file")
    parser.add_argument(
        "-s", "--super-chip",
        action="store_true",
        help="Run as the SUPER-CHIP (128x64, extended opcodes and quirks)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--ipf",
        type=int,
        default=None,
        help="Instructions per 60 Hz frame (default: 11 for CHIP-8, 30 for SUPER-CHIP)",
    )
    parser.add_argument("--scale", type=int, default=8, help="Window pixel scale (default: 8)")
    parser.add_argument("--seed", type=int, default=0, help="Random number generator seed (default: 0)")
    parser.add_argument(
        "--color-scheme",
        choices=sorted(COLOR_SCHEMES),
        default="classic",
        help="Pixel colours (default: classic)",
    )
    parser.add_argument(
        "--layout",
        choices=sorted(LAYOUTS),
        default="qwerty",
        help="Keyboard layout for the hex keypad (default: qwerty)",
    )
    parser.add_argument(
        "--skip-unknown",
        action="store_true",
        help="Step over unknown opcodes instead of stopping",
    )
    parser.add_argument(
        "--headless",
        type=int,
        metavar="FRAMES",
        default=None,
        help="Run FRAMES frames without a window and print the final screen",
    )
    parser.add_argument("--screenshot", metavar="PATH", default=None, help="Save the final frame to an image")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level (default: INFO)",
    )
    parser.add_argument("--trace", action="store_true", help="Log every instruction (needs --log-level DEBUG)")
    return parser


def run_frame(machine: Machine, ipf: int):
    """One 60 Hz frame: a burst of instructions, then one timer tick."""
    machine.run(ipf)
    machine.tick_timers()


def run_headless(machine: Machine, frames: int, ipf: int, logger: RunLogger) -> int:
    logger.log_run_start({
        "mode": machine.mode.value,
        "frames": frames,
        "instructions_per_frame": ipf,
    })
    start = time.time()
    try:
        for _ in logger.progress(frames):
            run_frame(machine, ipf)
    except EmulationError as e:
        logger.error(f"Emulation stopped: {e}")
        return 1
    finally:
        elapsed = time.time() - start
        logger.log_run_end({
            "instructions": machine.cycles,
            "instructions_per_second": machine.cycles / elapsed if elapsed > 0 else 0.0,
        })
    print(display_to_text(machine.framebuffer()))
    return 0


def run_window(machine: Machine, ipf: int, scale: int, color_scheme: str, layout: str, logger: RunLogger) -> int:
    import pygame

    key_map = {getattr(pygame, f"K_{char}"): key for char, key in get_layout(layout).items()}
    on_color, off_color = create_color_scheme(color_scheme)

    pygame.init()
    width, height = display_resolution(hires=False)
    screen = pygame.display.set_mode((width * scale, height * scale))
    pygame.display.set_caption("chipjax")
    clock = pygame.time.Clock()

    logger.info("Controls: ESC=Quit, P=Pause")
    running = True
    paused = False
    status = 0

    while running:
        clock.tick(TIMER_FREQUENCY)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_p:
                    paused = not paused
                elif event.key in key_map:
                    machine.key_down(key_map[event.key])
            elif event.type == pygame.KEYUP:
                if event.key in key_map:
                    machine.key_up(key_map[event.key])

        if not paused:
            try:
                run_frame(machine, ipf)
            except EmulationError as e:
                logger.error(f"Emulation stopped: {e}")
                paused = True
                status = 1

        # Window size is fixed; the frame is stretched to fill it at either resolution
        rgb = display_to_rgb(machine.framebuffer(), 1, on_color, off_color)
        frame = pygame.surfarray.make_surface(rgb.swapaxes(0, 1))
        screen.blit(pygame.transform.scale(frame, screen.get_size()), (0, 0))
        pygame.display.set_caption("chipjax [BEEP]" if machine.is_sound_active() else "chipjax")
        pygame.display.flip()

    pygame.quit()
    return status


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logger = RunLogger(log_level=args.log_level)

    mode = Mode.EXTENDED if args.super_chip else Mode.BASE
    ipf = args.ipf or (30 if args.super_chip else 11)

    try:
        with open(args.rom_path, "rb") as f:
            rom = f.read()
    except OSError as e:
        logger.error(f"Cannot read ROM: {e}")
        return 1

    try:
        machine = Machine(
            rom,
            mode,
            seed=args.seed,
            unknown_opcode=UnknownOpcodePolicy.SKIP if args.skip_unknown else UnknownOpcodePolicy.FAIL,
            logger=logger,
            trace=args.trace,
        )
    except EmulationError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Loaded: {args.rom_path} ({len(rom)} bytes)")

    if args.headless is not None:
        status = run_headless(machine, args.headless, ipf, logger)
    else:
        status = run_window(machine, ipf, args.scale, args.color_scheme, args.layout, logger)

    if args.screenshot:
        save_frame(machine.framebuffer(), args.screenshot, args.scale, args.color_scheme)
        logger.info(f"Saved frame: {args.screenshot}")
    return status


if __name__ == "__main__":
    sys.exit(main())
