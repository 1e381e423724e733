#!/usr/bin/env python3
"""
h8run - H8VM console runner

Usage:
    python h8run.py <image.bin> [--boot-size 0x100] [--ram-end 0xFFFD]
                                [--step] [--max-steps N] [--trace]
                                [-v] [-q] [--log-file PATH]

The image is loaded into a boot ROM mapped at $0000 over a 64K RAM
(see h8vm.boot). Execution starts at $0000 and runs until HLT or a
fault, then the final register state is printed.

Exit status: 0 on HLT, 1 on any fault or usage error.

Examples:
    python h8run.py prog.bin
    python h8run.py prog.bin --trace -v
    python h8run.py prog.bin --step --max-steps 10
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.table import Table

import h8vm
from h8vm import Halt, Register, VMError, WideRegister
from h8vm.log import close_logging, setup_logging

log = logging.getLogger('h8vm.run')


def parse_int_arg(value: str) -> int:
    """Parse an integer argument that may be hex (0x...), $ prefix, or decimal."""
    value = value.strip()
    if value.startswith("0x") or value.startswith("0X"):
        return int(value, 16)
    if value.startswith("$"):
        return int(value[1:], 16)  # Motorola hex convention
    return int(value)


def _int_arg(value: str) -> int:
    try:
        return parse_int_arg(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="h8run",
        description="Run a program image on the H8VM 8-bit CPU emulator",
    )
    parser.add_argument("image", help="Raw program image loaded at $0000")
    parser.add_argument("--boot-size", type=_int_arg, default=h8vm.DEFAULT_BOOT_SIZE,
                        help="Boot ROM size in bytes (default: 0x100)")
    parser.add_argument("--ram-end", type=_int_arg, default=h8vm.DEFAULT_RAM_END,
                        help="Last RAM address (default: 0xFFFD)")
    parser.add_argument("--step", action="store_true",
                        help="Single-step, printing registers after each instruction")
    parser.add_argument("--max-steps", type=_int_arg, default=None,
                        help="Stop after N instructions (requires --step)")
    parser.add_argument("--trace", action="store_true",
                        help="Log every executed instruction at DEBUG level")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase console log verbosity (-v, -vv)")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only print errors")
    parser.add_argument("--log-file", help="Write a full DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"h8run {h8vm.__version__}")
    return parser


def _console_level(args) -> int:
    if args.quiet:
        return logging.ERROR
    if args.verbose == 0:
        return logging.WARNING
    if args.verbose == 1:
        return logging.INFO
    return logging.DEBUG


def render_registers(cpu: h8vm.Cpu, title: str = "Registers") -> Table:
    """Register state as a rich table: byte registers, pairs, PC/SP."""
    table = Table(title=title)
    table.add_column("Reg", style="cyan")
    table.add_column("Hex", justify="right")
    table.add_column("Dec", justify="right")
    for reg in Register:
        value = cpu.registers.get(reg)
        table.add_row(str(reg), f"{value:#04x}", str(value))
    for reg in WideRegister:
        value = cpu.registers.get_wide(reg)
        table.add_row(str(reg), f"{value:#06x}", str(value))
    return table


def _run_stepping(cpu: h8vm.Cpu, console: Console,
                  max_steps: Optional[int]) -> Optional[VMError]:
    """Step and print each instruction; None means max_steps was reached."""
    count = 0
    while max_steps is None or count < max_steps:
        pc = cpu.pc
        try:
            op = cpu.step()
        except VMError as e:
            return e
        count += 1
        console.print(f"${pc:04X}: {op.mnemonic:16s} {cpu.registers.summary()}")
    return None


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.max_steps is not None and not args.step:
        parser.error("--max-steps requires --step")
    if args.max_steps is not None and args.max_steps < 0:
        parser.error(f"--max-steps must not be negative: {args.max_steps}")

    setup_logging(console_level=_console_level(args), log_file=args.log_file)
    try:
        return _run(parser, args)
    finally:
        close_logging()


def _run(parser: argparse.ArgumentParser, args) -> int:
    console = Console()

    try:
        with open(args.image, "rb") as f:
            image = f.read()
    except OSError as e:
        log.error("cannot read %s: %s", args.image, e)
        return 1

    if not 0 < args.boot_size <= 0x10000:
        parser.error(f"--boot-size out of range: {args.boot_size:#x}")
    if not 0 <= args.ram_end <= 0xFFFF:
        parser.error(f"--ram-end out of range: {args.ram_end:#x}")
    if len(image) > args.boot_size:
        parser.error(f"image is {len(image)} bytes, boot ROM holds {args.boot_size}")

    cpu = h8vm.boot(image, boot_size=args.boot_size, ram_end=args.ram_end,
                    trace=args.trace)
    log.info("loaded %d bytes from %s", len(image), args.image)

    if args.step:
        reason = _run_stepping(cpu, console, args.max_steps)
    else:
        reason = cpu.run()

    if not args.quiet:
        console.print(render_registers(cpu))

    if reason is None:
        if not args.quiet:
            console.print(f"stopped after {args.max_steps} steps")
        return 0
    if isinstance(reason, Halt):
        if not args.quiet:
            console.print(f"[green]{reason}[/green] at PC=${cpu.pc:04X}")
        return 0
    log.error("%s: %s (PC=$%04X)", type(reason).__name__, reason, cpu.pc)
    return 1


if __name__ == "__main__":
    sys.exit(main())
