#!/usr/bin/env python3
"""
Brainfuck Step-by-Step Debugger

Command-line front end for the resumable engine:

    brainfuck_debugger.py run hello.bf --input "abc" --limit 100000
    brainfuck_debugger.py debug hello.bf --tape-size 30 --min 0 --max 255

`run` executes a program and prints its output. `debug` opens an interactive
prompt that steps the program, feeds it input on demand and shows the memory
tape around the data pointer.

Settings come from (lowest first) built-in defaults, BF_* environment
variables (a .env file is loaded into the environment), --config YAML and
the command-line flags.
"""

import argparse
import sys
from typing import List, Optional

from dotenv import load_dotenv

from bfcore.config import EngineConfig, resolve_config
from bfcore.session import DebugSession
from bfcore.status import ExecutionStatus

EXIT_FINISHED = 0
EXIT_PROGRAM_ERROR = 1
EXIT_BAD_CONFIG = 2
EXIT_PAUSED = 3

HELP = """Commands:
  load <code>      reset and load new source code
  step [n]         execute n instructions (default 1)
  run [limit]      run until finished, waiting for input, or limit reached
  input <text>     append text to the input buffer (\\n escapes allowed)
  state [radius]   dump the engine state as JSON
  show             show program, memory and output
  output           print the output so far
  reset            clear the loaded program
  help             show this message
  quit             leave the debugger"""


def render_state(session: DebugSession, show_memory_range: int = 10) -> str:
    """Show current state of memory, pointer, and program."""
    engine = session.engine
    state = engine.get_state(window_radius=show_memory_range // 2)
    lines = []

    # Show program with instruction pointer
    program_display = ""
    for i, cmd in enumerate(engine.program.code):
        if i == state.instruction_pointer:
            program_display += f"[{cmd}]"
        else:
            program_display += cmd
    if state.next_instruction == "EOF":
        program_display += "[EOF]"
    lines.append(f"Program:  {program_display}")
    lines.append(f"Status:   {state.status.value} after {state.total_steps} step(s)")
    lines.append(f"Input:    {state.input_buffer_length} char(s) buffered")

    memory_vals = []
    memory_ptrs = []
    memory_addrs = []
    for offset, value in enumerate(state.tape_window):
        address = state.tape_window_start_index + offset
        width = max(3, len(str(value)), len(str(address)))
        memory_vals.append(f"{value:{width}d}")
        memory_ptrs.append(f"{'^':>{width}}" if address == state.data_pointer else " " * width)
        memory_addrs.append(f"{address:{width}d}")

    lines.append("Memory:   [" + "|".join(memory_vals) + "]")
    lines.append("Pointer:   " + " ".join(memory_ptrs))
    lines.append("Address:   " + " ".join(memory_addrs))

    if state.output:
        output_nums = [ord(c) for c in state.output]
        lines.append(f"Output:   {state.output!r} → {output_nums}")
    else:
        lines.append("Output:   (empty)")
    return "\n".join(lines)


def _unescape(text: str) -> str:
    return text.replace("\\n", "\n").replace("\\t", "\t")


class DebuggerShell:
    """Interactive prompt driving a DebugSession."""

    def __init__(self, session: DebugSession, show_memory_range: int = 10):
        self.session = session
        self.show_memory_range = show_memory_range

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False when the user asked to quit."""
        command, _, rest = line.strip().partition(" ")
        command = command.lower()
        rest = rest.strip()

        if not command:
            return True
        if command in ("quit", "exit", "q"):
            return False

        try:
            if command == "load":
                print(self.session.load_code(rest))
            elif command in ("step", "s"):
                print(self.session.step(int(rest) if rest else 1))
            elif command in ("run", "r"):
                print(self.session.run(int(rest) if rest else self.session.config.step_limit))
            elif command == "input":
                print(self.session.add_input(_unescape(rest)))
            elif command == "state":
                print(self.session.get_state(int(rest) if rest else None))
            elif command == "show":
                print(render_state(self.session, self.show_memory_range))
            elif command == "output":
                print(_printable(self.session.read_output()))
            elif command == "reset":
                self.session.engine.reset()
                print("Engine reset.")
            elif command == "help":
                print(HELP)
            else:
                print(f"⚠️ Unknown command '{command}' (try 'help')")
        except ValueError as e:
            print(f"❌ {e}")
        return True

    def loop(self) -> None:
        print("🐛 BRAINFUCK DEBUGGER")
        print("Enter 'help' for commands, 'quit' to exit\n")
        while True:
            try:
                line = input("(bf) ")
            except EOFError:
                print()
                break
            if not self.execute(line):
                break


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r") as f:
        return f.read()


def _printable(text: str) -> str:
    """Escape what the terminal encoding cannot show (lone surrogates and the like)."""
    encoding = getattr(sys.stdout, "encoding", None) or "utf-8"
    return text.encode(encoding, "backslashreplace").decode(encoding)


def _add_engine_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", default=None, help="YAML file with engine settings")
    p.add_argument("--tape-size", type=int, default=None, help="Number of memory cells (default: 30000)")
    p.add_argument("--min", dest="min_value", type=int, default=None, help="Minimum cell value")
    p.add_argument("--max", dest="max_value", type=int, default=None, help="Maximum cell value")
    p.add_argument("--trace", action="store_true", default=None, help="Print every executed instruction")
    p.add_argument("--input", default="", help="Initial input (\\n escapes allowed)")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Resumable Brainfuck engine and step debugger")
    sub = ap.add_subparsers(dest="command", required=True)

    run_p = sub.add_parser("run", help="Run a program and print its output")
    run_p.add_argument("file", help="Source file ('-' for stdin)")
    run_p.add_argument("--limit", type=int, default=None, help="Stop after this many instructions")
    _add_engine_options(run_p)

    debug_p = sub.add_parser("debug", help="Step through a program interactively")
    debug_p.add_argument("file", nargs="?", default=None, help="Source file to load on start")
    debug_p.add_argument("--window", type=int, default=10, help="Memory cells shown by 'show'")
    _add_engine_options(debug_p)
    return ap


def _resolve(args: argparse.Namespace) -> EngineConfig:
    return resolve_config(
        args.config,
        tape_size=args.tape_size,
        min_value=args.min_value,
        max_value=args.max_value,
        trace=args.trace,
        step_limit=getattr(args, "limit", None),
    )


def cmd_run(args: argparse.Namespace, config: EngineConfig) -> int:
    try:
        source = _read_source(args.file)
    except OSError as e:
        print(f"❌ Cannot read {args.file}: {e}", file=sys.stderr)
        return EXIT_BAD_CONFIG

    session = DebugSession(config)
    reply = session.load_code(source, _unescape(args.input))
    if reply.startswith("Parser Error"):
        print(f"❌ {reply}", file=sys.stderr)
        return EXIT_PROGRAM_ERROR

    status = session.engine.run(config.step_limit)
    sys.stdout.write(_printable(session.read_output()))
    sys.stdout.flush()

    state = session.engine.get_state(window_radius=0)
    if status is ExecutionStatus.FINISHED:
        return EXIT_FINISHED
    if status.is_terminal:
        print(f"\n❌ {status.value} at instruction {state.instruction_pointer} "
              f"(cell[{state.data_pointer}] = {state.current_cell})", file=sys.stderr)
        return EXIT_PROGRAM_ERROR
    print(f"\n⚠️ Paused with status {status.value} after {state.total_steps} steps", file=sys.stderr)
    return EXIT_PAUSED


def cmd_debug(args: argparse.Namespace, config: EngineConfig) -> int:
    session = DebugSession(config)
    if args.file:
        try:
            source = _read_source(args.file)
        except OSError as e:
            print(f"❌ Cannot read {args.file}: {e}", file=sys.stderr)
            return EXIT_BAD_CONFIG
        print(session.load_code(source, _unescape(args.input)))
    DebuggerShell(session, show_memory_range=args.window).loop()
    return EXIT_FINISHED


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    try:
        config = _resolve(args)
    except (OSError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_BAD_CONFIG

    if args.command == "run":
        return cmd_run(args, config)
    return cmd_debug(args, config)


if __name__ == "__main__":
    sys.exit(main())
