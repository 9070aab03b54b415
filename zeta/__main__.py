"""CLI entry point for the Zeta interpreter.

Usage:
    python -m zeta [-v|-vv|-vvv|-vvvv] [program_file]
    python -m zeta --emit-ast <program_file>
    python -m zeta [-v...] --ast <ast_json_file>
    python -m zeta [-v...] --lark <program_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .zeta file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --lark        Parse with the grammar-based front end instead of the
                recursive-descent parser

Without a program file the interpreter starts an interactive session:
each input line is evaluated as it is entered, `exit` ends the session.
Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Any error prints a diagnostic to stderr and
exits with status 1.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import program_from_obj, program_to_obj
from .errors import ZetaError
from .grammar import parse_with_lark
from .interpreter import Interpreter, parse_program
from .lexer import Lexer

PROMPT = '>>> '


def fail(message: str):
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def existing_file(path: str) -> Path:
    file = Path(path)
    if not file.exists():
        fail(f"file {file} not found")
    return file


def repl(interpreter: Interpreter):
    """Read-eval-print loop over standard input."""
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            break
        if line == '':
            continue
        if line == 'exit':
            print('Exiting...')
            break
        interpreter.run(interpreter.make_parser(Lexer([line])))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Zeta language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='ZETA_FILE', help='emit AST JSON for the given .zeta file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--lark', metavar='ZETA_FILE', help='parse the given .zeta file with the Lark grammar and run it')
    parser.add_argument('program', nargs='?', help='Zeta program file (.zeta) to execute; omit for an interactive session')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = existing_file(args.emit_ast)
        source = program_file.read_text(encoding='utf-8')
        try:
            compounds = parse_program(source)
        except ZetaError as e:
            fail(str(e))
        obj = program_to_obj(compounds)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    interpreter = Interpreter(debug_level=args.v)
    try:
        # Execute from AST JSON
        if args.ast:
            ast_path = existing_file(args.ast)
            try:
                with open(ast_path, 'r', encoding='utf-8') as f:
                    compounds = program_from_obj(json.load(f))
            except (ValueError, KeyError, TypeError) as e:
                fail(f"invalid AST file {ast_path}: {e}")
            interpreter.execute_program(compounds)
            return

        if args.lark:
            program_file = existing_file(args.lark)
            source = program_file.read_text(encoding='utf-8')
            interpreter.execute_program(parse_with_lark(source))
            return

        if not args.program:
            repl(interpreter)
            return

        program_file = existing_file(args.program)
        with open(program_file, 'r', encoding='utf-8') as f:
            interpreter.run(interpreter.make_parser(Lexer(f)))
    except ZetaError as e:
        sys.stdout.flush()
        fail(str(e))
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
