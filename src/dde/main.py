import logging
import sys
from .builtins import format_value
from .errors import DdeError
from .evaluator import Evaluator
from .lexer import print_tokens, tokenize
from .parser import parse

log = logging.getLogger("dde")

def read_input(argv):
    if len(argv) == 2:
        with open(argv[1], "r", encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()

def usage():
    print("Usage:")
    print("  dde lex < input.dde")
    print("  dde parse < input.dde")
    print("  dde run < input.dde")
    print("  dde repl")
    print("  or:")
    print("  dde lex file.dde")
    print("  dde parse file.dde")
    print("  dde run file.dde")
    print("  add --debug to log each stage")

def fail(message) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1

def repl() -> int:
    evaluator = Evaluator()
    while True:
        try:
            line = input(">> ")
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        try:
            result = evaluator.run(parse(tokenize(line)))
        except DdeError as e:
            print(f"Error: {e}", file=sys.stderr)
            continue
        if result is not None:
            print(format_value(result))

def run(argv) -> int:
    debug = "--debug" in argv
    argv = [a for a in argv if a != "--debug"]
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s] %(message)s")

    if len(argv) < 2 or len(argv) > 3:
        usage()
        return 1

    mode = argv[1].lower()
    if mode == "repl":
        return repl()
    if mode not in ("lex", "parse", "run"):
        usage()
        return 1

    source = argv[2] if len(argv) == 3 else "<stdin>"
    try:
        data = read_input(argv[1:])
    except FileNotFoundError:
        return fail(f"file '{source}' not found")
    except UnicodeDecodeError:
        return fail(f"file '{source}' is not valid UTF-8")
    except OSError as e:
        return fail(f"cannot read '{source}': {e.strerror}")

    try:
        tokens = tokenize(data)
        log.debug("lexed %d tokens", len(tokens))
        if mode == "lex":
            print_tokens(tokens)
            return 0

        program = parse(tokens)
        log.debug("parsed %d statements", len(program))
        if mode == "parse":
            for st in program:
                print(st)
            return 0

        evaluator = Evaluator()
        result = evaluator.run(program)
    except DdeError as e:
        return fail(e)

    log.debug("final environment: %r", evaluator.environment)
    if result is not None:
        print(format_value(result))
    return 0

def main():
    sys.exit(run(sys.argv))
