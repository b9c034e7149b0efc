"""
Read the build-time configuration of a C driver file.

A driver is a small C translation unit whose main() calls one of the
generator entry points. The call left uncommented picks the mode and a
#define of the count macro sets the iterative length:

    #define Fibonacci_num 10

    int main()
    {
        EXAMPLE0();
        // EXAMPLE1(0, 1);
        return 0;
    }

Supported:
  - EXAMPLE0() / EXAMPLE0(count): iterative run
  - EXAMPLE1(a, b): recursive run seeded with (a, b)
  - integer constants (decimal, hex, octal, u/l suffixes), casts of them,
    and names #defined to integers as call arguments
"""

import logging
import re

from pycparser import c_ast, c_parser

from fibregs.config import ITERATIVE, RECURSIVE, RunConfig

logger = logging.getLogger(__name__)

COUNT_MACRO = "Fibonacci_num"

# entry point name -> (mode, accepted argument counts)
GENERATOR_CALLS = {
    "EXAMPLE0": (ITERATIVE, (0, 1)),
    "EXAMPLE1": (RECURSIVE, (2,)),
}

# Stand-ins for <stdint.h>, since the source never goes through cpp. Kept on
# one line so parser line numbers still match the file.
STDINT_TYPEDEFS = " ".join([
    "typedef unsigned char uint8_t;",
    "typedef signed char int8_t;",
    "typedef unsigned short uint16_t;",
    "typedef short int16_t;",
    "typedef unsigned int uint32_t;",
    "typedef int int32_t;",
]) + " "

COMMENT_RE = re.compile(
    r'//[^\n]*|/\*.*?\*/|"(?:\\.|[^\\"])*"|\'(?:\\.|[^\\\'])*\'',
    re.DOTALL,
)
DEFINE_RE = re.compile(r"^\s*#\s*define\s+(\w+)\s+(\S.*?)\s*$")


class DriverError(RuntimeError):
    pass


def strip_comments(source):
    """Blank out C comments, leaving string and char literals alone."""
    def replace(match):
        text = match.group(0)
        if text.startswith("/"):
            # Keep newlines so parser line numbers still match the file.
            return " " + "\n" * text.count("\n")
        return text
    return COMMENT_RE.sub(replace, source)


def parse_int_literal(text):
    """Parse a C integer literal such as 10, 0x0A, 012 or 10u."""
    literal = text.rstrip("uUlL")
    try:
        if literal.lower().startswith("0x"):
            return int(literal, 16)
        if len(literal) > 1 and literal.startswith("0"):
            return int(literal, 8)
        return int(literal, 10)
    except ValueError:
        raise DriverError(f"Not an integer constant: {text}") from None


def preprocess(source):
    """
    Collect integer #defines and drop every preprocessor line.

    Returns (code, defines). Lines are replaced rather than removed so the
    parser still reports the original line numbers.
    """
    defines = {}
    lines = []
    for line in strip_comments(source).splitlines():
        if line.lstrip().startswith("#"):
            match = DEFINE_RE.match(line)
            if match:
                name, value = match.groups()
                # (5) and ( 5 ) both define 5.
                while value.startswith("(") and value.endswith(")"):
                    value = value[1:-1].strip()
                try:
                    defines[name] = parse_int_literal(value)
                except DriverError:
                    if name == COUNT_MACRO:
                        raise DriverError(
                            f"{COUNT_MACRO} must be defined as an integer, got {match.group(2)}"
                        ) from None
                    logger.debug("Ignoring non-integer macro %s", name)
            lines.append("")
        else:
            lines.append(line)
    return "\n".join(lines), defines


class DriverVisitor(c_ast.NodeVisitor):
    """Record generator calls made from inside main()."""

    def __init__(self, defines):
        self.defines = defines
        self.calls = []    # list of (mode, [int args], line)
        self.in_main = False
        self.saw_main = False

    def visit_FuncDef(self, node):
        # Bodies of other functions are never run by the driver itself.
        if node.decl.name != "main":
            return
        self.saw_main = True
        self.in_main = True
        self.visit(node.body)
        self.in_main = False

    def visit_FuncCall(self, node):
        if not self.in_main:
            return
        if isinstance(node.name, c_ast.ID) and node.name.name in GENERATOR_CALLS:
            name = node.name.name
            mode, arities = GENERATOR_CALLS[name]
            exprs = node.args.exprs if node.args else []
            if len(exprs) not in arities:
                raise DriverError(
                    f"{name} expects {' or '.join(map(str, arities))} arguments, got {len(exprs)}"
                )
            args = [self.evaluate(expr) for expr in exprs]
            self.calls.append((mode, args, node.coord.line if node.coord else None))
        else:
            self.generic_visit(node)

    def evaluate(self, node):
        if isinstance(node, c_ast.Constant):
            if not node.type.endswith("int"):
                raise DriverError(f"Only integer constants are supported, got {node.value}")
            return parse_int_literal(node.value)
        if isinstance(node, c_ast.ID):
            if node.name not in self.defines:
                raise DriverError(f"Undefined macro {node.name}")
            return self.defines[node.name]
        if isinstance(node, c_ast.Cast):
            return self.evaluate(node.expr)
        raise DriverError(f"Unsupported argument expression {type(node).__name__}")

    def generic_visit(self, node):
        for c_name, c in node.children():
            self.visit(c)


def parse_driver(source, filename="<driver>"):
    """Return the RunConfig selected by a C driver source string."""
    code, defines = preprocess(source)
    parser = c_parser.CParser()
    try:
        ast = parser.parse(STDINT_TYPEDEFS + code, filename=filename)
    except c_parser.ParseError as exc:
        raise DriverError(f"Cannot parse {filename}: {exc}") from exc

    visitor = DriverVisitor(defines)
    visitor.visit(ast)
    if not visitor.saw_main:
        raise DriverError(f"{filename} has no main() function")

    count = defines.get(COUNT_MACRO)
    if len(visitor.calls) > 1:
        lines = ", ".join(str(line) for _, _, line in visitor.calls)
        raise DriverError(f"main() in {filename} calls more than one generator (lines {lines})")

    if not visitor.calls:
        logger.info("No generator call in %s, using the iterative default", filename)
        config = RunConfig()
    else:
        mode, args, _ = visitor.calls[0]
        if mode == ITERATIVE:
            config = RunConfig(mode=ITERATIVE)
            if args:
                count = args[0]
        else:
            config = RunConfig(mode=RECURSIVE, seed=(args[0], args[1]))
    if count is not None:
        config = config.replace(count=count)
    logger.debug("Driver %s selected %s", filename, config)
    return config


def load_driver(path):
    """Read a driver file from disk and return its RunConfig."""
    try:
        with open(path, "r") as f:
            source = f.read()
    except OSError as exc:
        raise DriverError(f"Cannot read driver {path}: {exc}") from exc
    return parse_driver(source, filename=str(path))
