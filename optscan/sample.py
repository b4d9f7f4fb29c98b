"""
optscan sample program.

Parses its command line against five options and reports what it found:

    -a, --aaa         no value
    -b, --bbb VALUE   required value
    -c, --ccc[=VALUE] optional value (attached only)
    -d                no value
        --eee         no value

Recognized options are printed to stdout as "option NAME" or
"option NAME with arg VALUE". Unrecognized options and value mismatches are
reported as faults on stderr without stopping the scan. Positional arguments
are listed last.

Run it with `python -m optscan -a -bfoo --ccc=1 -- -d rest`.
"""
import enum
import shlex
import sys

from rich.console import Console
from rich.text import Text

from .descriptors import Descriptor, Registry, Requirement
from .faults import diagnose, trigger
from .scanner import getopt
from .utils import Unset

console = Console(highlight=False, soft_wrap=True)


class SampleOption(enum.Enum):
    A = enum.auto()
    B = enum.auto()
    C = enum.auto()
    D = enum.auto()
    E = enum.auto()


registry = Registry((
    Descriptor(SampleOption.A, "a", "aaa", Requirement.NONE),
    Descriptor(SampleOption.B, "b", "bbb", Requirement.REQUIRED),
    Descriptor(SampleOption.C, "c", "ccc", Requirement.OPTIONAL),
    Descriptor(SampleOption.D, "d", None, Requirement.NONE),
    Descriptor(SampleOption.E, None, "eee", Requirement.NONE),
))


def _arguments(prompt, /):
    """
    build the full argument vector from a prompt.

    - Unset: sys.argv as-is.
    - str: split with shlex.split, program name prepended.
    - Iterable[str]: used as the full vector (element 0 is the program name).
    """
    if prompt is Unset:
        return list(sys.argv)
    if isinstance(prompt, str):
        return [sys.argv[0] if sys.argv and sys.argv[0] else "optscan", *shlex.split(prompt)]
    try:
        return list(prompt)
    except TypeError:
        raise TypeError("main() argument must be a string or an iterable of strings") from None


def report(parsed, /):
    """print one occurrence, or trigger its fault without stopping the scan."""
    if (fault := diagnose(parsed)) is not None:
        return trigger(fault, shell=True, deferred=True)
    if parsed.value is not None:
        console.print(Text("option %s with arg %s" % (parsed.name, parsed.value)))
    else:
        console.print(Text("option %s" % parsed.name))


def main(prompt=Unset, /):
    positionals = getopt(_arguments(prompt), registry, report)
    if positionals:
        console.print(Text("non-option ARGV-elements:" + "".join(" " + argument for argument in positionals)))
    return 0


__all__ = (
    "SampleOption",
    "registry",
    "report",
    "main",
)
