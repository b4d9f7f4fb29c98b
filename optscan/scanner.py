"""
optscan scanner: drive the matchers over an argument vector.

What this module provides
- ArgumentQueue: index cursor over the not-yet-consumed arguments.
- Scanner: iterable form of the scan; yields one Parsed per option occurrence
  and collects positional arguments as it goes.
- getopt(arguments, descriptors, callback): the one-call form; invokes the
  callback per occurrence and returns the positional arguments.

Scan loop (per front token)
1. long matcher ("--name[=value]");
2. short matcher ("-xyz");
3. the end-of-options marker "--": every remaining token becomes positional,
   verbatim, and the scan stops (the marker itself is dropped);
4. anything else (including a lone "-") is positional.

Element 0 of the argument vector is the program name and is skipped. The
scan never fails on user input: unknown options, unexpected values and
missing values are reported through Parsed (see optscan.faults to classify
them).

Quick example:
    >>> from optscan import Descriptor, Requirement, getopt
    >>> seen = []
    >>> getopt(["prog", "-o", "out", "file"], [Descriptor("out", "o", requirement="required")], seen.append)
    ['file']
    >>> seen
    [Parsed(name='o', value='out', descriptor=descriptor(identity='out', short='o', long=None, requirement=Requirement.REQUIRED))]
"""
from collections.abc import Iterable

from .descriptors import Registry, Parsed
from .matchers import LONG_PREFIX, SHORT_PREFIX, match_long, match_short

END_MARKER = "--"


class ArgumentQueue:
    """
    cursor over an immutable tuple of arguments.

    popping advances the cursor; nothing is ever removed from the tuple.
    """
    __slots__ = ("_arguments", "_cursor")

    def __init__(self, arguments, /):
        self._arguments = tuple(arguments)
        self._cursor = 0

    def __bool__(self):
        return self._cursor < len(self._arguments)

    def __len__(self):
        return len(self._arguments) - self._cursor

    def __repr__(self):
        return f"argument-queue({list(self._arguments[self._cursor:])!r})"

    def peek(self):
        """return the front argument without consuming it, or None when empty."""
        if self._cursor < len(self._arguments):
            return self._arguments[self._cursor]
        return None

    def pop(self):
        """consume and return the front argument, or None when empty."""
        if self._cursor < len(self._arguments):
            argument = self._arguments[self._cursor]
            self._cursor += 1
            return argument
        return None

    def drain(self):
        """consume and return every remaining argument, in order."""
        rest = self._arguments[self._cursor:]
        self._cursor = len(self._arguments)
        return rest


def _sanitize_arguments(name, arguments, /):
    if isinstance(arguments, str) or not isinstance(arguments, Iterable):
        raise TypeError(f"{name}() arguments must be an iterable of strings")
    arguments = tuple(arguments)
    for argument in arguments:
        if not isinstance(argument, str):
            raise TypeError(f"{name}() arguments must be strings, not {type(argument).__name__!r}")
    return arguments


def _resolve(match, registry, /, prefix=None):
    if match.index is None:
        return Parsed(match.name, match.value, None, prefix=prefix)
    # not an assert statement: must also hold under python -O
    if not 0 <= match.index < len(registry):
        raise AssertionError("descriptor index %r outside of the registry" % match.index)
    return Parsed(match.name, match.value, registry[match.index], prefix=prefix)


class Scanner[_Id]:
    """
    single-use, iterable scan over an argument vector.

    iterating yields Parsed records in command-line order. once iteration is
    exhausted, `positionals` holds the non-option arguments in their original
    order (including everything after "--").

    usage
        scanner = Scanner(sys.argv, registry)
        for parsed in scanner:
            ...
        rest = scanner.positionals
    """

    def __init__(self, arguments, descriptors, /):
        arguments = _sanitize_arguments("scanner", arguments)
        self._registry = descriptors if isinstance(descriptors, Registry) else Registry(descriptors)
        # the program name is never parsed
        self._queue = ArgumentQueue(arguments[1:])
        self._positionals = []
        self._started = False

    @property
    def registry(self):
        return self._registry

    @property
    def positionals(self):
        return list(self._positionals)

    def __iter__(self):
        if self._started:
            raise RuntimeError("scanner can only be iterated once")
        self._started = True
        return self._scan()

    def _scan(self):
        queue = self._queue
        registry = self._registry
        while queue:
            if (match := match_long(queue, registry)) is not None:
                yield _resolve(match, registry, LONG_PREFIX)
            elif (matches := match_short(queue, registry)) is not None:
                for match in matches:
                    yield _resolve(match, registry, SHORT_PREFIX)
            elif (argument := queue.pop()) == END_MARKER:
                self._positionals.extend(queue.drain())
                break
            else:
                self._positionals.append(argument)


def getopt(arguments, descriptors, callback, /):
    """
    parse `arguments` against `descriptors`, reporting options to `callback`.

    parameters
    - arguments: the full argument vector (element 0 is the program name).
    - descriptors: a Registry or any iterable of Descriptor.
    - callback: called once per option occurrence with a Parsed record,
      synchronously and in command-line order. its return value is ignored.

    returns
    - list[str]: positional arguments, in original order.
    """
    if not callable(callback):
        raise TypeError("getopt() callback must be callable")
    arguments = _sanitize_arguments("getopt", arguments)
    if len(arguments) < 2:
        return []

    scanner = Scanner(arguments, descriptors)
    for parsed in scanner:
        callback(parsed)
    return scanner.positionals


__all__ = (
    "END_MARKER",
    "ArgumentQueue",
    "Scanner",
    "getopt",
)
